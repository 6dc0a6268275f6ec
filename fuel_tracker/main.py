"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fuel_tracker.config import get_settings
from fuel_tracker.infrastructure.database import engine, Base, SessionLocal
from fuel_tracker.core.logging import configure_logging
from fuel_tracker.core.middleware import setup_middleware
from fuel_tracker.core.exceptions import setup_exception_handlers

# Import all models so SQLAlchemy knows about them
from fuel_tracker.domain.models.station import Station, FuelPrice
from fuel_tracker.domain.models.user import User, FavoriteStation, PriceAlert

from fuel_tracker.application.services.auth_service import ensure_admin
from fuel_tracker.application.services.price_pipeline import PricePipeline
from fuel_tracker.application.services.sample_data import seed_sample_stations
from fuel_tracker.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

# Import routers
from fuel_tracker.interfaces.api.auth import router as auth_router
from fuel_tracker.interfaces.api.stations import router as stations_router
from fuel_tracker.interfaces.api.users import router as users_router
from fuel_tracker.interfaces.api.pipeline import router as pipeline_router

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Fuel Tracker API...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only — use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    db = SessionLocal()
    try:
        if settings.SEED_SAMPLE_DATA:
            seed_sample_stations(db)
        if ensure_admin(SQLAlchemyUserRepository(db, User), settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD):
            logger.info("Bootstrap admin available", email=settings.ADMIN_EMAIL)
    finally:
        db.close()

    app.state.pipeline = PricePipeline.from_settings(settings, SessionLocal)

    from fuel_tracker.scheduler.jobs import start_scheduler, stop_scheduler
    if settings.SCHEDULER_ENABLED:
        start_scheduler(app.state.pipeline)

    yield

    stop_scheduler()
    logger.info("Fuel Tracker API stopped")


app = FastAPI(
    title="Fuel Tracker Israel",
    description="Fuel station prices, favorites and price alerts",
    version="1.0.0",
    lifespan=lifespan,
)

# Setup Middleware (Correlation ID, Logging)
setup_middleware(app)

# Error envelope for AppError, validation errors and anything unhandled
setup_exception_handlers(app)

# CORS is added last so it is the outermost middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(stations_router)
app.include_router(users_router)
app.include_router(pipeline_router)


@app.get("/")
def root():
    return {
        "name": "Fuel Tracker Israel",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
