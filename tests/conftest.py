"""Shared fixtures: in-memory database, recording mail transport, API client."""

import os

# Must be set before fuel_tracker.config is imported (settings are cached)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fuel_tracker.application.services.auth_service import create_access_token
from fuel_tracker.application.services.notifier import Notifier
from fuel_tracker.application.services.price_pipeline import PricePipeline
from fuel_tracker.domain.models.station import FuelPrice, Station
from fuel_tracker.domain.models.user import PriceAlert, User
from fuel_tracker.infrastructure.database import Base, get_db
from fuel_tracker.infrastructure.mail_transport import MailDeliveryError, MailTransport
from fuel_tracker.main import app

PAST = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class RecordingTransport(MailTransport):
    """Mail transport that keeps messages in memory instead of talking SMTP."""

    def __init__(self, fail: bool = False):
        super().__init__(host="localhost", port=25, username="alerts@fueltracker.io", password="secret")
        self.fail = fail
        self.sent: list[dict] = []

    async def send_mail(self, to: str, subject: str, html: str) -> None:
        if self.fail:
            raise MailDeliveryError(f"Failed to send mail to {to}: connection refused")
        self.sent.append({"to": to, "subject": subject, "html": html})


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def notifier(transport):
    return Notifier(transport)


@pytest.fixture
def client(session_factory, notifier):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.pipeline = PricePipeline(session_factory, notifier, draw=lambda: 0.0)
    # No context manager: the lifespan (scheduler, seeding) stays off
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_station(
    db,
    name: str = "Paz Tel Aviv Center",
    prices: Optional[dict] = None,
    city: str = "Tel Aviv",
    brand: str = "Paz",
    lat: float = 32.0853,
    lng: float = 34.7818,
    is_active: bool = True,
    updated_at: datetime = PAST,
) -> Station:
    if prices is None:
        prices = {"gasoline95": 6.89, "gasoline98": 7.15, "diesel": 6.45}
    station = Station(
        name=name,
        address=f"{name} address",
        city=city,
        latitude=lat,
        longitude=lng,
        brand=brand,
        is_active=is_active,
        opening_hours={},
        services=[],
        last_scraped=updated_at,
    )
    for fuel_type, price in prices.items():
        station.fuel_types[fuel_type] = FuelPrice(fuel_type=fuel_type, price=price, last_updated=updated_at)
    db.add(station)
    db.commit()
    return station


def make_user(
    db,
    email: str = "dana@fueltracker.io",
    first_name: str = "Dana",
    role: str = "user",
    email_notifications: bool = True,
) -> User:
    user = User(
        email=email,
        password_hash="not-a-real-hash",
        first_name=first_name,
        last_name="Levi",
        role=role,
        email_notifications=email_notifications,
    )
    db.add(user)
    db.commit()
    return user


def add_alert(
    db,
    user: User,
    station: Station,
    fuel_type: str = "diesel",
    target_price: float = 6.30,
    is_active: bool = True,
    last_triggered: Optional[datetime] = None,
) -> PriceAlert:
    alert = PriceAlert(
        station_id=station.id,
        fuel_type=fuel_type,
        target_price=target_price,
        is_active=is_active,
        last_triggered=last_triggered,
    )
    user.price_alerts.append(alert)
    db.commit()
    return alert


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


def fixed_draw(*values: float):
    """Draw source returning the given perturbations in order."""
    remaining = list(values)

    def draw() -> float:
        return remaining.pop(0)

    return draw


def hours_ago(now: datetime, hours: float) -> datetime:
    return now - timedelta(hours=hours)
