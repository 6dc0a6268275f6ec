"""
API Dependencies.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from fuel_tracker.application.services.price_pipeline import PricePipeline
from fuel_tracker.domain.models.station import Station
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.repositories.station_repository import StationRepository
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.infrastructure.database import get_db
from fuel_tracker.infrastructure.repositories.station_repository import SQLAlchemyStationRepository
from fuel_tracker.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_station_repository(db: Session = Depends(get_db)) -> StationRepository:
    """Get station repository instance."""
    return SQLAlchemyStationRepository(db, Station)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_pipeline(request: Request) -> PricePipeline:
    """The price pipeline built at startup."""
    return request.app.state.pipeline
