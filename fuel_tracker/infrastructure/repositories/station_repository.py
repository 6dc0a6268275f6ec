"""
SQLAlchemy Implementation of Station Repository.
"""

from typing import List

from geopy.distance import geodesic
from sqlalchemy import and_, func, or_
from sqlalchemy.orm import aliased

from fuel_tracker.domain.constants import DEFAULT_SORT_FUEL
from fuel_tracker.domain.models.station import FuelPrice, Station
from fuel_tracker.domain.repositories.station_repository import StationRepository
from fuel_tracker.domain.schemas.station import StationFilter
from fuel_tracker.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyStationRepository(SQLAlchemyRepository[Station], StationRepository):
    """Station repository implementation using SQLAlchemy."""

    def _active(self):
        return self.db.query(Station).filter(Station.is_active.is_(True))

    def list_active(self) -> List[Station]:
        return self._active().order_by(Station.id).all()

    def find(self, filters: StationFilter) -> List[Station]:
        """Get active stations with filtering, sorted by gasoline95 price (stations without it last)."""
        sort_price = aliased(FuelPrice)
        query = self._active().outerjoin(
            sort_price,
            and_(sort_price.station_id == Station.id, sort_price.fuel_type == DEFAULT_SORT_FUEL.value),
        )

        if filters.city:
            query = query.filter(func.lower(Station.city).contains(filters.city.lower(), autoescape=True))
        if filters.brand:
            query = query.filter(Station.brand == filters.brand.value)

        query = query.order_by(sort_price.price.asc().nullslast(), Station.id)

        if not filters.is_geo:
            return query.limit(filters.limit).all()

        origin = (filters.lat, filters.lng)
        nearby = [
            station for station in query.all()
            if geodesic(origin, (station.latitude, station.longitude)).km <= filters.radius
        ]
        return nearby[: filters.limit]

    def search(self, query: str, limit: int = 20) -> List[Station]:
        needle = query.lower()
        return (
            self._active()
            .filter(
                or_(
                    func.lower(Station.name).contains(needle, autoescape=True),
                    func.lower(Station.address).contains(needle, autoescape=True),
                    func.lower(Station.city).contains(needle, autoescape=True),
                )
            )
            .order_by(Station.id)
            .limit(limit)
            .all()
        )
