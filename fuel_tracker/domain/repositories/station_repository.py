"""
Station Repository Interface.
Defines specific data access operations for Stations.
"""

from typing import List

from fuel_tracker.domain.repositories.base import BaseRepository
from fuel_tracker.domain.models.station import Station
from fuel_tracker.domain.schemas.station import StationFilter


class StationRepository(BaseRepository[Station]):
    """Interface for Station-specific operations."""

    def list_active(self) -> List[Station]:
        """All active stations, in id order (price pipeline input)."""
        ...

    def find(self, filters: StationFilter) -> List[Station]:
        """Active stations matching city/brand/radius, cheapest gasoline95 first."""
        ...

    def search(self, query: str, limit: int = 20) -> List[Station]:
        """Active stations whose name, address or city contains the query."""
        ...
