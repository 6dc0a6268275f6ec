"""Price mutator — simulated price scraping.

Every active station gets one random delta in [-variation, +variation] that is
applied to all of its fuel prices (the draw is shared across fuel types), and
each price is clamped to its fuel type's floor.
"""

import random
from datetime import datetime
from typing import Callable, Optional

import structlog
from sqlalchemy.orm import Session

from fuel_tracker.core.timeutils import utcnow
from fuel_tracker.domain.constants import FUEL_PRICE_FLOORS, FuelType
from fuel_tracker.domain.models.station import Station
from fuel_tracker.domain.repositories.station_repository import StationRepository
from fuel_tracker.domain.schemas.pipeline import MutationResult

logger = structlog.get_logger(__name__)

Draw = Callable[[], float]


def uniform_draw(variation: float) -> Draw:
    """Symmetric uniform perturbation source."""
    def draw() -> float:
        return random.uniform(-variation, variation)
    return draw


def perturb_station(
    station: Station,
    delta: float,
    now: datetime,
    floors: dict[FuelType, float] = FUEL_PRICE_FLOORS,
) -> None:
    """Apply one delta to every priced fuel type of a station, clamped to the floors."""
    for fuel_type, floor in floors.items():
        record = station.fuel_types.get(fuel_type.value)
        if record is None or not record.price:
            continue
        record.price = max(floor, record.price + delta)
        record.last_updated = now

    station.last_scraped = now


def mutate_prices(
    db: Session,
    repo: StationRepository,
    draw: Draw,
    now: Optional[datetime] = None,
) -> MutationResult:
    """Perturb and persist every active station, one commit per station.

    A failing station (including a version conflict with a concurrent writer)
    is rolled back, logged and counted; the remaining stations still run.
    """
    now = now or utcnow()
    result = MutationResult()

    stations = [(station.id, station) for station in repo.list_active()]
    for station_id, station in stations:
        try:
            perturb_station(station, draw(), now)
            repo.save(station)
        except Exception as e:
            db.rollback()
            result.stations_failed += 1
            logger.error("Station price update failed", station_id=station_id, error=str(e))
            continue
        result.stations_updated += 1

    logger.info(
        "Updated station prices",
        updated=result.stations_updated,
        failed=result.stations_failed,
    )
    return result
