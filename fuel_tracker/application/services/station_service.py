"""Station service — listing, search, creation and direct price updates."""

from typing import List

from sqlalchemy.orm.exc import StaleDataError

from fuel_tracker.core.exceptions import ConflictException, EntityNotFoundException
from fuel_tracker.core.timeutils import utcnow
from fuel_tracker.domain.models.station import FuelPrice, Station
from fuel_tracker.domain.repositories.station_repository import StationRepository
from fuel_tracker.domain.schemas.station import StationCreate, StationFilter, StationPriceUpdate

SEARCH_LIMIT = 20


def list_stations(repo: StationRepository, filters: StationFilter) -> List[Station]:
    return repo.find(filters)


def search_stations(repo: StationRepository, query: str) -> List[Station]:
    return repo.search(query, limit=SEARCH_LIMIT)


def get_station(repo: StationRepository, station_id: int) -> Station:
    station = repo.get_by_id(station_id)
    if station is None:
        raise EntityNotFoundException("Station not found", {"station_id": station_id})
    return station


def create_station(repo: StationRepository, body: StationCreate) -> Station:
    now = utcnow()
    station = Station(
        name=body.name,
        address=body.address,
        city=body.city,
        latitude=body.coordinates.lat,
        longitude=body.coordinates.lng,
        brand=body.brand.value,
        is_active=body.is_active,
        opening_hours={day.value: hours for day, hours in body.opening_hours.items()},
        services=list(body.services),
        last_scraped=now,
    )
    for fuel_type, entry in body.fuel_types.items():
        station.fuel_types[fuel_type.value] = FuelPrice(
            fuel_type=fuel_type.value, price=entry.price, last_updated=now
        )
    return repo.save(station)


def update_station_prices(repo: StationRepository, station_id: int, body: StationPriceUpdate) -> Station:
    """Merge the supplied fuel prices into the station. Floors are not applied here."""
    station = get_station(repo, station_id)
    now = utcnow()

    for fuel_type, entry in body.fuel_types.items():
        if not entry.price:
            continue
        record = station.fuel_types.get(fuel_type.value)
        if record is None:
            station.fuel_types[fuel_type.value] = FuelPrice(
                fuel_type=fuel_type.value, price=entry.price, last_updated=now
            )
        else:
            record.price = entry.price
            record.last_updated = now

    station.last_scraped = now
    try:
        return repo.save(station)
    except StaleDataError:
        raise ConflictException("Station was updated concurrently, retry the request", {"station_id": station_id})
