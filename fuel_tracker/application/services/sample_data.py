"""Sample station data — seeded on first startup so the map is not empty."""

import structlog
from sqlalchemy.orm import Session

from fuel_tracker.core.timeutils import utcnow
from fuel_tracker.domain.models.station import FuelPrice, Station

logger = structlog.get_logger(__name__)

SAMPLE_STATIONS = [
    {
        "name": "Paz Tel Aviv Center",
        "address": "Rothschild Blvd 45, Tel Aviv",
        "city": "Tel Aviv",
        "latitude": 32.0853,
        "longitude": 34.7818,
        "brand": "Paz",
        "prices": {"gasoline95": 6.89, "gasoline98": 7.15, "diesel": 6.45},
    },
    {
        "name": "Sonol Jerusalem",
        "address": "King George St 15, Jerusalem",
        "city": "Jerusalem",
        "latitude": 31.7683,
        "longitude": 35.2137,
        "brand": "Sonol",
        "prices": {"gasoline95": 6.95, "gasoline98": 7.25, "diesel": 6.55},
    },
    {
        "name": "Delek Haifa Port",
        "address": "Haifa Port, Haifa",
        "city": "Haifa",
        "latitude": 32.7940,
        "longitude": 35.0048,
        "brand": "Delek",
        "prices": {"gasoline95": 6.75, "gasoline98": 7.05, "diesel": 6.35},
    },
    {
        "name": "Dor Alon Beer Sheva",
        "address": "Ben Gurion Blvd 123, Beer Sheva",
        "city": "Beer Sheva",
        "latitude": 31.2518,
        "longitude": 34.7915,
        "brand": "Dor Alon",
        "prices": {"gasoline95": 6.65, "gasoline98": 6.95, "diesel": 6.25},
    },
    {
        "name": "Tene Netanya",
        "address": "Herzl St 78, Netanya",
        "city": "Netanya",
        "latitude": 32.3215,
        "longitude": 34.8532,
        "brand": "Tene",
        "prices": {"gasoline95": 6.85, "gasoline98": 7.10, "diesel": 6.50},
    },
]


def build_sample_station(data: dict) -> Station:
    now = utcnow()
    fields = {key: value for key, value in data.items() if key != "prices"}
    station = Station(**fields, is_active=True, opening_hours={}, services=[], last_scraped=now)
    for fuel_type, price in data["prices"].items():
        station.fuel_types[fuel_type] = FuelPrice(fuel_type=fuel_type, price=price, last_updated=now)
    return station


def seed_sample_stations(db: Session) -> int:
    """Insert the sample stations when the table is empty. Returns how many were created."""
    try:
        if db.query(Station.id).first() is not None:
            return 0

        logger.info("Initializing sample station data")
        db.add_all(build_sample_station(data) for data in SAMPLE_STATIONS)
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error("Sample data initialization failed", error=str(e))
        return 0

    logger.info("Created sample stations", count=len(SAMPLE_STATIONS))
    return len(SAMPLE_STATIONS)
