"""Fixed vocabularies shared by models, schemas and the price pipeline."""

from enum import Enum


class FuelType(str, Enum):
    GASOLINE_95 = "gasoline95"
    GASOLINE_98 = "gasoline98"
    DIESEL = "diesel"


class Brand(str, Enum):
    PAZ = "Paz"
    SONOL = "Sonol"
    DELEK = "Delek"
    DOR_ALON = "Dor Alon"
    TENE = "Tene"
    OTHER = "Other"


class Weekday(str, Enum):
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"


# Minimum price (NIS) the price mutator will let a fuel type drift down to.
# Direct API writes are not clamped.
FUEL_PRICE_FLOORS: dict[FuelType, float] = {
    FuelType.GASOLINE_95: 6.0,
    FuelType.GASOLINE_98: 6.2,
    FuelType.DIESEL: 5.8,
}

# Fuel type used to order station listings.
DEFAULT_SORT_FUEL = FuelType.GASOLINE_95
