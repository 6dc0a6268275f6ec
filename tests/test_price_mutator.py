from datetime import datetime, timezone

import pytest

from conftest import PAST, fixed_draw, make_station
from fuel_tracker.application.services.price_mutator import mutate_prices, perturb_station, uniform_draw
from fuel_tracker.core.timeutils import as_utc
from fuel_tracker.domain.constants import FUEL_PRICE_FLOORS, FuelType
from fuel_tracker.domain.models.station import Station
from fuel_tracker.infrastructure.repositories.station_repository import SQLAlchemyStationRepository

NOW = datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def repo(db):
    return SQLAlchemyStationRepository(db, Station)


def test_price_clamps_to_floor(db, repo):
    station = make_station(db, prices={"gasoline95": 6.85})

    result = mutate_prices(db, repo, fixed_draw(-1.0), now=NOW)

    db.expire_all()
    assert result.stations_updated == 1
    assert station.price_for("gasoline95") == pytest.approx(6.0)


def test_same_draw_applies_to_every_fuel_type(db, repo):
    # Known quirk: one perturbation per station, not per fuel type
    station = make_station(db, prices={"gasoline95": 6.89, "gasoline98": 7.15, "diesel": 6.45})

    mutate_prices(db, repo, fixed_draw(0.07), now=NOW)

    db.expire_all()
    assert station.price_for("gasoline95") == pytest.approx(6.96)
    assert station.price_for("gasoline98") == pytest.approx(7.22)
    assert station.price_for("diesel") == pytest.approx(6.52)


def test_each_fuel_type_uses_its_own_floor(db, repo):
    station = make_station(db, prices={"gasoline95": 6.05, "gasoline98": 6.25, "diesel": 5.85})

    mutate_prices(db, repo, fixed_draw(-0.10), now=NOW)

    db.expire_all()
    assert station.price_for("gasoline95") == pytest.approx(6.0)
    assert station.price_for("gasoline98") == pytest.approx(6.2)
    assert station.price_for("diesel") == pytest.approx(5.8)


def test_prices_stay_above_floor_for_random_draws(db, repo):
    stations = [
        make_station(db, name=f"Station {i}", prices={"gasoline95": 6.0 + i * 0.03, "gasoline98": 6.2, "diesel": 5.81})
        for i in range(10)
    ]
    draw = uniform_draw(0.10)

    for _ in range(5):
        mutate_prices(db, repo, draw, now=NOW)

    db.expire_all()
    for station in stations:
        for fuel_type in FuelType:
            assert station.price_for(fuel_type.value) >= FUEL_PRICE_FLOORS[fuel_type]


def test_timestamps_advance(db, repo):
    station = make_station(db, updated_at=PAST)

    mutate_prices(db, repo, fixed_draw(0.01), now=NOW)

    db.expire_all()
    assert as_utc(station.last_scraped) == NOW
    assert as_utc(station.last_scraped) > PAST
    for record in station.fuel_types.values():
        assert as_utc(record.last_updated) == NOW


def test_missing_fuel_types_are_skipped(db, repo):
    station = make_station(db, prices={"diesel": 6.40})

    mutate_prices(db, repo, fixed_draw(-0.05), now=NOW)

    db.expire_all()
    assert set(station.fuel_types) == {"diesel"}
    assert station.price_for("diesel") == pytest.approx(6.35)


def test_inactive_stations_are_not_touched(db, repo):
    active = make_station(db, name="Active")
    inactive = make_station(db, name="Closed", is_active=False)

    result = mutate_prices(db, repo, fixed_draw(0.05), now=NOW)

    db.expire_all()
    assert result.stations_updated == 1
    assert as_utc(active.last_scraped) == NOW
    assert as_utc(inactive.last_scraped) == PAST
    assert inactive.price_for("gasoline95") == pytest.approx(6.89)


def test_two_passes_apply_two_perturbations(db, repo):
    station = make_station(db, prices={"gasoline95": 6.89})

    mutate_prices(db, repo, fixed_draw(0.04), now=NOW)
    mutate_prices(db, repo, fixed_draw(-0.02), now=NOW)

    db.expire_all()
    assert station.price_for("gasoline95") == pytest.approx(6.91)


def test_failing_station_does_not_abort_the_rest(db, repo):
    first = make_station(db, name="First", prices={"gasoline95": 6.50})
    second = make_station(db, name="Second", prices={"gasoline95": 6.50})
    third = make_station(db, name="Third", prices={"gasoline95": 6.50})

    values = iter([0.05, RuntimeError("scraper exploded"), 0.05])

    def draw():
        value = next(values)
        if isinstance(value, Exception):
            raise value
        return value

    result = mutate_prices(db, repo, draw, now=NOW)

    db.expire_all()
    assert result.stations_updated == 2
    assert result.stations_failed == 1
    assert first.price_for("gasoline95") == pytest.approx(6.55)
    assert second.price_for("gasoline95") == pytest.approx(6.50)
    assert as_utc(second.last_scraped) == PAST
    assert third.price_for("gasoline95") == pytest.approx(6.55)


def test_version_bumps_on_each_write(db, repo):
    station = make_station(db)
    initial = station.version

    mutate_prices(db, repo, fixed_draw(0.01), now=NOW)

    db.expire_all()
    assert station.version == initial + 1


def test_perturb_station_ignores_zero_price(db):
    station = make_station(db, prices={"gasoline95": 0.0, "diesel": 6.40})

    perturb_station(station, 0.05, NOW)

    assert station.price_for("gasoline95") == 0.0
    assert station.price_for("diesel") == pytest.approx(6.45)
