from conftest import make_station
from fuel_tracker.application.services.auth_service import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    ensure_admin,
)
from fuel_tracker.application.services.sample_data import SAMPLE_STATIONS, seed_sample_stations
from fuel_tracker.domain.models.station import Station
from fuel_tracker.domain.models.user import User
from fuel_tracker.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def test_seed_fills_an_empty_table(db):
    created = seed_sample_stations(db)

    assert created == len(SAMPLE_STATIONS)
    stations = db.query(Station).order_by(Station.id).all()
    assert [s.name for s in stations] == [data["name"] for data in SAMPLE_STATIONS]
    assert stations[0].price_for("gasoline95") == 6.89
    assert all(s.is_active for s in stations)


def test_seed_leaves_existing_stations_alone(db):
    make_station(db)

    assert seed_sample_stations(db) == 0
    assert db.query(Station).count() == 1


def test_ensure_admin_is_idempotent(db):
    users = SQLAlchemyUserRepository(db, User)
    admin = ensure_admin(users, "Admin@FuelTracker.io", "admin-pass")
    again = ensure_admin(users, "admin@fueltracker.io", "other-pass")

    assert admin.role == "admin"
    assert again.id == admin.id
    assert authenticate_user(users, "admin@fueltracker.io", "admin-pass") is not None


def test_ensure_admin_without_credentials_does_nothing(db):
    assert ensure_admin(SQLAlchemyUserRepository(db, User), "", "") is None


def test_token_round_trip():
    token = create_access_token({"sub": "dana@fueltracker.io", "role": "user"})

    assert decode_access_token(token)["sub"] == "dana@fueltracker.io"
    assert decode_access_token(token + "x") is None
