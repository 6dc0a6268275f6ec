"""User service — favorites, price alerts and profile updates."""

from typing import List

from sqlalchemy.orm.exc import StaleDataError

from fuel_tracker.application.services.station_service import get_station
from fuel_tracker.core.exceptions import (
    BusinessRuleViolationException,
    ConflictException,
    EntityNotFoundException,
)
from fuel_tracker.domain.constants import FuelType
from fuel_tracker.domain.models.station import Station
from fuel_tracker.domain.models.user import FavoriteStation, PriceAlert, User
from fuel_tracker.domain.repositories.station_repository import StationRepository
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.domain.schemas.user import PriceAlertCreate, PriceAlertUpdate, ProfileUpdate


def _save(repo: UserRepository, user: User) -> User:
    try:
        return repo.save(user)
    except StaleDataError:
        raise ConflictException("User was updated concurrently, retry the request", {"user_id": user.id})


# Favorites

def list_favorites(user: User) -> List[Station]:
    return [fav.station for fav in user.favorites if fav.station is not None]


def add_favorite(users: UserRepository, stations: StationRepository, user: User, station_id: int) -> User:
    get_station(stations, station_id)

    if station_id in user.favorite_station_ids:
        raise BusinessRuleViolationException("Station already in favorites", {"station_id": station_id})

    user.favorites.append(FavoriteStation(station_id=station_id))
    return _save(users, user)


def remove_favorite(users: UserRepository, user: User, station_id: int) -> User:
    """Remove a favorite; removing one that is not there is a no-op."""
    user.favorites[:] = [fav for fav in user.favorites if fav.station_id != station_id]
    return _save(users, user)


# Price alerts

def get_alert(user: User, alert_id: int) -> PriceAlert:
    for alert in user.price_alerts:
        if alert.id == alert_id:
            return alert
    raise EntityNotFoundException("Alert not found", {"alert_id": alert_id})


def create_alert(users: UserRepository, stations: StationRepository, user: User, body: PriceAlertCreate) -> PriceAlert:
    get_station(stations, body.station_id)

    fuel_type = body.fuel_type.value
    for alert in user.price_alerts:
        if alert.station_id == body.station_id and alert.fuel_type == fuel_type:
            raise BusinessRuleViolationException(
                "Alert already exists for this station and fuel type",
                {"station_id": body.station_id, "fuel_type": fuel_type},
            )

    alert = PriceAlert(
        station_id=body.station_id,
        fuel_type=fuel_type,
        target_price=body.target_price,
        is_active=True,
    )
    user.price_alerts.append(alert)
    _save(users, user)
    return alert


def update_alert(users: UserRepository, user: User, alert_id: int, body: PriceAlertUpdate) -> PriceAlert:
    alert = get_alert(user, alert_id)

    if body.target_price is not None:
        alert.target_price = body.target_price
    if body.is_active is not None:
        alert.is_active = body.is_active

    _save(users, user)
    return alert


def delete_alert(users: UserRepository, user: User, alert_id: int) -> User:
    """Delete an alert; deleting one that is not there is a no-op."""
    user.price_alerts[:] = [alert for alert in user.price_alerts if alert.id != alert_id]
    return _save(users, user)


# Profile

def update_profile(users: UserRepository, user: User, body: ProfileUpdate) -> User:
    """Apply the allow-listed profile fields; preferences are merged, not replaced."""
    changes = body.model_dump(exclude_unset=True, exclude={"preferences"})
    for field in ("first_name", "last_name"):
        if changes.get(field) is not None:
            setattr(user, field, changes[field])
    if "phone" in changes:
        user.phone = changes["phone"]

    if body.preferences is not None:
        for field, value in body.preferences.model_dump(exclude_unset=True).items():
            if value is None and field != "default_city":
                continue
            setattr(user, field, value.value if isinstance(value, FuelType) else value)

    return _save(users, user)
