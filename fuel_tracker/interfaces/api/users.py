"""Users API routes — favorites, price alerts and profile (authenticated)."""

from fastapi import APIRouter, Depends, status

from fuel_tracker.application.services import user_service
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.repositories.station_repository import StationRepository
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.domain.schemas.auth import UserRead
from fuel_tracker.domain.schemas.station import StationRead
from fuel_tracker.domain.schemas.user import (
    FavoriteCreate,
    FavoritesResponse,
    PriceAlertCreate,
    PriceAlertRead,
    PriceAlertResponse,
    PriceAlertUpdate,
    ProfileResponse,
    ProfileUpdate,
)
from fuel_tracker.interfaces.api.deps import get_current_user
from fuel_tracker.interfaces.deps import get_station_repository, get_user_repository

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/favorites", response_model=list[StationRead])
def get_favorites(user: User = Depends(get_current_user)):
    return [StationRead.model_validate(s) for s in user_service.list_favorites(user)]


@router.post("/favorites", response_model=FavoritesResponse)
def add_favorite(
    body: FavoriteCreate,
    users: UserRepository = Depends(get_user_repository),
    stations: StationRepository = Depends(get_station_repository),
    user: User = Depends(get_current_user),
):
    user = user_service.add_favorite(users, stations, user, body.station_id)
    return FavoritesResponse(message="Station added to favorites", favorites=user.favorite_station_ids)


@router.delete("/favorites/{station_id}", response_model=FavoritesResponse)
def remove_favorite(
    station_id: int,
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    user = user_service.remove_favorite(users, user, station_id)
    return FavoritesResponse(message="Station removed from favorites", favorites=user.favorite_station_ids)


@router.get("/alerts", response_model=list[PriceAlertRead])
def get_alerts(user: User = Depends(get_current_user)):
    return [PriceAlertRead.model_validate(a) for a in user.price_alerts]


@router.post("/alerts", response_model=PriceAlertResponse, status_code=status.HTTP_201_CREATED)
def create_alert(
    body: PriceAlertCreate,
    users: UserRepository = Depends(get_user_repository),
    stations: StationRepository = Depends(get_station_repository),
    user: User = Depends(get_current_user),
):
    alert = user_service.create_alert(users, stations, user, body)
    return PriceAlertResponse(message="Price alert created successfully", alert=PriceAlertRead.model_validate(alert))


@router.put("/alerts/{alert_id}", response_model=PriceAlertResponse)
def update_alert(
    alert_id: int,
    body: PriceAlertUpdate,
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    alert = user_service.update_alert(users, user, alert_id, body)
    return PriceAlertResponse(message="Price alert updated successfully", alert=PriceAlertRead.model_validate(alert))


@router.delete("/alerts/{alert_id}")
def delete_alert(
    alert_id: int,
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    user_service.delete_alert(users, user, alert_id)
    return {"message": "Price alert deleted successfully"}


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    body: ProfileUpdate,
    users: UserRepository = Depends(get_user_repository),
    user: User = Depends(get_current_user),
):
    user = user_service.update_profile(users, user, body)
    return ProfileResponse(message="Profile updated successfully", user=UserRead.model_validate(user))
