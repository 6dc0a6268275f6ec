"""Pydantic schemas for favorites, price alerts and profile updates."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from fuel_tracker.domain.constants import FuelType
from fuel_tracker.domain.schemas.auth import UserRead
from fuel_tracker.domain.schemas.station import NonEmptyStr, StationRead


class FavoriteCreate(BaseModel):
    station_id: int


class FavoritesResponse(BaseModel):
    message: str
    favorites: list[int]


class PriceAlertCreate(BaseModel):
    station_id: int
    fuel_type: FuelType
    target_price: float = Field(..., ge=0)


class PriceAlertUpdate(BaseModel):
    target_price: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class PriceAlertRead(BaseModel):
    id: int
    station_id: int
    fuel_type: str
    target_price: float
    is_active: bool
    last_triggered: Optional[datetime] = None
    created_at: Optional[datetime] = None
    station: Optional[StationRead] = None

    model_config = {"from_attributes": True}


class PriceAlertResponse(BaseModel):
    message: str
    alert: PriceAlertRead


class PreferencesUpdate(BaseModel):
    default_city: Optional[str] = None
    preferred_fuel_type: Optional[FuelType] = None
    email_notifications: Optional[bool] = None
    push_notifications: Optional[bool] = None


class ProfileUpdate(BaseModel):
    first_name: Optional[NonEmptyStr] = None
    last_name: Optional[NonEmptyStr] = None
    phone: Optional[str] = None
    preferences: Optional[PreferencesUpdate] = None


class ProfileResponse(BaseModel):
    message: str
    user: UserRead
