"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from fuel_tracker.domain.constants import FuelType
from fuel_tracker.domain.schemas.station import NonEmptyStr


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: NonEmptyStr
    last_name: NonEmptyStr
    phone: Optional[str] = None


class Preferences(BaseModel):
    default_city: Optional[str] = None
    preferred_fuel_type: FuelType = FuelType.GASOLINE_95
    email_notifications: bool = True
    push_notifications: bool = False


class UserRead(BaseModel):
    id: int
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: str
    is_active: bool
    preferences: Preferences
    favorite_station_ids: list[int] = []
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
