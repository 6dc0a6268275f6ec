"""Pydantic schemas for Station domain."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, Field, StringConstraints

from fuel_tracker.domain.constants import Brand, FuelType, Weekday

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class FuelPriceIn(BaseModel):
    price: float = Field(..., ge=0)


class FuelPriceUpdate(BaseModel):
    # Entries without a price are ignored by the update endpoint
    price: Optional[float] = Field(None, ge=0)


class FuelPriceRead(BaseModel):
    price: Optional[float] = None
    last_updated: Optional[datetime] = None

    model_config = {"from_attributes": True}


class StationCreate(BaseModel):
    name: NonEmptyStr
    address: NonEmptyStr
    city: NonEmptyStr
    coordinates: Coordinates
    brand: Brand
    fuel_types: dict[FuelType, FuelPriceIn] = {}
    opening_hours: dict[Weekday, str] = {}
    services: list[str] = []
    is_active: bool = True


class StationPriceUpdate(BaseModel):
    fuel_types: dict[FuelType, FuelPriceUpdate] = {}


class StationRead(BaseModel):
    id: int
    name: str
    address: str
    city: str
    coordinates: Coordinates
    brand: str
    is_active: bool
    opening_hours: dict[str, str] = {}
    services: list[str] = []
    fuel_types: dict[str, FuelPriceRead] = {}
    last_scraped: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class StationFilter(BaseModel):
    city: Optional[str] = None
    brand: Optional[Brand] = None
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    radius: Optional[float] = Field(None, gt=0, description="Search radius in km")
    limit: int = 100

    @property
    def is_geo(self) -> bool:
        return self.lat is not None and self.lng is not None and self.radius is not None


class StationMutationResponse(BaseModel):
    message: str
    station: StationRead
