"""Stations API routes — list, search, detail, create, price update."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from fuel_tracker.application.services.station_service import (
    create_station,
    get_station,
    list_stations,
    search_stations,
    update_station_prices,
)
from fuel_tracker.domain.constants import Brand
from fuel_tracker.domain.repositories.station_repository import StationRepository
from fuel_tracker.domain.schemas.station import (
    StationCreate,
    StationFilter,
    StationMutationResponse,
    StationPriceUpdate,
    StationRead,
)
from fuel_tracker.interfaces.deps import get_station_repository

router = APIRouter(prefix="/api/stations", tags=["Stations"])


@router.get("", response_model=list[StationRead])
def list_all(
    city: Optional[str] = None,
    brand: Optional[Brand] = None,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, gt=0, description="Radius in km, used with lat/lng"),
    repo: StationRepository = Depends(get_station_repository),
):
    filters = StationFilter(city=city, brand=brand, lat=lat, lng=lng, radius=radius)
    return [StationRead.model_validate(s) for s in list_stations(repo, filters)]


@router.get("/search/{query}", response_model=list[StationRead])
def search(query: str, repo: StationRepository = Depends(get_station_repository)):
    return [StationRead.model_validate(s) for s in search_stations(repo, query)]


@router.get("/{station_id}", response_model=StationRead)
def detail(station_id: int, repo: StationRepository = Depends(get_station_repository)):
    return StationRead.model_validate(get_station(repo, station_id))


@router.post("", response_model=StationMutationResponse, status_code=status.HTTP_201_CREATED)
def create(body: StationCreate, repo: StationRepository = Depends(get_station_repository)):
    station = create_station(repo, body)
    return StationMutationResponse(
        message="Station created successfully",
        station=StationRead.model_validate(station),
    )


@router.put("/{station_id}", response_model=StationMutationResponse)
def update_prices(
    station_id: int,
    body: StationPriceUpdate,
    repo: StationRepository = Depends(get_station_repository),
):
    station = update_station_prices(repo, station_id, body)
    return StationMutationResponse(
        message="Station updated successfully",
        station=StationRead.model_validate(station),
    )
