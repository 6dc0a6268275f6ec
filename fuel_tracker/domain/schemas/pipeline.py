"""Pydantic schemas for the price pipeline (per-tick outcome, alert batches)."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TriggeredAlert(BaseModel):
    """One line of a price alert email."""
    station_name: str
    station_address: str
    fuel_type: str
    current_price: float
    target_price: float


class MutationResult(BaseModel):
    stations_updated: int = 0
    stations_failed: int = 0


class EvaluationResult(BaseModel):
    users_checked: int = 0
    users_failed: int = 0
    alerts_triggered: int = 0
    notifications_sent: int = 0
    notifications_failed: int = 0


class TickOutcome(BaseModel):
    trigger: str = "manual"
    started_at: datetime
    finished_at: Optional[datetime] = None
    stations_updated: int = 0
    stations_failed: int = 0
    users_checked: int = 0
    users_failed: int = 0
    alerts_triggered: int = 0
    notifications_sent: int = 0
    notifications_failed: int = 0
    error: Optional[str] = None


class SchedulerJob(BaseModel):
    id: str
    name: str
    next_run: Optional[datetime] = None


class SchedulerStatus(BaseModel):
    running: bool
    timezone: str
    current_time: datetime
    jobs: list[SchedulerJob]
