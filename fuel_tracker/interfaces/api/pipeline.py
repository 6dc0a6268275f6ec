"""Price pipeline API routes — manual run, last outcome, scheduler status (admin only)."""

from datetime import datetime
from typing import Optional

import pytz
from fastapi import APIRouter, Depends

from fuel_tracker.application.services.price_pipeline import PricePipeline
from fuel_tracker.config import get_settings
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.schemas.pipeline import SchedulerJob, SchedulerStatus, TickOutcome
from fuel_tracker.interfaces.api.deps import require_admin
from fuel_tracker.interfaces.deps import get_pipeline

settings = get_settings()
router = APIRouter(prefix="/api/pipeline", tags=["Price Pipeline"])


@router.post("/run", response_model=TickOutcome)
async def run_now(
    pipeline: PricePipeline = Depends(get_pipeline),
    user: User = Depends(require_admin),
):
    """Run a price update + alert pass immediately."""
    return await pipeline.run_tick(trigger="manual")


@router.get("/last-outcome", response_model=Optional[TickOutcome])
def last_outcome(
    pipeline: PricePipeline = Depends(get_pipeline),
    user: User = Depends(require_admin),
):
    return pipeline.last_outcome


@router.get("/scheduler-status", response_model=SchedulerStatus)
def scheduler_status(user: User = Depends(require_admin)):
    """Get scheduler status and next run times."""
    from fuel_tracker.scheduler.jobs import scheduler

    tz = pytz.timezone(settings.TIMEZONE)
    return SchedulerStatus(
        running=scheduler.running,
        timezone=settings.TIMEZONE,
        current_time=datetime.now(tz),
        jobs=[
            SchedulerJob(id=job.id, name=job.name, next_run=getattr(job, "next_run_time", None))
            for job in scheduler.get_jobs()
        ],
    )
