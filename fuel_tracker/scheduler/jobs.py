"""APScheduler jobs — price update every 2 hours, plus every 30 mins between 08:00 and 20:30."""

import logging

import pytz
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.cron import CronTrigger

from fuel_tracker.application.services.price_pipeline import PricePipeline
from fuel_tracker.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)
tz = pytz.timezone(settings.TIMEZONE)

scheduler = AsyncIOScheduler(timezone=tz)

EVERY_TWO_HOURS_JOB = "price_scrape_every_2h"
BUSINESS_HOURS_JOB = "price_scrape_business_hours"


async def price_update_job(pipeline: PricePipeline, trigger: str):
    """Scheduled tick: run the price pipeline. Failures end up in the outcome, never here."""
    outcome = await pipeline.run_tick(trigger=trigger)
    if outcome.error or outcome.stations_failed or outcome.users_failed:
        logger.warning(f"Price update tick ({trigger}) finished with failures: {outcome.model_dump_json()}")


def register_jobs(target: BaseScheduler, pipeline: PricePipeline) -> None:
    """Register both price update triggers. They are independent and may overlap."""
    target.add_job(
        price_update_job,
        trigger=CronTrigger(hour="*/2", minute=0, timezone=tz),
        args=[pipeline, EVERY_TWO_HOURS_JOB],
        id=EVERY_TWO_HOURS_JOB,
        name="Fuel price update (every 2 hours)",
        replace_existing=True,
    )

    target.add_job(
        price_update_job,
        trigger=CronTrigger(hour="8-20", minute="*/30", timezone=tz),
        args=[pipeline, BUSINESS_HOURS_JOB],
        id=BUSINESS_HOURS_JOB,
        name="Fuel price update (every 30 mins, 08:00-20:30)",
        replace_existing=True,
    )


def start_scheduler(pipeline: PricePipeline):
    """Start the APScheduler with both price update jobs."""
    register_jobs(scheduler, pipeline)
    scheduler.start()
    logger.info(f"Scheduler started — price updates every 2h and every 30 mins 08-20 {settings.TIMEZONE}")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
