from datetime import datetime, timezone

import pytest
import pytz
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from conftest import RecordingTransport, add_alert, fixed_draw, make_station, make_user
from fuel_tracker.application.services.notifier import Notifier
from fuel_tracker.application.services.price_pipeline import PricePipeline
from fuel_tracker.config import Settings
from fuel_tracker.core.timeutils import as_utc
from fuel_tracker.scheduler.jobs import BUSINESS_HOURS_JOB, EVERY_TWO_HOURS_JOB, register_jobs

NOW = datetime(2025, 3, 10, 9, 30, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_tick_mutates_then_notifies(db, session_factory, transport):
    station = make_station(db, prices={"gasoline95": 6.85, "gasoline98": 7.10, "diesel": 6.40})
    user = make_user(db)
    alert = add_alert(db, user, station, fuel_type="diesel", target_price=6.30)
    pipeline = PricePipeline(session_factory, Notifier(transport), draw=fixed_draw(-0.20))

    outcome = await pipeline.run_tick(now=NOW)

    assert outcome.error is None
    assert outcome.stations_updated == 1
    assert outcome.alerts_triggered == 1
    assert outcome.notifications_sent == 1
    assert pipeline.last_outcome is outcome

    assert len(transport.sent) == 1
    assert transport.sent[0]["to"] == "dana@fueltracker.io"
    assert "₪6.20" in transport.sent[0]["html"]

    db.expire_all()
    assert station.price_for("diesel") == pytest.approx(6.20)
    assert as_utc(alert.last_triggered) == NOW


@pytest.mark.asyncio
async def test_second_tick_inside_window_sends_nothing(db, session_factory, transport):
    station = make_station(db, prices={"diesel": 6.40})
    user = make_user(db)
    add_alert(db, user, station, fuel_type="diesel", target_price=6.30)
    pipeline = PricePipeline(session_factory, Notifier(transport), draw=fixed_draw(-0.20, 0.01))

    first = await pipeline.run_tick(now=NOW)
    second = await pipeline.run_tick(now=NOW.replace(hour=10))

    assert first.alerts_triggered == 1
    assert second.alerts_triggered == 0
    assert second.stations_updated == 1
    assert len(transport.sent) == 1


@pytest.mark.asyncio
async def test_unconfigured_mail_counts_as_failed_notification(db, session_factory):
    station = make_station(db, prices={"diesel": 6.00})
    user = make_user(db)
    add_alert(db, user, station, target_price=6.30)
    pipeline = PricePipeline.from_settings(Settings(MAIL_USER="", MAIL_PASS=""), session_factory)
    pipeline.draw = fixed_draw(0.0)

    outcome = await pipeline.run_tick(now=NOW)

    assert outcome.alerts_triggered == 1
    assert outcome.notifications_failed == 1
    assert outcome.notifications_sent == 0


@pytest.mark.asyncio
async def test_tick_failure_is_reported_not_raised(transport):
    def broken_session():
        raise RuntimeError("database unreachable")

    pipeline = PricePipeline(broken_session, Notifier(transport))

    outcome = await pipeline.run_tick(now=NOW, trigger="price_scrape_every_2h")

    assert outcome.error == "database unreachable"
    assert outcome.trigger == "price_scrape_every_2h"
    assert outcome.finished_at is not None
    assert pipeline.last_outcome is outcome


def test_both_schedules_are_registered(session_factory, transport):
    target = AsyncIOScheduler(timezone="Asia/Jerusalem")
    pipeline = PricePipeline(session_factory, Notifier(transport))

    register_jobs(target, pipeline)

    jobs = {job.id: job for job in target.get_jobs()}
    assert set(jobs) == {EVERY_TWO_HOURS_JOB, BUSINESS_HOURS_JOB}

    every_two = {field.name: str(field) for field in jobs[EVERY_TWO_HOURS_JOB].trigger.fields}
    assert every_two["hour"] == "*/2"
    assert every_two["minute"] == "0"

    business = {field.name: str(field) for field in jobs[BUSINESS_HOURS_JOB].trigger.fields}
    assert business["hour"] == "8-20"
    assert business["minute"] == "*/30"

    assert jobs[EVERY_TWO_HOURS_JOB].args[0] is pipeline
    assert jobs[BUSINESS_HOURS_JOB].args[0] is pipeline


def test_business_hours_job_last_fires_at_half_past_eight(session_factory, transport):
    target = AsyncIOScheduler(timezone="Asia/Jerusalem")
    register_jobs(target, PricePipeline(session_factory, Notifier(transport)))
    job = target.get_job(BUSINESS_HOURS_JOB)
    israel = pytz.timezone("Asia/Jerusalem")

    evening = job.trigger.get_next_fire_time(None, israel.localize(datetime(2025, 3, 10, 20, 1)))
    after_close = job.trigger.get_next_fire_time(None, israel.localize(datetime(2025, 3, 10, 20, 31)))

    assert "08:00-20:30" in job.name
    assert (evening.hour, evening.minute) == (20, 30)
    assert (after_close.day, after_close.hour, after_close.minute) == (11, 8, 0)
