"""Alert evaluator — finds price alerts whose target has been reached.

An alert fires when the station's current price for its fuel type is at or
below the target and it has not fired within the suppression window. There is
no hysteresis: a price parked at the target re-fires once per window.
"""

from datetime import datetime, timedelta
from typing import Optional

import structlog
from sqlalchemy.orm import Session

from fuel_tracker.application.services.notifier import Notifier
from fuel_tracker.core.timeutils import as_utc, utcnow
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.domain.schemas.pipeline import EvaluationResult, TriggeredAlert

logger = structlog.get_logger(__name__)

DEFAULT_SUPPRESSION_WINDOW = timedelta(hours=24)


def collect_triggered_alerts(user: User, now: datetime, cutoff: datetime) -> list[TriggeredAlert]:
    """Return the user's newly triggered alerts and stamp their last_triggered with now."""
    triggered = []

    for alert in user.price_alerts:
        station = alert.station
        if not alert.is_active or station is None:
            continue

        current_price = station.price_for(alert.fuel_type)
        if not current_price or current_price > alert.target_price:
            continue

        last_triggered = as_utc(alert.last_triggered)
        if last_triggered is not None and last_triggered >= cutoff:
            continue

        triggered.append(
            TriggeredAlert(
                station_name=station.name,
                station_address=station.address,
                fuel_type=alert.fuel_type,
                current_price=current_price,
                target_price=alert.target_price,
            )
        )
        alert.last_triggered = now

    return triggered


async def evaluate_alerts(
    db: Session,
    repo: UserRepository,
    notifier: Notifier,
    now: Optional[datetime] = None,
    window: timedelta = DEFAULT_SUPPRESSION_WINDOW,
) -> EvaluationResult:
    """Notify every subscribed user about their triggered alerts, one email per user.

    The new last_triggered stamps are committed even when the email fails.
    """
    now = now or utcnow()
    cutoff = now - window
    result = EvaluationResult()

    users = [(user.id, user) for user in repo.list_alert_subscribers()]
    for user_id, user in users:
        result.users_checked += 1
        try:
            triggered = collect_triggered_alerts(user, now, cutoff)
            if not triggered:
                continue

            if await notifier.notify(user, triggered):
                result.notifications_sent += 1
            else:
                result.notifications_failed += 1

            repo.save(user)
            result.alerts_triggered += len(triggered)
        except Exception as e:
            db.rollback()
            result.users_failed += 1
            logger.error("Price alert evaluation failed", user_id=user_id, error=str(e))

    if result.alerts_triggered:
        logger.info(
            "Price alerts triggered",
            alerts=result.alerts_triggered,
            sent=result.notifications_sent,
            failed=result.notifications_failed,
        )
    return result
