"""Price pipeline — one scheduled tick: mutate prices, evaluate alerts, send emails.

Built once at startup from Settings and handed to the scheduler and the admin
API, so the mail transport and pipeline constants are not module globals.
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

import structlog
from sqlalchemy.orm import Session

from fuel_tracker.application.services.alert_evaluator import evaluate_alerts
from fuel_tracker.application.services.notifier import Notifier
from fuel_tracker.application.services.price_mutator import Draw, mutate_prices, uniform_draw
from fuel_tracker.config import Settings
from fuel_tracker.core.timeutils import utcnow
from fuel_tracker.domain.models.station import Station
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.schemas.pipeline import TickOutcome
from fuel_tracker.infrastructure.mail_transport import MailTransport
from fuel_tracker.infrastructure.repositories.station_repository import SQLAlchemyStationRepository
from fuel_tracker.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

logger = structlog.get_logger(__name__)


class PricePipeline:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        notifier: Notifier,
        variation: float = 0.10,
        suppression_window: timedelta = timedelta(hours=24),
        draw: Optional[Draw] = None,
    ):
        self.session_factory = session_factory
        self.notifier = notifier
        self.variation = variation
        self.suppression_window = suppression_window
        self.draw = draw or uniform_draw(variation)
        self.last_outcome: Optional[TickOutcome] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_factory: Callable[[], Session],
        transport: Optional[MailTransport] = None,
    ) -> "PricePipeline":
        transport = transport or MailTransport.from_settings(settings)
        if not transport.configured:
            logger.warning("Mail transport not configured, price alert emails will fail")
        return cls(
            session_factory=session_factory,
            notifier=Notifier(transport),
            variation=settings.PRICE_VARIATION,
            suppression_window=timedelta(hours=settings.ALERT_SUPPRESSION_HOURS),
        )

    async def run_tick(self, now: Optional[datetime] = None, trigger: str = "manual") -> TickOutcome:
        """Run one full pass and return its outcome. Never raises."""
        outcome = TickOutcome(trigger=trigger, started_at=utcnow())
        now = now or outcome.started_at

        logger.info("Starting fuel price update", trigger=trigger)
        db = None
        try:
            db = self.session_factory()
            mutation = mutate_prices(db, SQLAlchemyStationRepository(db, Station), self.draw, now)
            outcome.stations_updated = mutation.stations_updated
            outcome.stations_failed = mutation.stations_failed

            evaluation = await evaluate_alerts(
                db,
                SQLAlchemyUserRepository(db, User),
                self.notifier,
                now=now,
                window=self.suppression_window,
            )
            outcome.users_checked = evaluation.users_checked
            outcome.users_failed = evaluation.users_failed
            outcome.alerts_triggered = evaluation.alerts_triggered
            outcome.notifications_sent = evaluation.notifications_sent
            outcome.notifications_failed = evaluation.notifications_failed
        except Exception as e:
            outcome.error = str(e)
            logger.exception("Fuel price update failed", trigger=trigger)
        finally:
            if db is not None:
                db.close()

        outcome.finished_at = utcnow()
        self.last_outcome = outcome
        logger.info("Fuel price update finished", **outcome.model_dump(mode="json", exclude={"started_at", "finished_at"}))
        return outcome
