"""Notifier — renders and sends one price alert email per user.

A failed send is logged and reported as False; the caller has already
stamped last_triggered and persists it regardless.
"""

from html import escape
from typing import Sequence

import structlog

from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.schemas.pipeline import TriggeredAlert
from fuel_tracker.infrastructure.mail_transport import MailTransport

logger = structlog.get_logger(__name__)

ALERT_SUBJECT = "⛽ Fuel Price Alert - Your Target Prices Reached!"
CURRENCY = "₪"


def format_price(value: float) -> str:
    return f"{CURRENCY}{value:.2f}"


def _format_alert_block(alert: TriggeredAlert) -> str:
    return (
        '<div style="border: 1px solid #ddd; padding: 15px; margin: 10px 0; border-radius: 5px;">'
        f"<h3>{escape(alert.station_name)}</h3>"
        f"<p><strong>Address:</strong> {escape(alert.station_address)}</p>"
        f"<p><strong>Fuel Type:</strong> {escape(alert.fuel_type)}</p>"
        f"<p><strong>Current Price:</strong> {format_price(alert.current_price)}</p>"
        f"<p><strong>Your Target:</strong> {format_price(alert.target_price)}</p>"
        '<p style="color: green; font-weight: bold;">🎉 Price Alert Triggered!</p>'
        "</div>"
    )


def format_price_alert_email(user: User, alerts: Sequence[TriggeredAlert]) -> str:
    """Render the HTML body listing every alert triggered for a user in this pass."""
    alert_list = "".join(_format_alert_block(alert) for alert in alerts)
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h1 style="color: #2d3748;">⛽ Fuel Tracker Israel</h1>'
        "<h2>Price Alert Notification</h2>"
        f"<p>Hello {escape(user.first_name)},</p>"
        "<p>Great news! The fuel prices you're tracking have reached your target prices:</p>"
        f"{alert_list}"
        "<p>Visit our website to see more details and manage your alerts.</p>"
        "<p>Best regards,<br>Fuel Tracker Israel Team</p>"
        "</div>"
    )


class Notifier:
    def __init__(self, transport: MailTransport):
        self.transport = transport

    async def notify(self, user: User, alerts: Sequence[TriggeredAlert]) -> bool:
        """Send the alert summary to the user's email. Returns False if delivery failed."""
        if not alerts:
            return False

        html = format_price_alert_email(user, alerts)
        try:
            await self.transport.send_mail(user.email, ALERT_SUBJECT, html)
        except Exception as e:
            logger.error("Price alert email failed", user_id=user.id, email=user.email, error=str(e))
            return False

        logger.info("Price alert email sent", user_id=user.id, email=user.email, alerts=len(alerts))
        return True
