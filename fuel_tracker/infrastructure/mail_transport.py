"""SMTP mail transport for price alert emails. Opens one connection per message."""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Optional

from fuel_tracker.config import Settings

logger = logging.getLogger(__name__)


class MailDeliveryError(Exception):
    """Raised when a message could not be handed to the SMTP server."""


class MailTransport:
    """Sends HTML email through an SMTP server using STARTTLS and login auth."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: Optional[str] = None,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender or username
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "MailTransport":
        return cls(
            host=settings.MAIL_HOST,
            port=settings.MAIL_PORT,
            username=settings.MAIL_USER,
            password=settings.MAIL_PASS,
            sender=settings.MAIL_FROM or None,
            timeout=settings.MAIL_TIMEOUT,
        )

    @property
    def configured(self) -> bool:
        return bool(self.username and self.password)

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML capable mail client.")
        message.add_alternative(html, subtype="html")
        return message

    def _send_blocking(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            smtp.starttls(context=context)
            smtp.login(self.username, self.password)
            smtp.send_message(message)

    async def send_mail(self, to: str, subject: str, html: str) -> None:
        """Send one HTML email. Raises MailDeliveryError on any failure."""
        if not self.configured:
            raise MailDeliveryError("Mail transport is not configured (MAIL_USER / MAIL_PASS missing)")

        message = self.build_message(to, subject, html)
        try:
            await asyncio.to_thread(self._send_blocking, message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"Failed to send mail to {to}: {e}") from e

        logger.info(f"Mail sent to {to} via {self.host}:{self.port}")
