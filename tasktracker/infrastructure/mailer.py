"""Mail Transport — Notifier implementations for SMTP and log-only delivery.

Invariants:
    - send() either delivers the message or raises NotificationDeliveryError
    - The blocking smtplib session runs in a worker thread, never on the event loop
    - LoggingNotifier is used whenever no SMTP host is configured

Design Decisions:
    - stdlib smtplib + EmailMessage (multipart text/html): one message per send, no
      connection reuse; notification volume is one mail per assign/update
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage

from tasktracker.config import Settings
from tasktracker.core.errors import NotificationDeliveryError
from tasktracker.core.format_notifications import NotificationPayload

logger = logging.getLogger(__name__)


def build_email_message(payload: NotificationPayload) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = payload.sender
    msg["To"] = payload.to
    msg["Subject"] = payload.subject
    msg.set_content(payload.text)
    msg.add_alternative(payload.html, subtype="html")
    return msg


class SmtpNotifier:
    """Delivers notifications through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: int = 15,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    async def send(self, payload: NotificationPayload) -> None:
        msg = build_email_message(payload)
        try:
            await asyncio.to_thread(self._send_blocking, msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationDeliveryError(str(e)) from e
        logger.info(
            f"Notification mailed: {payload.subject}",
            extra={"recipient": payload.to},
        )

    def _send_blocking(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(host=self.host, port=self.port, timeout=self.timeout) as s:
            if self.use_tls:
                s.starttls()
            if self.username:
                s.login(self.username, self.password or "")
            s.send_message(msg)


class LoggingNotifier:
    """Development notifier: records the message in the log instead of mailing it."""

    async def send(self, payload: NotificationPayload) -> None:
        logger.info(
            f"Notification (not mailed): {payload.subject}",
            extra={"recipient": payload.to},
        )


def build_notifier(settings: Settings) -> SmtpNotifier | LoggingNotifier:
    if not settings.smtp_host:
        return LoggingNotifier()
    return SmtpNotifier(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout_seconds,
    )
