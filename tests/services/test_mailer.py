"""Mail Transport — message building, notifier selection, SMTP error mapping."""

import smtplib

import pytest

from tasktracker.config import Settings
from tasktracker.core.errors import NotificationDeliveryError
from tasktracker.core.format_notifications import NotificationPayload
from tasktracker.infrastructure.mailer import (
    LoggingNotifier, SmtpNotifier, build_email_message, build_notifier,
)

PAYLOAD = NotificationPayload(
    sender="s@example.com", to="jane@example.com",
    subject="Task Update Notification", text="plain body", html="<p>rich body</p>",
)


def test_email_message_has_text_and_html_parts():
    msg = build_email_message(PAYLOAD)
    assert msg["From"] == "s@example.com"
    assert msg["To"] == "jane@example.com"
    assert msg["Subject"] == "Task Update Notification"
    types = [part.get_content_type() for part in msg.iter_parts()]
    assert types == ["text/plain", "text/html"]


def test_build_notifier_without_smtp_host_logs():
    assert isinstance(build_notifier(Settings(smtp_host=None)), LoggingNotifier)


def test_build_notifier_with_smtp_host():
    notifier = build_notifier(Settings(smtp_host="smtp.example.com", smtp_port=2525))
    assert isinstance(notifier, SmtpNotifier)
    assert notifier.port == 2525


async def test_smtp_failure_maps_to_delivery_error(monkeypatch):
    class _BrokenSMTP:
        def __init__(self, *args, **kwargs):
            raise smtplib.SMTPConnectError(421, b"try later")

    monkeypatch.setattr(smtplib, "SMTP", _BrokenSMTP)
    notifier = SmtpNotifier(host="smtp.example.com")

    with pytest.raises(NotificationDeliveryError):
        await notifier.send(PAYLOAD)


async def test_smtp_sends_message(monkeypatch):
    sent = []

    class _FakeSMTP:
        def __init__(self, host, port, timeout):
            self.host = host

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            pass

        def login(self, user, password):
            sent.append(("login", user))

        def send_message(self, msg):
            sent.append(("send", msg["To"]))

    monkeypatch.setattr(smtplib, "SMTP", _FakeSMTP)
    notifier = SmtpNotifier(host="smtp.example.com", username="bot", password="pw")
    await notifier.send(PAYLOAD)

    assert sent == [("login", "bot"), ("send", "jane@example.com")]


async def test_logging_notifier_never_raises():
    await LoggingNotifier().send(PAYLOAD)
