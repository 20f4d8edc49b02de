"""Test doubles — a recording Notifier and identity helpers.

Set `fail_with` on RecordingNotifier to make every send() raise, to exercise
the dispatcher's failure absorption.
"""

from tasktracker.core.domain_types import Identity, UserId
from tasktracker.core.format_notifications import NotificationPayload


class RecordingNotifier:
    def __init__(self, fail_with: Exception | None = None):
        self.sent: list[NotificationPayload] = []
        self.attempts = 0
        self.fail_with = fail_with

    async def send(self, payload: NotificationPayload) -> None:
        self.attempts += 1
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(payload)

    def subjects(self) -> list[str]:
        return [p.subject for p in self.sent]


def identity_of(user) -> Identity:
    return Identity(
        id=UserId(user.id), email=user.email,
        first_name=user.first_name, last_name=user.last_name,
    )
