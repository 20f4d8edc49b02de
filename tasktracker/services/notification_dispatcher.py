"""Notification Dispatcher — fire-and-forget delivery of task transition emails.

Invariants:
    - notify() builds the payload synchronously and only schedules delivery; it never
      awaits the notifier
    - deliver() swallows every notifier failure after logging it — a notification can
      never fail, delay or retry the operation that triggered it
    - One notify() call schedules exactly one delivery

Design Decisions:
    - FastAPI BackgroundTasks as the scheduling queue: delivery runs after the response
      is sent, on the same event loop, without a broker
    - Payload built eagerly: the background task must not touch the request's DB session,
      which is closed by the time it runs
"""

import logging

from fastapi import BackgroundTasks

from tasktracker.core.domain_types import NotificationKind
from tasktracker.core.format_notifications import (
    NotificationPayload, build_notification,
)
from tasktracker.core.repository_protocols import Notifier

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Turns task transitions into scheduled notifier calls."""

    def __init__(
        self,
        notifier: Notifier,
        sender: str,
        background_tasks: BackgroundTasks,
    ):
        self.notifier = notifier
        self.sender = sender
        self.background_tasks = background_tasks

    def notify(
        self, kind: NotificationKind, task, recipient,
    ) -> NotificationPayload:
        """Build the payload for `kind` and queue its delivery."""
        payload = build_notification(kind, task, recipient, self.sender)
        self.background_tasks.add_task(
            self.deliver, payload, kind, str(task.id),
        )
        logger.info(
            f"Queued {kind.value} notification",
            extra={"task_id": str(task.id), "notification_kind": kind.value},
        )
        return payload

    async def deliver(
        self, payload: NotificationPayload, kind: NotificationKind, task_id: str,
    ) -> None:
        try:
            await self.notifier.send(payload)
        except Exception as e:
            logger.error(
                f"Notification delivery failed: {e}",
                extra={
                    "task_id": task_id,
                    "notification_kind": kind.value,
                    "recipient": payload.to,
                },
                exc_info=True,
            )
