"""Notification Formatting — builds email-shaped payloads for task transitions.

Invariants:
    - build_notification is PURE: reads task/recipient attributes, performs no IO
    - Subject is keyed by NotificationKind only
    - Every user-supplied string placed in the html body is escaped
    - ASSIGNED bodies mention the due date; UPDATED bodies never do

Design Decisions:
    - Payload as dataclass with `sender` (not `from`, a keyword); to_message() renders
      the transport-facing dict with the conventional "from" key
"""

from dataclasses import dataclass
from datetime import date
from html import escape
from typing import Any

from tasktracker.core.domain_types import NotificationKind


SUBJECTS: dict[NotificationKind, str] = {
    NotificationKind.ASSIGNED: "Task Assignment Notification",
    NotificationKind.UPDATED: "Task Update Notification",
}


@dataclass(frozen=True)
class NotificationPayload:
    sender: str
    to: str
    subject: str
    text: str
    html: str

    def to_message(self) -> dict[str, str]:
        return {
            "from": self.sender,
            "to": self.to,
            "subject": self.subject,
            "text": self.text,
            "html": self.html,
        }


def format_due_date(due: date | None) -> str:
    """Monday, March 4, 2024 — or a fallback when the task has no due date."""
    if due is None:
        return "at your earliest convenience"
    return f"by {due:%A}, {due:%B} {due.day}, {due.year}"


def build_notification(
    kind: NotificationKind, task: Any, recipient: Any, sender: str,
) -> NotificationPayload:
    """Build the payload for `kind` addressed to `recipient` about `task`."""
    name = f"{recipient.first_name} {recipient.last_name}".strip()
    title = task.title

    if kind == NotificationKind.UPDATED:
        text = (
            f"Hello {name},\n\n"
            f'Your task titled "{title}" has been updated. '
            "Please review the latest changes to ensure you are up-to-date."
        )
        html = (
            f"<p>Hello {escape(name)},</p>"
            f"<p>Your task titled <strong>{escape(title)}</strong> has been updated.</p>"
            "<p>Please review the latest changes to ensure you are up-to-date.</p>"
        )
    else:
        deadline = format_due_date(task.due_date)
        text = (
            f"Hello {name},\n\n"
            f'You have been assigned a new task titled "{title}". '
            f"Please complete it {deadline}."
        )
        html = (
            f"<p>Hello {escape(name)},</p>"
            "<p>You have been assigned a new task.</p>"
            f"<p>Task Title: <strong>{escape(title)}</strong>.</p>"
            f"<p>Please complete it {escape(deadline)}.</p>"
        )

    return NotificationPayload(
        sender=sender,
        to=recipient.email,
        subject=SUBJECTS[kind],
        text=text,
        html=html,
    )
