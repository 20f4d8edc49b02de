"""Task Field Rules — due-date parsing, partial-update merge, comment timestamps.

Invariants:
    - merge_task_fields treats a present-but-blank field as absent: it never clears a value
    - parse_due_date accepts anything split_due_date accepts (days past month end roll over)
    - next_comment_timestamp never returns a value earlier than the previous comment

Design Decisions:
    - Blank-means-unchanged is kept as the documented update rule; clearing a field
      through update is not supported
    - Roll-over instead of rejection for 31-02: the validator is loose on purpose,
      so parsing must be total over validated input
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Mapping

from tasktracker.core.validate_task import is_blank, split_due_date


MERGEABLE_FIELDS: tuple[str, ...] = ("title", "description", "status", "due_date")


def parse_due_date(raw: str) -> date:
    """DD-MM-YYYY → date. Caller must have validated the string first."""
    parts = split_due_date(raw)
    if parts is None:
        raise ValueError(f"Unparseable due date: {raw!r}")
    day, month, year = parts
    return date(year, month, 1) + timedelta(days=day - 1)


def merge_task_fields(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return the field assignments an update payload implies.

    Only non-blank payload values appear in the result; due_date is parsed.
    """
    changes: dict[str, Any] = {}
    for name in MERGEABLE_FIELDS:
        value = payload.get(name)
        if is_blank(value):
            continue
        changes[name] = parse_due_date(value) if name == "due_date" else value
    return changes


def next_comment_timestamp(
    previous: datetime | None, now: datetime,
) -> datetime:
    """Server timestamp for a new comment, non-decreasing within a task."""
    if previous is None:
        return now
    if previous.tzinfo is None:
        # SQLite hands back naive datetimes; stored values are always UTC
        previous = previous.replace(tzinfo=timezone.utc)
    return max(previous, now)
