"""Task Payload Validation — ordered field rules for create and update payloads.

Invariants:
    - validate_task_payload is PURE: returns a verdict dict or None, never raises
    - Rules run in a fixed order; the first failing rule is the only one reported
    - Lengths are measured on the raw value, emptiness on the trimmed value
    - Due date check is deliberately loose: day 1–31 for any month (no Feb-30 rejection)

Design Decisions:
    - Verdict dict over exception: same shape as the other pure enforcement helpers,
      the manager decides how to surface it (TaskValidationError)
    - DUE_DATE_PATTERN is strict DD-MM-YYYY; the numeric ranges are checked afterwards
"""

import re
from typing import Any, Mapping

from tasktracker.core.domain_types import TaskStatus, ValidationRule


TITLE_MIN_LENGTH: int = 5
TITLE_MAX_LENGTH: int = 100
DESCRIPTION_MAX_LENGTH: int = 1000
DUE_DATE_PATTERN = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")

_VALID_STATUSES = {s.value for s in TaskStatus}


def is_blank(value: Any) -> bool:
    """None, whitespace-only strings and empty containers count as blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


def _reject(rule: ValidationRule, message: str) -> dict:
    return {"status": "error", "rule": rule, "message": message}


def split_due_date(raw: str) -> tuple[int, int, int] | None:
    """Decompose DD-MM-YYYY into (day, month, year), or None if out of range."""
    match = DUE_DATE_PATTERN.match(raw)
    if not match:
        return None
    day, month, year = (int(part) for part in match.groups())
    if not 1 <= day <= 31 or not 1 <= month <= 12 or year < 1:
        return None
    return day, month, year


def validate_task_payload(payload: Mapping[str, Any]) -> dict | None:
    """Validate a proposed task. None means accepted."""
    title = payload.get("title")
    description = payload.get("description")
    status = payload.get("status")
    due_date = payload.get("due_date")

    if is_blank(title):
        return _reject(ValidationRule.TITLE_MISSING, "Title cannot be blank")
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        return _reject(
            ValidationRule.TITLE_LENGTH,
            f"Title must be between {TITLE_MIN_LENGTH} and "
            f"{TITLE_MAX_LENGTH} characters long",
        )

    if is_blank(description):
        return _reject(
            ValidationRule.DESCRIPTION_MISSING, "Description cannot be blank",
        )
    if len(description) > DESCRIPTION_MAX_LENGTH:
        return _reject(
            ValidationRule.DESCRIPTION_LENGTH,
            f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
        )

    if is_blank(status):
        return _reject(ValidationRule.STATUS_MISSING, "Status cannot be blank")
    if status not in _VALID_STATUSES:
        return _reject(
            ValidationRule.STATUS_INVALID,
            'Invalid task status. Status must be either "open" or "closed"',
        )

    if is_blank(due_date):
        return _reject(ValidationRule.DUE_DATE_MISSING, "Due date cannot be blank")
    if not isinstance(due_date, str) or split_due_date(due_date) is None:
        return _reject(
            ValidationRule.DUE_DATE_MALFORMED,
            "Invalid due date, expected DD-MM-YYYY",
        )

    return None
