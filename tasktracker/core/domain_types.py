"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TaskId, TeamId, UserId wrap UUIDs — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - Identity is the verified caller; the core trusts it unconditionally

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - parse_identifier lives here so every layer rejects malformed ids the same way
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID

from tasktracker.core.errors import BadRequestError


# ─── Identity Types ──────────────────────────────────────────────

TaskId = NewType("TaskId", UUID)
TeamId = NewType("TeamId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task lifecycle states — maps to DB `status` column."""
    OPEN = "open"
    CLOSED = "closed"


class NotificationKind(str, Enum):
    """Task transitions that notify the assignee."""
    ASSIGNED = "assigned"
    UPDATED = "updated"


class ValidationRule(str, Enum):
    """Task validator rules, in evaluation order."""
    TITLE_MISSING = "title-missing"
    TITLE_LENGTH = "title-length"
    DESCRIPTION_MISSING = "description-missing"
    DESCRIPTION_LENGTH = "description-length"
    STATUS_MISSING = "status-missing"
    STATUS_INVALID = "status-invalid"
    DUE_DATE_MISSING = "due-date-missing"
    DUE_DATE_MALFORMED = "due-date-malformed"


# ─── Caller ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as decoded from a verified bearer token."""
    id: UserId
    email: str
    first_name: str = ""
    last_name: str = ""


def parse_identifier(raw: str | UUID | None, label: str = "ID") -> UUID:
    """Parse an opaque identifier or raise BadRequestError."""
    if isinstance(raw, UUID):
        return raw
    if not raw:
        raise BadRequestError(f"Invalid {label}")
    try:
        return UUID(str(raw))
    except ValueError:
        raise BadRequestError(f"Invalid {label}")
