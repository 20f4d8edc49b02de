"""Ownership Authorization — decides whether a caller may mutate a resource.

Invariants:
    - is_owner is PURE: compares the resource's relation attribute with the caller id
    - Existence is the caller's concern; the guard only ever sees loaded resources
    - A resource whose relation attribute is missing or None is owned by nobody

Design Decisions:
    - One guard parameterized by relation name instead of per-route inline checks, so
      other ownership links can reuse it without duplicating the comparison
"""

from typing import Any
from uuid import UUID

from tasktracker.core.domain_types import Identity
from tasktracker.core.errors import ErrorContext, ForbiddenError


TEAM_OWNERSHIP: str = "created_by"


def _as_uuid(value: Any) -> UUID | None:
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def is_owner(identity: Identity, resource: Any, relation: str) -> bool:
    """True iff resource.<relation> references the caller."""
    owner = _as_uuid(getattr(resource, relation, None))
    if owner is None:
        return False
    return owner == _as_uuid(identity.id)


def can_edit_team(identity: Identity, team: Any) -> bool:
    return is_owner(identity, team, TEAM_OWNERSHIP)


def require_owner(
    identity: Identity, resource: Any, relation: str, resource_type: str,
) -> None:
    """Raise ForbiddenError unless the caller owns the resource."""
    if not is_owner(identity, resource, relation):
        resource_id = str(getattr(resource, "id", ""))
        raise ForbiddenError(
            resource_type, resource_id,
            ErrorContext(user_id=str(identity.id)),
        )
