"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - One generic EntityStore keyed by model type instead of a repository per entity:
      Users, Tasks and Teams need the same id lookup, filtered find, insert, save, delete
    - Filter criteria are opaque objects to the core; the SQL store takes SQLAlchemy
      expressions, an in-memory store may take predicates
"""

from typing import Any, Protocol, TypeVar
from uuid import UUID

from tasktracker.core.format_notifications import NotificationPayload

T = TypeVar("T")


class EntityStore(Protocol):
    """Persistence for Users, Tasks and Teams — implemented by shell.

    insert/save/update raise DuplicateKeyError on a uniqueness violation.
    """
    async def get(self, model: type[T], entity_id: UUID) -> T | None: ...
    async def find(
        self, model: type[T], *criteria: Any, order_by: Any = None,
    ) -> list[T]: ...
    async def find_one(self, model: type[T], *criteria: Any) -> T | None: ...
    async def insert(self, entity: T) -> T: ...
    async def save(self, entity: T) -> T: ...
    async def update(self, entity: T, **fields: Any) -> T: ...
    async def delete(self, entity: T) -> None: ...


class Notifier(Protocol):
    """Mail transport. May raise; callers decide whether failures matter."""
    async def send(self, payload: NotificationPayload) -> None: ...
