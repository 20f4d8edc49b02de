"""SQL Entity Store — EntityStore implementation over an async SQLAlchemy session.

Invariants:
    - Each mutating call commits exactly once (single-row atomicity, no multi-row transactions)
    - Uniqueness violations surface as DuplicateKeyError and the session is rolled back
    - Entities are refreshed after commit so server-side defaults and relationships are loaded

Design Decisions:
    - Model class carries `natural_key` (the unique business field) so the store can name
      the violated field without parsing driver-specific messages further than "unique"
    - Filter criteria are SQLAlchemy expressions passed straight into select().where()
"""

import logging
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.core.errors import DatabaseError, DuplicateKeyError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNIQUE_MARKERS = ("unique", "duplicate key")


def _is_unique_violation(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return any(marker in message for marker in _UNIQUE_MARKERS)


class SqlEntityStore:
    """Users, Tasks and Teams persisted through one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, model: type[T], entity_id: UUID) -> T | None:
        return await self.db.get(model, entity_id)

    async def find(
        self, model: type[T], *criteria: Any, order_by: Any = None,
    ) -> list[T]:
        query = select(model)
        if criteria:
            query = query.where(*criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_one(self, model: type[T], *criteria: Any) -> T | None:
        result = await self.db.execute(select(model).where(*criteria))
        return result.scalars().first()

    async def insert(self, entity: T) -> T:
        self.db.add(entity)
        return await self._commit(entity)

    async def save(self, entity: T) -> T:
        """Persist an entity already mutated in place (full replace)."""
        return await self._commit(entity)

    async def update(self, entity: T, **fields: Any) -> T:
        """Partial field update."""
        for name, value in fields.items():
            setattr(entity, name, value)
        return await self._commit(entity)

    async def delete(self, entity: T) -> None:
        await self.db.delete(entity)
        await self.db.commit()

    async def _commit(self, entity: T) -> T:
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            model = type(entity)
            if _is_unique_violation(e):
                field_name = getattr(model, "natural_key", "key")
                logger.warning(
                    f"Duplicate {model.__name__} {field_name}",
                    extra={"error_code": "DUPLICATE_KEY"},
                )
                raise DuplicateKeyError(model.__name__, field_name)
            logger.error(f"Integrity error on {model.__name__}: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        await self.db.refresh(entity)
        return entity
