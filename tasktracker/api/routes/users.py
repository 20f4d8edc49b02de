"""Profile Routes — the caller's own user record.

Invariants:
    - The record is looked up by the identity's email, as issued by the auth service
    - Only first_name/last_name are editable here; email and password are not
"""

import logging

from fastapi import APIRouter, Depends

from tasktracker.api.dependencies import get_store
from tasktracker.api.identity import get_identity
from tasktracker.core.domain_types import Identity
from tasktracker.core.errors import ErrorContext, ResourceNotFoundError
from tasktracker.infrastructure.entity_store import SqlEntityStore
from tasktracker.models.user import User
from tasktracker.schemas.user import UserResponse, UserUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/users", tags=["users"])


async def _get_caller_or_404(identity: Identity, store: SqlEntityStore) -> User:
    user = await store.find_one(User, User.email == identity.email)
    if not user:
        raise ResourceNotFoundError(
            "User", identity.email, ErrorContext(user_id=str(identity.id)),
        )
    return user


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: Identity = Depends(get_identity),
    store: SqlEntityStore = Depends(get_store),
):
    return UserResponse.model_validate(await _get_caller_or_404(identity, store))


@router.put("/me", response_model=UserResponse)
async def update_me(
    body: UserUpdate,
    identity: Identity = Depends(get_identity),
    store: SqlEntityStore = Depends(get_store),
):
    user = await _get_caller_or_404(identity, store)
    changes = body.model_dump(exclude_none=True)
    if changes:
        user = await store.update(user, **changes)
        logger.info("Profile updated", extra={"user_id": str(user.id)})
    return UserResponse.model_validate(user)
