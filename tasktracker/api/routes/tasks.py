"""Task Routes — HTTP surface of the task lifecycle.

Invariants:
    - Every route requires a verified caller (get_identity)
    - Routes never contain business logic: parse, delegate to TaskLifecycleManager, serialize
    - Static paths (/search, /assigned-to-me, /assigned-to/...) are declared before /{task_id}

Design Decisions:
    - Path ids typed as str: malformed ids reach the manager and come back as BadRequest
      (400) instead of a framework-level 422
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from tasktracker.api.dependencies import get_task_manager
from tasktracker.api.identity import get_identity
from tasktracker.core.domain_types import Identity
from tasktracker.schemas.task import (
    AssignRequest, CommentCreate, TaskPayload, TaskResponse,
)
from tasktracker.services.task_lifecycle import TaskLifecycleManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


def _many(tasks) -> list[TaskResponse]:
    return [TaskResponse.model_validate(t) for t in tasks]


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskPayload,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    """Create a task. Status and due date are required."""
    task = await manager.create(body.model_dump(), identity)
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    status_filter: str | None = Query(None, alias="status"),
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    return _many(await manager.list_tasks(status_filter))


@router.get("/search", response_model=list[TaskResponse])
async def search_tasks(
    query: str | None = Query(None),
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    """Case-insensitive substring search over title and description."""
    return _many(await manager.search(query))


@router.get("/assigned-to-me", response_model=list[TaskResponse])
async def list_my_tasks(
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    return _many(await manager.list_assigned_to_self(identity))


@router.get("/assigned-to/{user_id}", response_model=list[TaskResponse])
async def list_tasks_assigned_to(
    user_id: str,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    return _many(await manager.list_assigned_to(user_id))


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    return TaskResponse.model_validate(await manager.get(task_id))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    body: TaskPayload,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    """Update a task. Blank fields keep their stored value; the assignee is notified."""
    task = await manager.update(task_id, body.model_dump())
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=TaskResponse)
async def delete_task(
    task_id: str,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    """Delete a task and its comments. Returns the removed record."""
    return TaskResponse.model_validate(await manager.delete(task_id))


@router.put("/{task_id}/assign", response_model=TaskResponse)
async def assign_task(
    task_id: str,
    body: AssignRequest,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    task = await manager.assign(task_id, body.assigned_to)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    task_id: str,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    """Close a task. Idempotent."""
    return TaskResponse.model_validate(await manager.complete(task_id))


@router.post(
    "/{task_id}/comments", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    task_id: str,
    body: CommentCreate,
    identity: Identity = Depends(get_identity),
    manager: TaskLifecycleManager = Depends(get_task_manager),
):
    task = await manager.add_comment(task_id, identity, body.text)
    return TaskResponse.model_validate(task)
