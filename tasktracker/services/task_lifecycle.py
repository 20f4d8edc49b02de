"""Task Lifecycle Manager — create/read/update/delete/assign/complete/search for tasks.

Invariants:
    - Payload validation (core/validate_task.py) runs before any store access
    - Validation failures never leave a partial write behind
    - Update only overwrites fields that are non-blank in the payload
    - complete() is idempotent: closing a closed task is not an error
    - assign() notifies the new assignee; update() notifies the current assignee;
      neither waits for delivery
    - Empty result sets raise NoResultsError, never return []

Design Decisions:
    - Manager receives EntityStore + NotificationDispatcher by injection (no globals)
    - No concurrency control: read-modify-write per call, last commit wins
"""

import logging
from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import UUID

from sqlalchemy import or_

from tasktracker.core.domain_types import (
    Identity, NotificationKind, TaskStatus, parse_identifier,
)
from tasktracker.core.errors import (
    BadRequestError, ErrorContext, NoResultsError, ResourceNotFoundError,
    TaskValidationError,
)
from tasktracker.core.repository_protocols import EntityStore
from tasktracker.core.task_fields import (
    merge_task_fields, next_comment_timestamp, parse_due_date,
)
from tasktracker.core.validate_task import (
    is_blank, validate_task_payload,
)
from tasktracker.models.comment import Comment
from tasktracker.models.task import Task
from tasktracker.models.user import User
from tasktracker.services.notification_dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)

COMMENT_MAX_LENGTH: int = 1000


def _like_pattern(text: str) -> str:
    """Substring LIKE pattern with SQL wildcards in `text` escaped."""
    escaped = (
        text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


class TaskLifecycleManager:
    """Orchestrates task operations around the pure validation/merge rules."""

    def __init__(self, store: EntityStore, dispatcher: NotificationDispatcher):
        self.store = store
        self.dispatcher = dispatcher

    # ─── Reads ──────────────────────────────────────────────────

    async def get(self, task_id: str | UUID) -> Task:
        tid = parse_identifier(task_id, "task ID")
        task = await self.store.get(Task, tid)
        if not task:
            raise ResourceNotFoundError(
                "Task", str(tid), ErrorContext(task_id=str(tid)),
            )
        return task

    async def list_tasks(self, status_filter: str | None = None) -> list[Task]:
        criteria = []
        if status_filter:
            if status_filter not in {s.value for s in TaskStatus}:
                raise BadRequestError("Invalid task status")
            criteria.append(Task.status == status_filter)
        tasks = await self.store.find(
            Task, *criteria, order_by=Task.created_at,
        )
        if not tasks:
            raise NoResultsError("No tasks found")
        return tasks

    async def search(self, text: str | None) -> list[Task]:
        if is_blank(text):
            raise BadRequestError("Query parameter 'query' is required")
        pattern = _like_pattern(text)
        tasks = await self.store.find(
            Task,
            or_(
                Task.title.ilike(pattern, escape="\\"),
                Task.description.ilike(pattern, escape="\\"),
            ),
            order_by=Task.created_at,
        )
        if not tasks:
            raise NoResultsError("No tasks found matching the search criteria")
        return tasks

    async def list_assigned_to(self, user_id: str | UUID) -> list[Task]:
        uid = parse_identifier(user_id, "user ID")
        tasks = await self.store.find(
            Task, Task.assigned_to == uid, order_by=Task.created_at,
        )
        if not tasks:
            raise NoResultsError("No tasks assigned to this user")
        return tasks

    async def list_assigned_to_self(self, identity: Identity) -> list[Task]:
        return await self.list_assigned_to(identity.id)

    # ─── Writes ─────────────────────────────────────────────────

    async def create(self, payload: Mapping[str, Any], identity: Identity) -> Task:
        self._validate(payload)
        task = Task(
            title=payload["title"],
            description=payload["description"],
            status=payload["status"],
            due_date=parse_due_date(payload["due_date"]),
        )
        task = await self.store.insert(task)
        logger.info(
            "Task created",
            extra={"task_id": str(task.id), "user_id": str(identity.id)},
        )
        return task

    async def update(self, task_id: str | UUID, payload: Mapping[str, Any]) -> Task:
        self._validate(payload)
        task = await self.get(task_id)
        for name, value in merge_task_fields(payload).items():
            setattr(task, name, value)
        task = await self.store.save(task)

        if task.assigned_to:
            assignee = await self.store.get(User, task.assigned_to)
            if assignee:
                self.dispatcher.notify(NotificationKind.UPDATED, task, assignee)
            else:
                logger.warning(
                    "Assignee no longer exists, update notification skipped",
                    extra={"task_id": str(task.id), "user_id": str(task.assigned_to)},
                )
        return task

    async def delete(self, task_id: str | UUID) -> Task:
        task = await self.get(task_id)
        await self.store.delete(task)
        logger.info("Task deleted", extra={"task_id": str(task.id)})
        return task

    async def assign(self, task_id: str | UUID, assignee_id: str | UUID | None) -> Task:
        try:
            uid = parse_identifier(assignee_id, "user ID")
        except BadRequestError:
            raise BadRequestError("User not found")
        assignee = await self.store.get(User, uid)
        if not assignee:
            raise BadRequestError(
                "User not found", ErrorContext(user_id=str(uid)),
            )

        task = await self.get(task_id)
        task = await self.store.update(task, assigned_to=assignee.id)
        self.dispatcher.notify(NotificationKind.ASSIGNED, task, assignee)
        logger.info(
            "Task assigned",
            extra={"task_id": str(task.id), "user_id": str(assignee.id)},
        )
        return task

    async def complete(self, task_id: str | UUID) -> Task:
        task = await self.get(task_id)
        return await self.store.update(task, status=TaskStatus.CLOSED.value)

    async def add_comment(
        self, task_id: str | UUID, identity: Identity, text: str | None,
    ) -> Task:
        task = await self.get(task_id)
        if is_blank(text):
            raise BadRequestError("Comment text cannot be blank")
        if len(text) > COMMENT_MAX_LENGTH:
            raise BadRequestError(
                f"Comment must not exceed {COMMENT_MAX_LENGTH} characters",
            )

        previous = task.comments[-1].created_at if task.comments else None
        task.comments.append(Comment(
            user_id=identity.id,
            text=text,
            seq=len(task.comments),
            created_at=next_comment_timestamp(
                previous, datetime.now(timezone.utc),
            ),
        ))
        return await self.store.save(task)

    # ─── Helpers ────────────────────────────────────────────────

    def _validate(self, payload: Mapping[str, Any]) -> None:
        verdict = validate_task_payload(payload)
        if verdict:
            raise TaskValidationError(verdict["message"], verdict["rule"].value)
