"""Dependency Wiring — builds managers per request from session, notifier and task queue.

Invariants:
    - One SqlEntityStore per request, bound to that request's AsyncSession
    - The notifier is process-wide and overridable (tests swap in a recording fake)
    - Notification delivery is queued on the request's BackgroundTasks

Design Decisions:
    - Plain Depends() factories over a DI container: explicit and easy to override
"""

from functools import lru_cache

from fastapi import BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tasktracker.config import Settings, get_settings
from tasktracker.core.repository_protocols import Notifier
from tasktracker.infrastructure.database import get_db
from tasktracker.infrastructure.entity_store import SqlEntityStore
from tasktracker.infrastructure.mailer import build_notifier
from tasktracker.services.notification_dispatcher import NotificationDispatcher
from tasktracker.services.task_lifecycle import TaskLifecycleManager
from tasktracker.services.team_manager import TeamManager


@lru_cache
def _process_notifier() -> Notifier:
    return build_notifier(get_settings())


def get_notifier() -> Notifier:
    return _process_notifier()


def get_store(db: AsyncSession = Depends(get_db)) -> SqlEntityStore:
    return SqlEntityStore(db)


def get_task_manager(
    background_tasks: BackgroundTasks,
    store: SqlEntityStore = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
    settings: Settings = Depends(get_settings),
) -> TaskLifecycleManager:
    dispatcher = NotificationDispatcher(
        notifier, settings.mail_sender, background_tasks,
    )
    return TaskLifecycleManager(store, dispatcher)


def get_team_manager(
    store: SqlEntityStore = Depends(get_store),
) -> TeamManager:
    return TeamManager(store)
