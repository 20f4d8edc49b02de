"""Service test fixtures — async DB, managers and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db, get_identity and get_notifier overridden on the app
    - db_manager patched so the readiness probe sees the test engine
    - Notifications go to a RecordingNotifier; background deliveries are run
      explicitly in manager tests and by the ASGI app in route tests

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares one connection, so rows
      seeded through test_db are visible to the client's sessions
    - `act_as` swaps the caller identity between requests within one test
"""

import pytest
from fastapi import BackgroundTasks
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from tasktracker.api.dependencies import get_notifier
from tasktracker.api.identity import get_identity
from tasktracker.db.base import Base
from tasktracker.infrastructure.database import get_db, DatabaseSessionManager
from tasktracker.infrastructure.entity_store import SqlEntityStore
import tasktracker.infrastructure.database as db_module
import tasktracker.models  # noqa: F401
from tasktracker.models.user import User
from tasktracker.main import app
from tasktracker.services.notification_dispatcher import NotificationDispatcher
from tasktracker.services.task_lifecycle import TaskLifecycleManager
from tasktracker.services.team_manager import TeamManager

from tests.services.fakes import RecordingNotifier, identity_of

SENDER = "tasks@example.com"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlEntityStore(test_db)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def background():
    return BackgroundTasks()


@pytest.fixture
def task_manager(store, notifier, background):
    dispatcher = NotificationDispatcher(notifier, SENDER, background)
    return TaskLifecycleManager(store, dispatcher)


@pytest.fixture
def team_manager(store):
    return TeamManager(store)


@pytest.fixture
def make_user(test_db):
    """Factory: insert a registered user (registration itself is external)."""
    async def _make(
        email: str = "john@example.com",
        first_name: str = "John",
        last_name: str = "Doe",
    ) -> User:
        user = User(
            first_name=first_name, last_name=last_name,
            email=email, password="hashed-password",
        )
        test_db.add(user)
        await test_db.commit()
        await test_db.refresh(user)
        return user
    return _make


@pytest.fixture
async def user(make_user):
    return await make_user()


@pytest.fixture
def valid_payload():
    return {
        "title": "Test Task",
        "description": "This is a test task",
        "status": "open",
        "due_date": "04-03-2024",
    }


@pytest.fixture
def caller():
    """Mutable holder for the identity the client's requests run as."""
    return {"identity": None}


@pytest.fixture
def act_as(caller):
    def _act_as(user: User):
        caller["identity"] = identity_of(user)
        return caller["identity"]
    return _act_as


@pytest.fixture
async def client(test_engine, test_session_factory, notifier, caller):
    """FastAPI test client with DB, identity and notifier overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    def override_get_identity():
        identity = caller["identity"]
        if identity is None:
            raise AssertionError("call act_as(user) before hitting the API")
        return identity

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity] = override_get_identity
    app.dependency_overrides[get_notifier] = lambda: notifier

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
