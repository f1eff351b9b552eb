"""
Shared fixtures: in-memory database, fake push delivery, temp document storage
and an HTTP client bound to the app.
"""
import os

# Settings are read at import time; keep tests off real infrastructure
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CRON_SECRET"] = "test-secret"
os.environ["TIMEZONE"] = "UTC"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ.pop("REMINDER_INTERVAL_MINUTES", None)
os.environ["DUE_NOTIFICATION_ONCE"] = "false"
os.environ.pop("VAPID_PUBLIC_KEY", None)
os.environ.pop("VAPID_PRIVATE_KEY", None)

from typing import AsyncGenerator, Dict, List, Set

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from rentdesk.api.deps import get_document_storage, get_push_service
from rentdesk.database import Base, get_db
from rentdesk.main import app
from rentdesk.services.storage import DocumentStorage


class FakePushService:
    """Records pushes instead of sending them. Tasks listed in fail_for raise."""

    def __init__(self, configured: bool = True):
        self.configured = configured
        self.reminders: List[str] = []
        self.due: List[str] = []
        self.broadcasts: List[Dict] = []
        self.fail_for: Set[str] = set()

    @property
    def is_configured(self) -> bool:
        return self.configured

    def _check(self, task):
        if task.id in self.fail_for:
            raise RuntimeError(f"push failed for {task.id}")

    async def send_task_reminder(self, task, today, db):
        self._check(task)
        self.reminders.append(task.id)
        return {"sent": 1, "failed": 0, "removed": 0}

    async def send_task_due(self, task, db):
        self._check(task)
        self.due.append(task.id)
        return {"sent": 1, "failed": 0, "removed": 0}

    async def send_to_all_subscriptions(self, payload, db):
        self.broadcasts.append(payload)
        return {"sent": 1, "failed": 0, "removed": 0}


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite ignores ON DELETE CASCADE unless asked
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def push() -> FakePushService:
    return FakePushService()


@pytest.fixture
def storage(tmp_path) -> DocumentStorage:
    return DocumentStorage(str(tmp_path / "documents"))


@pytest.fixture
async def client(session_factory, push, storage) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_push_service] = lambda: push
    app.dependency_overrides[get_document_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def cron_headers() -> Dict[str, str]:
    return {"Authorization": "Bearer test-secret"}


UNIT_PAYLOAD = {
    "name": "House A - Unit 1",
    "property_type": "Residential",
    "location": "Downtown",
    "address": "12 Main St",
    "monthly_rent": 1200,
    "tenant": {"name": "Dana Reyes", "phone": "555-0101", "email": "dana@example.com"},
    "contract_start": "2024-01-01",
    "contract_end": "2025-12-31",
}


@pytest.fixture
async def unit(client) -> Dict:
    response = await client.post("/api/units", json=UNIT_PAYLOAD)
    assert response.status_code == 201
    return response.json()
