"""Service test fixtures — real SQLite databases + dispatch wiring.

Invariants:
    - Every test gets a fresh file-backed SQLite database under tmp_path
    - Schema created through DatabaseSessionManager.create_schema (startup path)
    - Engine disposed after each test

Design Decisions:
    - File DB over :memory:: dispatch opens a new connection per call, and an
      in-memory database would be empty on every connection
"""

import pytest

from userchat.infrastructure.database import DatabaseSessionManager
from userchat.services.operation_dispatch import OperationDispatch
from userchat.services.user_store import SqlUserStore


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'users.db'}",
    )
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
async def test_db(db_manager):
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def store(test_db):
    return SqlUserStore(test_db)


@pytest.fixture
def dispatch(db_manager):
    return OperationDispatch(db_manager)


@pytest.fixture
async def count_users(db_manager):
    """Count rows through an independent session."""
    async def _count() -> int:
        async with db_manager.session() as db:
            return len(await SqlUserStore(db).list_all())
    return _count
