# tests/conftest.py

import os

# Keep test runs from writing log files; must be set before taskboard is imported
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from taskboard.cmd.api.main import create_app
from taskboard.core.config import Settings
from taskboard.core.database import SQLDatabase
from taskboard.services.task_service import TaskService

from .fakes import InMemoryTaskRepository, TickingClock


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing every backend at throwaway locations."""
    return Settings(
        storage_backend="sql",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}",
        log_to_file=False,
        cors_origin="",
    )


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def repository(clock: TickingClock) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(clock=clock)


@pytest.fixture()
def service(repository: InMemoryTaskRepository) -> TaskService:
    return TaskService(repository)


@pytest.fixture()
def client(settings: Settings, repository: InMemoryTaskRepository):
    """API client backed by the in-memory repository."""
    app = create_app(settings=settings, repository=repository)
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def sql_database(tmp_path: Path):
    """Connected SQLite database with the schema created."""
    database = SQLDatabase(f"sqlite+aiosqlite:///{tmp_path / 'repo.db'}")
    await database.connect()
    await database.init_schema()
    yield database
    await database.disconnect()
