from __future__ import annotations

import asyncio
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

# Settings are read at import time; pin them before the app is imported.
os.environ["APP_ENV"] = "test"
os.environ.pop("DATABASE_URL", None)
os.environ.pop("SEED_DEMO_DATA", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine  # noqa: E402

from demo_user.db import engine as db  # noqa: E402
from demo_user.main import app  # noqa: E402
from demo_user.repos.user_repo import InMemoryUserRepo  # noqa: E402
from demo_user.services.users_service import UserService  # noqa: E402


@pytest.fixture
def client() -> Iterator[TestClient]:
    # Entering the client runs the lifespan: fresh in-memory store + seed.
    with TestClient(app) as c:
        yield c


@pytest.fixture
def repo() -> InMemoryUserRepo:
    return InMemoryUserRepo()


@pytest.fixture
def service(repo: InMemoryUserRepo) -> UserService:
    return UserService(repo)


@pytest.fixture
def sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'users.db'}"


@pytest.fixture
def sqlite_engine(sqlite_url: str) -> Iterator[AsyncEngine]:
    engine = db.build_engine(sqlite_url)
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def sql_backed_app(
    monkeypatch: pytest.MonkeyPatch, sqlite_engine: AsyncEngine
) -> AsyncEngine:
    """Point the app at a SQLite database instead of the in-memory store."""
    monkeypatch.setattr(db, "engine", sqlite_engine)
    monkeypatch.setattr(
        db, "async_session_factory", db.build_session_factory(sqlite_engine)
    )
    return sqlite_engine
