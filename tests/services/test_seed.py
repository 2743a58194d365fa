from __future__ import annotations

import asyncio

import pytest
from prometheus_client import REGISTRY
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from demo_user.db import engine as db
from demo_user.models.user import User
from demo_user.repos.sql_user_repo import SqlUserRepo
from demo_user.repos.user_repo import InMemoryUserRepo
from demo_user.services.seed import DEMO_USERS, seed_demo_users
from demo_user.services.users_service import UserService


def _seeded() -> float:
    return REGISTRY.get_sample_value("users_seeded_total") or 0.0


def test_seed_populates_empty_store(service: UserService) -> None:
    inserted = asyncio.run(seed_demo_users(service))
    assert inserted == 3

    users = asyncio.run(service.get_all_users())
    assert [(u.name, u.email) for u in users] == [
        ("John Doe", "john@example.com"),
        ("Jane Smith", "jane@example.com"),
        ("Bob Johnson", "bob@example.com"),
    ]


def test_seed_skipped_when_store_not_empty(service: UserService) -> None:
    asyncio.run(service.create_user("Existing", "existing@example.com"))

    inserted = asyncio.run(seed_demo_users(service))

    assert inserted == 0
    assert asyncio.run(service.count_users()) == 1


def test_seed_runs_once_across_restarts(service: UserService) -> None:
    asyncio.run(seed_demo_users(service))
    asyncio.run(seed_demo_users(service))
    assert asyncio.run(service.count_users()) == len(DEMO_USERS)


def test_seed_increments_counter(service: UserService) -> None:
    before = _seeded()
    asyncio.run(seed_demo_users(service))
    assert _seeded() == before + 3


class _FailingThirdSave(SqlUserRepo):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self._saves = 0

    async def save(self, user: User) -> User:
        self._saves += 1
        if self._saves == 3:
            raise OperationalError("INSERT INTO users", {}, Exception("disk full"))
        return await super().save(user)


def test_seed_failure_rolls_back_with_database(
    monkeypatch: pytest.MonkeyPatch, sqlite_engine: AsyncEngine
) -> None:
    monkeypatch.setattr(db, "async_session_factory", db.build_session_factory(sqlite_engine))

    async def _main() -> int:
        await db.create_schema(sqlite_engine)
        with pytest.raises(OperationalError):
            async with db.session_scope() as session:
                await seed_demo_users(UserService(_FailingThirdSave(session)))
        async with db.session_scope() as session:
            remaining = await SqlUserRepo(session).count()
        await sqlite_engine.dispose()
        return remaining

    assert asyncio.run(_main()) == 0


def test_seed_failure_keeps_partial_inserts_in_memory(
    repo: InMemoryUserRepo, monkeypatch: pytest.MonkeyPatch
) -> None:
    original_save = repo.save
    calls = []

    async def _save(user: User) -> User:
        calls.append(user)
        if len(calls) == 3:
            raise RuntimeError("boom")
        return await original_save(user)

    monkeypatch.setattr(repo, "save", _save)

    with pytest.raises(RuntimeError):
        asyncio.run(seed_demo_users(UserService(repo)))
    assert asyncio.run(repo.count()) == 2
