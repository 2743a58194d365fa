from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from demo_user.db import engine as db
from demo_user.repos.sql_user_repo import SqlUserRepo
from demo_user.repos.user_repo import UserRepo
from demo_user.services.users_service import UserService


@asynccontextmanager
async def open_user_repo(app: FastAPI) -> AsyncIterator[UserRepo]:
    """Yield the repo backing this app for one unit of work.

    With a database: a SqlUserRepo on a fresh session, committed on exit.
    Without: the shared InMemoryUserRepo stored on app.state at startup.
    """
    if db.async_session_factory is None:
        yield app.state.user_repo
    else:
        async with db.session_scope() as session:
            yield SqlUserRepo(session)


async def get_user_repo(request: Request) -> AsyncGenerator[UserRepo, None]:
    async with open_user_repo(request.app) as repo:
        yield repo


def get_user_service(
    repo: Annotated[UserRepo, Depends(get_user_repo)],
) -> UserService:
    return UserService(repo)
