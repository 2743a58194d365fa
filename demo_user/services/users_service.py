from __future__ import annotations

import logging

from demo_user.models.user import User
from demo_user.repos.user_repo import UserRepo

logger = logging.getLogger(__name__)


class UserService:
    """Thin layer between the HTTP routes and the user repository.

    Every method forwards to the repo unchanged.  "Not found" is a None
    result, never an exception; input is not validated.
    """

    def __init__(self, repo: UserRepo) -> None:
        self._repo = repo

    async def get_all_users(self) -> list[User]:
        return await self._repo.list_all()

    async def get_user_by_id(self, user_id: int) -> User | None:
        return await self._repo.get_by_id(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._repo.get_by_email(email)

    async def search_users_by_name(self, name: str) -> list[User]:
        return await self._repo.search_by_name(name)

    async def create_user(self, name: str, email: str) -> User:
        user = await self._repo.save(User.new(name=name, email=email))
        logger.info("Created user id=%s email=%s", user.id, user.email)
        return user

    async def delete_user(self, user_id: int) -> None:
        await self._repo.delete_by_id(user_id)
        logger.info("Deleted user id=%d (no-op if absent)", user_id)

    async def count_users(self) -> int:
        return await self._repo.count()
