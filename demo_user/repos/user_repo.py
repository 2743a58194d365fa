from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from demo_user.models.user import User


class UserRepo(Protocol):
    async def list_all(self) -> list[User]: ...
    async def get_by_id(self, user_id: int) -> User | None: ...
    async def get_by_email(self, email: str) -> User | None: ...
    async def search_by_name(self, fragment: str) -> list[User]: ...
    async def save(self, user: User) -> User: ...
    async def delete_by_id(self, user_id: int) -> None: ...
    async def count(self) -> int: ...


class InMemoryUserRepo:
    """Dict-backed UserRepo used when no DATABASE_URL is configured."""

    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}
        self._next_id = 1

    async def list_all(self) -> list[User]:
        return [self._by_id[k] for k in sorted(self._by_id)]

    async def get_by_id(self, user_id: int) -> User | None:
        return self._by_id.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        # Email is not unique; the oldest match wins, same as the SQL repo.
        for user in await self.list_all():
            if user.email == email:
                return user
        return None

    async def search_by_name(self, fragment: str) -> list[User]:
        needle = fragment.lower()
        return [u for u in await self.list_all() if needle in u.name.lower()]

    async def save(self, user: User) -> User:
        if user.id is None:
            user = replace(user, id=self._next_id)
        self._by_id[user.id] = user  # type: ignore[index]
        self._next_id = max(self._next_id, user.id + 1)  # type: ignore[operator]
        return user

    async def delete_by_id(self, user_id: int) -> None:
        self._by_id.pop(user_id, None)

    async def count(self) -> int:
        return len(self._by_id)
