"""SQLAlchemy implementation of UserRepo."""

from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from demo_user.db.tables import UserRow
from demo_user.models.user import User


class SqlUserRepo:
    """Satisfies the UserRepo Protocol over the `users` table.

    The session is owned by the caller, which decides when to commit.
    Writes are flushed so generated ids are visible immediately.

    Name search folds case in the database: ILIKE on PostgreSQL, lower()
    on both sides on SQLite.  SQLite's lower() only folds ASCII, so there
    "Élodie" is found by "Élo" and "LODIE" but not by "élo"; the in-memory
    repo folds full Unicode.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[User]:
        stmt = select(UserRow).order_by(UserRow.id)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_user(r) for r in rows]

    async def get_by_id(self, user_id: int) -> User | None:
        row = await self._session.get(UserRow, user_id)
        if row is None:
            return None
        return _row_to_user(row)

    async def get_by_email(self, email: str) -> User | None:
        stmt = (
            select(UserRow)
            .where(UserRow.email == email)
            .order_by(UserRow.id)
            .limit(1)
        )
        row = (await self._session.execute(stmt)).scalars().first()
        if row is None:
            return None
        return _row_to_user(row)

    async def search_by_name(self, fragment: str) -> list[User]:
        stmt = (
            select(UserRow)
            .where(UserRow.name.ilike(f"%{_escape_like(fragment)}%", escape="/"))
            .order_by(UserRow.id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_user(r) for r in rows]

    async def save(self, user: User) -> User:
        if user.id is None:
            row = UserRow(name=user.name, email=user.email)
            self._session.add(row)
        else:
            row = await self._session.merge(
                UserRow(id=user.id, name=user.name, email=user.email)
            )
        await self._session.flush()
        return _row_to_user(row)

    async def delete_by_id(self, user_id: int) -> None:
        stmt = delete(UserRow).where(UserRow.id == user_id)
        await self._session.execute(stmt)

    async def count(self) -> int:
        stmt = select(func.count()).select_from(UserRow)
        return (await self._session.execute(stmt)).scalar_one()


def _escape_like(fragment: str) -> str:
    return fragment.replace("/", "//").replace("%", "/%").replace("_", "/_")


def _row_to_user(row: UserRow) -> User:
    return User(id=row.id, name=row.name, email=row.email)
