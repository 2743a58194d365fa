"""SQLAlchemy table definitions.

These map to the frozen dataclass domain models in demo_user/models/.
Repos convert between SQLAlchemy rows and domain dataclasses.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from demo_user.db.engine import Base


class UserRow(Base):
    __tablename__ = "users"

    # SQLite only autoincrements an INTEGER PRIMARY KEY (already 64-bit there).
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Indexed for get_by_email; not unique.
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
