from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class User:
    id: int | None
    name: str
    email: str

    @staticmethod
    def new(*, name: str, email: str) -> User:
        # The store assigns the id on first save.
        return User(id=None, name=name, email=email)
