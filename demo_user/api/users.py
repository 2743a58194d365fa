from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel

from demo_user.api.dependencies import get_user_service
from demo_user.core.metrics import USER_LOOKUPS
from demo_user.models.user import User
from demo_user.services.users_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])

# Ids are signed 64-bit in the users table; anything outside fails binding.
UserId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1)]


class UserOut(BaseModel):
    id: int
    name: str
    email: str


def _to_out(user: User) -> UserOut:
    return UserOut(id=user.id, name=user.name, email=user.email)  # type: ignore[arg-type]


@router.get("/users", response_model=list[UserOut])
async def get_all_users(
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserOut]:
    users = await service.get_all_users()
    return [_to_out(u) for u in users]


@router.get("/users/search/{name}", response_model=list[UserOut])
async def search_users(
    name: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserOut]:
    users = await service.search_users_by_name(name)
    logger.debug("Name search %r matched %d user(s)", name, len(users))
    return [_to_out(u) for u in users]


@router.get("/users/{user_id}", response_model=UserOut)
async def get_user(
    user_id: UserId,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    user = await service.get_user_by_id(user_id)
    if user is None:
        USER_LOOKUPS.labels(result="missing").inc()
        logger.warning("User lookup miss id=%d", user_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    USER_LOOKUPS.labels(result="found").inc()
    return _to_out(user)
