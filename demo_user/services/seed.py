"""Startup seed step: insert demo users into an empty store.

The count check and the inserts share one repo.  With a database that is
one session, so a failure part-way rolls the whole seed back; the
in-memory store keeps whatever was inserted before the failure.
Two instances booting against the same empty database at the same moment
can both see count == 0 and insert twice; the service is meant to run as
a single instance.
"""

from __future__ import annotations

import logging

from demo_user.core.metrics import USERS_SEEDED
from demo_user.services.users_service import UserService

logger = logging.getLogger(__name__)

DEMO_USERS: tuple[tuple[str, str], ...] = (
    ("John Doe", "john@example.com"),
    ("Jane Smith", "jane@example.com"),
    ("Bob Johnson", "bob@example.com"),
)


async def seed_demo_users(service: UserService) -> int:
    """Insert DEMO_USERS when the store is empty.  Returns rows inserted."""
    existing = await service.count_users()
    if existing:
        logger.info("Seed skipped: store already holds %d user(s)", existing)
        return 0

    for name, email in DEMO_USERS:
        await service.create_user(name, email)
    USERS_SEEDED.inc(len(DEMO_USERS))
    logger.info("Seeded %d demo users", len(DEMO_USERS))
    return len(DEMO_USERS)
