from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from demo_user.api.dependencies import open_user_repo
from demo_user.api.health import router as health_router
from demo_user.api.metrics_endpoint import router as metrics_router
from demo_user.api.users import router as users_router
from demo_user.core.config import SETTINGS
from demo_user.core.logging import setup_logging
from demo_user.db.engine import lifespan_db
from demo_user.middleware.metrics import MetricsMiddleware
from demo_user.middleware.request_context import (
    RequestContextMiddleware,
    install_request_id_filter,
)
from demo_user.repos.user_repo import InMemoryUserRepo
from demo_user.services.seed import seed_demo_users
from demo_user.services.users_service import UserService

# Configure logging before anything else runs.
setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
install_request_id_filter()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    async with lifespan_db():
        # Only read when no DATABASE_URL is configured.
        app.state.user_repo = InMemoryUserRepo()

        if SETTINGS.seed_demo_data:
            async with open_user_repo(app) as repo:
                await seed_demo_users(UserService(repo))
        else:
            logger.info("Seed step disabled (SEED_DEMO_DATA=false)")

        yield


app = FastAPI(
    title="demo-user-service",
    lifespan=lifespan,
    docs_url="/docs" if SETTINGS.is_dev else None,
    redoc_url="/redoc" if SETTINGS.is_dev else None,
)

# Last-added runs first: RequestContext (outermost) → Metrics → route handler
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(metrics_router)
app.include_router(health_router)
app.include_router(users_router)

logger.info(
    "demo-user-service configured  env=%s log_level=%s port=%d store=%s",
    SETTINGS.app_env,
    SETTINGS.log_level,
    SETTINGS.port,
    "database" if SETTINGS.database_url else "in-memory",
)
