"""Greeting, liveness, readiness and memory diagnostics.

/health is the liveness probe: if the process can answer, it is alive.
/ready is the readiness probe: it asks the user store for a row count and
returns 503 when that fails, so a load balancer can stop routing here
without the orchestrator restarting the process.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

import psutil
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from demo_user.api.dependencies import open_user_repo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

GREETING = "Spring Boot AOT Demo with Java 25 - Application is running!"

_MB = 1024 * 1024


@dataclass(frozen=True)
class MemoryInfo:
    """Memory counters in whole megabytes.

    max:   physical memory of the host
    used:  resident set size of this process
    free:  memory the host can still hand out
    total: used + free, i.e. what this process could grow to right now
    """

    max: int
    total: int
    used: int
    free: int

    def render(self) -> str:
        return (
            f"Memory Info: Max={self.max}MB, Total={self.total}MB, "
            f"Used={self.used}MB, Free={self.free}MB"
        )


def read_memory_info() -> MemoryInfo:
    vm = psutil.virtual_memory()
    rss = psutil.Process().memory_info().rss
    return MemoryInfo(
        max=vm.total // _MB,
        total=(rss + vm.available) // _MB,
        used=rss // _MB,
        free=vm.available // _MB,
    )


@router.get("/", response_class=PlainTextResponse)
async def home() -> str:
    return GREETING


@router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    return f"AOT Application is healthy - {datetime.now().isoformat()}"


@router.get("/memory", response_class=PlainTextResponse)
async def memory() -> str:
    return read_memory_info().render()


@router.get("/ready")
async def ready(request: Request) -> Response:
    try:
        async with open_user_repo(request.app) as repo:
            await repo.count()
    except (SQLAlchemyError, OSError):
        logger.exception("Readiness check failed: user store unreachable")
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(status_code=status.HTTP_200_OK)
