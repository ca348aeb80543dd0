"""
Health Check Endpoints.

Provides liveness and readiness checks. Neither requires authentication.

Endpoints:
- /health: Liveness check (process running)
- /health/ready: Readiness check (database reachable)
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.core.dependencies import DbSession
from planner.backend.core.logging import get_logger
from planner.backend.core.utils import isoformat_utc, utc_now

router = APIRouter()
logger = get_logger(__name__)


async def check_database(session: AsyncSession) -> dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict with status, latency, and optional error message
    """
    try:
        start = time.perf_counter()
        await session.execute(text("SELECT 1"))

        latency_ms = int((time.perf_counter() - start) * 1000)

        return {
            "status": "healthy",
            "latency_ms": latency_ms,
        }

    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {
            "status": "unhealthy",
            "error": str(e),
        }


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Liveness check.

    Returns 200 if the process is running.
    No dependency checks - this endpoint should always respond quickly.
    """
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check(db: DbSession) -> dict[str, Any]:
    """
    Readiness check.

    Returns 200 if ready to serve traffic, 503 if the database is unreachable
    or does not answer within the configured database timeout.
    """
    from planner.backend.core.config import get_app_config

    timeout = get_app_config().application.timeouts.database

    try:
        db_result = await asyncio.wait_for(check_database(db), timeout=timeout)
    except asyncio.TimeoutError:
        db_result = {"status": "unhealthy", "error": f"timed out after {timeout}s"}

    checks = {"database": db_result}

    if db_result["status"] == "unhealthy":
        logger.warning("Readiness check failed", extra={"checks": checks})
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "checks": checks,
                "timestamp": isoformat_utc(utc_now()),
            },
        )

    return {
        "status": "healthy",
        "checks": checks,
        "timestamp": isoformat_utc(utc_now()),
    }
