"""
GraphQL request context helpers
"""

from __future__ import annotations

import time
from typing import Any

import strawberry
from fastapi import HTTPException, Request

from ..config import settings
from ..database.connection import DatabaseConnectionError, MongoPool
from ..logging import get_logger

logger = get_logger(__name__)


def get_pool_from_info(info: strawberry.Info) -> MongoPool:
    """Return the MongoPool stored in the GraphQL context."""
    pool = info.context.get("pool") if isinstance(info.context, dict) else None
    if pool is None:
        raise RuntimeError("MongoPool missing from GraphQL context")
    return pool


async def get_context(request: Request) -> dict[str, Any]:
    """Build the resolver context, acquiring a database connection up front."""
    pool: MongoPool = request.app.state.pool

    start = time.perf_counter()
    try:
        await pool.connect()
    except DatabaseConnectionError as e:
        logger.error("Failed to connect to MongoDB", error=str(e))
        raise HTTPException(status_code=503, detail="Database unavailable") from e

    connection_time_ms = (time.perf_counter() - start) * 1000
    if connection_time_ms > settings.slow_request_threshold_ms:
        logger.warning(
            "Slow MongoDB connection",
            connection_time_ms=round(connection_time_ms, 2),
            threshold_ms=settings.slow_request_threshold_ms,
        )

    return {
        "request": request,
        "pool": pool,
        "connection_time_ms": connection_time_ms,
    }
