"""Health service implementation."""

import time
from typing import Any, Dict, Optional

from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ..logging import get_logger
from ..redis_client import RedisClient, get_redis_client
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService

logger = get_logger("services.health")


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession, redis_client: Optional[RedisClient] = None):
        self.session = session
        self.redis_client = redis_client or get_redis_client()

    async def get_health_status(self) -> HealthCheckResponse:
        """Database down is unhealthy; Redis down only degrades logout."""
        db_health = await self.check_database_health()
        redis_health = await self.check_redis_health()

        overall_status = "healthy"
        if not db_health["connected"]:
            overall_status = "unhealthy"
        elif not redis_health["connected"]:
            overall_status = "degraded"

        return HealthCheckResponse(
            status=overall_status,
            version=__version__,
            checks={"database": db_health, "redis": redis_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection."""
        started = time.perf_counter()
        try:
            await self.session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database health check failed", extra={"error": str(e)})
            return {"connected": False, "status": "unhealthy", "error": str(e)}
        return {
            "connected": True,
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        }

    async def check_redis_health(self) -> Dict[str, Any]:
        """Check Redis connection."""
        if not self.redis_client.is_connected:
            return {"connected": False, "status": "unavailable"}

        started = time.perf_counter()
        try:
            await self.redis_client.ping()
        except (RedisError, OSError) as e:
            logger.warning("Redis health check failed", extra={"error": str(e)})
            return {"connected": False, "status": "unhealthy", "error": str(e)}
        return {
            "connected": True,
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        }
