"""Redis client backing the logout token blacklist."""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..config import get_settings
from .logging import get_logger

logger = get_logger("redis")


class RedisClient:
    """Thin wrapper over ``redis.asyncio``.

    Every call degrades to a falsy answer when Redis is not connected or
    errors, so a Redis outage never blocks authentication.
    """

    BLACKLIST_PREFIX = "blacklist:"

    def __init__(self, url: Optional[str] = None, max_connections: Optional[int] = None):
        settings = get_settings()
        self.url = url or settings.redis_url
        self.max_connections = max_connections or settings.redis_max_connections
        self.redis: Optional[redis.Redis] = None

    @property
    def is_connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        """Connect to Redis."""
        client = redis.from_url(
            self.url, max_connections=self.max_connections, decode_responses=True
        )
        try:
            await client.ping()
        except RedisError:
            await client.aclose()
            raise
        self.redis = client
        logger.info("Connected to Redis")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def ping(self) -> bool:
        if self.redis is None:
            return False
        return bool(await self.redis.ping())

    async def add_to_blacklist(self, token_jti: str, expire: int) -> bool:
        """Blacklist a token id until it would have expired anyway."""
        if self.redis is None:
            logger.warning("Redis unavailable, token %s not blacklisted", token_jti)
            return False
        try:
            return bool(await self.redis.setex(f"{self.BLACKLIST_PREFIX}{token_jti}", max(expire, 1), "1"))
        except RedisError as e:
            logger.error("Failed to blacklist token %s: %s", token_jti, e)
            return False

    async def is_token_blacklisted(self, token_jti: str) -> bool:
        """Check if token is blacklisted."""
        if self.redis is None:
            return False
        try:
            return await self.redis.exists(f"{self.BLACKLIST_PREFIX}{token_jti}") > 0
        except RedisError as e:
            logger.warning("Blacklist lookup skipped for %s: %s", token_jti, e)
            return False


# Singleton instance
_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Get Redis client singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
