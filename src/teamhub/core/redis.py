"""Redis client construction with graceful fallback.

Redis is optional: when REDIS_URL is unset or the server cannot be reached,
``connect_redis`` returns None and the features that depend on it (the
document store, the distributed rate-limit backend) degrade.
"""

from redis.asyncio import ConnectionPool, Redis

from src.teamhub.core.config import Settings
from src.teamhub.core.logging import get_logger

logger = get_logger(__name__)


async def connect_redis(settings: Settings) -> Redis | None:
    """Build a pooled client and ping it. Returns None if unavailable."""
    if not settings.redis_url:
        logger.info("Redis not configured (REDIS_URL not set)")
        return None

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    client = Redis(connection_pool=pool)
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Falling back to non-Redis mode.")
        await client.aclose()
        await pool.disconnect()
        return None

    logger.info("Redis connected successfully")
    return client


async def close_redis(client: Redis | None) -> None:
    """Close a client built by ``connect_redis``. Safe to call with None."""
    if client is None:
        return
    await client.aclose()
    await client.connection_pool.disconnect()
    logger.info("Redis connection closed")
