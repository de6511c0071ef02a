"""Redis connection and the capped-list helpers used by the notification history."""

import redis.asyncio as redis
from typing import Optional, Any, List
import json
import logging
from evalboard.core.config import settings

logger = logging.getLogger(__name__)

# Global Redis connection pool
redis_pool: Optional[redis.ConnectionPool] = None
redis_client: Optional[redis.Redis] = None


async def init_redis() -> None:
    """Initialize Redis connection pool."""
    global redis_pool, redis_client

    if not settings.REDIS_HOST:
        logger.warning("Redis not configured, skipping Redis initialization")
        return

    try:
        # Handle empty string passwords properly
        redis_password = settings.REDIS_PASSWORD if settings.REDIS_PASSWORD else None

        redis_pool = redis.ConnectionPool(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT or 6379,
            password=redis_password,
            db=settings.REDIS_DB,
            decode_responses=True,
            max_connections=20,
            retry_on_timeout=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )

        redis_client = redis.Redis(connection_pool=redis_pool)

        await redis_client.ping()
        logger.info(f"Redis connected to {settings.REDIS_HOST}:{settings.REDIS_PORT}")

    except redis.AuthenticationError as e:
        logger.error(f"Redis authentication failed: {e}")
        logger.error("Check REDIS_PASSWORD configuration")
        redis_pool = None
        redis_client = None
    except (redis.ConnectionError, redis.TimeoutError) as e:
        logger.error(f"Redis connection failed: {e}")
        logger.error(f"Redis config: host={settings.REDIS_HOST}, port={settings.REDIS_PORT}, db={settings.REDIS_DB}")
        redis_pool = None
        redis_client = None


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_pool, redis_client

    if redis_client:
        try:
            await redis_client.aclose()
        except redis.RedisError as e:
            logger.error(f"Error closing Redis client: {e}")

    if redis_pool:
        try:
            await redis_pool.disconnect()
        except redis.RedisError as e:
            logger.error(f"Error disconnecting Redis pool: {e}")

    redis_pool = None
    redis_client = None
    logger.info("Redis connection closed")


async def get_redis() -> Optional[redis.Redis]:
    """Get Redis client instance, or None when Redis is unavailable."""
    if redis_client is None:
        return None

    try:
        await redis_client.ping()
        return redis_client
    except redis.RedisError as e:
        logger.error(f"Redis health check failed: {e}")
        return None


async def redis_push_capped(key: str, value: Any, limit: int) -> bool:
    """Prepend a value to a list and trim it to the newest `limit` entries."""
    client = await get_redis()
    if not client:
        return False

    try:
        if not isinstance(value, str):
            value = json.dumps(value)

        async with client.pipeline(transaction=True) as pipe:
            await pipe.lpush(key, value)
            await pipe.ltrim(key, 0, limit - 1)
            await pipe.execute()
        return True

    except redis.RedisError as e:
        logger.error(f"Redis LPUSH error for key {key}: {e}")
        return False


async def redis_get_list(key: str) -> Optional[List[Any]]:
    """Read a whole list, newest first. None means Redis is unavailable."""
    client = await get_redis()
    if not client:
        return None

    try:
        values = await client.lrange(key, 0, -1)
    except redis.RedisError as e:
        logger.error(f"Redis LRANGE error for key {key}: {e}")
        return None

    items = []
    for value in values:
        try:
            items.append(json.loads(value))
        except json.JSONDecodeError:
            logger.warning(f"Skipping undecodable entry in {key}")
    return items


async def redis_replace_list(key: str, values: List[Any]) -> bool:
    """Overwrite a list with the given values, keeping their order."""
    client = await get_redis()
    if not client:
        return False

    try:
        async with client.pipeline(transaction=True) as pipe:
            await pipe.delete(key)
            if values:
                await pipe.rpush(key, *[json.dumps(v) for v in values])
            await pipe.execute()
        return True

    except redis.RedisError as e:
        logger.error(f"Redis replace error for key {key}: {e}")
        return False
