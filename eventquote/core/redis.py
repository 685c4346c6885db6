import asyncio
import logging
from typing import Optional
from redis.asyncio import Redis
from eventquote.core.config import settings

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None


async def init_redis() -> Redis:
    global redis
    try:
        redis = Redis.from_url(
            settings.REDIS_URL,
            decode_responses=False,
            socket_connect_timeout=settings.CACHE_TIMEOUT * 4,
        )
        await redis.ping()
        logger.info(f"Connected to Redis at {settings.REDIS_URL.rsplit('@', 1)[-1]}")
        return redis
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        redis = None
        raise


async def close_redis():
    global redis
    if redis:
        await redis.close()
        redis = None


def get_redis() -> Optional[Redis]:
    """Return the shared client, or None when Redis is not connected.

    Every caller treats Redis as best-effort (cache, rate limit, idempotency),
    so a missing connection is not an error here.
    """
    return redis


async def ping_redis() -> bool:
    client = get_redis()
    if client is None:
        return False
    try:
        return bool(await asyncio.wait_for(client.ping(), timeout=settings.CACHE_TIMEOUT))
    except Exception as e:
        logger.warning(f"Redis ping failed: {e!r}")
        return False
