# turfbook/redis_client.py

from functools import lru_cache

import redis

from .config import get_settings


@lru_cache
def get_redis_client() -> redis.Redis | None:
    """Shared client, or None when no Redis URL is configured."""
    url = get_settings().redis_url
    if not url:
        return None
    return redis.Redis.from_url(url, decode_responses=True)
