from redis.asyncio import Redis, from_url

from streaming_platform.platform.config import settings

_redis: Redis | None = None


def get_redis() -> Redis:
    global _redis
    if _redis is None:
        _redis = from_url(settings.redis_url, decode_responses=True, socket_connect_timeout=1)
    return _redis
