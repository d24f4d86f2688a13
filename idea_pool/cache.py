"""Redis client lifecycle for the refresh token session cache."""

import redis
from fastapi import Request

from idea_pool.config import get_settings

settings = get_settings()


def create_redis_client() -> redis.Redis:
    """Create the process-wide Redis client. Owned by the app lifespan."""
    return redis.from_url(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
    )


def get_redis(request: Request) -> redis.Redis:
    """Dependency that provides the Redis client opened at startup."""
    return request.app.state.redis
