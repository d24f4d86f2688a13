"""Refresh token session cache backed by Redis."""

import logging

import redis

logger = logging.getLogger(__name__)

KEY_PREFIX = "refresh_token:"


class SessionCache:
    """Maps opaque refresh tokens to user ids with a fixed time-to-live.

    Every operation is a single-key Redis command, so the most recent
    ``put`` or ``delete`` for a token wins without any locking. Connection
    errors propagate to the caller.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int):
        self.client = client
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def _key(token: str) -> str:
        return f"{KEY_PREFIX}{token}"

    def put(self, token: str, user_id: int, ttl_seconds: int | None = None) -> None:
        """Store a token, replacing any previous mapping."""
        self.client.set(self._key(token), user_id, ex=ttl_seconds or self.ttl_seconds)

    def get(self, token: str) -> int | None:
        """Return the user id for a token, or None if unknown or expired."""
        if not token:
            return None
        value = self.client.get(self._key(token))
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            logger.warning("Discarding malformed session entry")
            return None

    def delete(self, token: str) -> None:
        """Revoke a token. Deleting an unknown token is a no-op."""
        if token:
            self.client.delete(self._key(token))
