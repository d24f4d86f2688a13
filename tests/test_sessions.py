"""Tests for the refresh token session cache."""

from unittest.mock import MagicMock

from idea_pool.services.sessions import SessionCache

WEEK = 604800


class TestSessionCacheWithMock:
    """Tests for the Redis commands SessionCache issues."""

    def test_put_sets_expiry(self):
        """Test put stores the user id with the configured TTL."""
        client = MagicMock()
        SessionCache(client, ttl_seconds=WEEK).put("abc", 5)
        client.set.assert_called_once_with("refresh_token:abc", 5, ex=WEEK)

    def test_put_custom_ttl(self):
        """Test put accepts an explicit TTL."""
        client = MagicMock()
        SessionCache(client, ttl_seconds=WEEK).put("abc", 5, ttl_seconds=30)
        client.set.assert_called_once_with("refresh_token:abc", 5, ex=30)

    def test_get_decodes_bytes(self):
        """Test get converts the stored value back to an int."""
        client = MagicMock()
        client.get.return_value = b"17"
        assert SessionCache(client, ttl_seconds=WEEK).get("abc") == 17
        client.get.assert_called_once_with("refresh_token:abc")

    def test_get_malformed_value(self):
        """Test a non-numeric stored value reads as a miss."""
        client = MagicMock()
        client.get.return_value = b"garbage"
        assert SessionCache(client, ttl_seconds=WEEK).get("abc") is None

    def test_empty_token_skips_redis(self):
        """Test empty tokens never reach Redis."""
        client = MagicMock()
        cache = SessionCache(client, ttl_seconds=WEEK)
        assert cache.get("") is None
        cache.delete("")
        client.get.assert_not_called()
        client.delete.assert_not_called()


class TestSessionCacheLifecycle:
    """Tests for put/get/delete semantics."""

    def test_put_then_get(self, session_cache):
        """Test get returns what put stored."""
        session_cache.put("token", 3)
        assert session_cache.get("token") == 3

    def test_put_overwrites(self, session_cache):
        """Test a second put for the same token wins."""
        session_cache.put("token", 3)
        session_cache.put("token", 4)
        assert session_cache.get("token") == 4

    def test_delete(self, session_cache):
        """Test deleted tokens are gone and deleting again is harmless."""
        session_cache.put("token", 3)
        session_cache.delete("token")
        assert session_cache.get("token") is None
        session_cache.delete("token")
        session_cache.delete("never-stored")

    def test_miss(self, session_cache):
        """Test unknown tokens read as None."""
        assert session_cache.get("unknown") is None

    def test_expiry(self, session_cache, fake_redis):
        """Test tokens expire after their TTL."""
        session_cache.put("token", 3)
        fake_redis.advance(WEEK - 1)
        assert session_cache.get("token") == 3
        fake_redis.advance(1)
        assert session_cache.get("token") is None
