# ============================================================================
# FILE: app/core/cache.py
# ============================================================================
import redis
import json
from typing import Optional, Any
from app.config import settings
from app.core.exceptions import CacheUnavailableError
import logging

logger = logging.getLogger(__name__)

class RedisCache:
    """
    Redis helper for two concerns:
    - JSON values with a TTL (user list). Errors degrade to a cache miss.
    - Session ids mapped to raw user id strings. Errors propagate.
    """

    def __init__(self, client: Optional[redis.Redis] = None):
        if client is not None:
            self.redis_client = client
            return
        try:
            self.redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self.redis_client = None

    def set_cache(self, key: str, value: Any, expire: int = None) -> bool:
        """Set a cache value with optional expiration"""
        if not self.redis_client:
            return False

        try:
            serialized = json.dumps(value)
            if expire:
                self.redis_client.setex(key, expire, serialized)
            else:
                self.redis_client.set(key, serialized)
            return True
        except Exception as e:
            logger.error(f"Cache set error: {e}")
            return False

    def get_cache(self, key: str) -> Optional[Any]:
        """Get a cache value"""
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                return json.loads(value)
            return None
        except Exception as e:
            logger.error(f"Cache get error: {e}")
            return None

    def _require_client(self) -> redis.Redis:
        if not self.redis_client:
            raise CacheUnavailableError()
        return self.redis_client

    def set_session(self, session_id: str, user_id: str, expire: int = None) -> None:
        """Store session_id -> user_id with a TTL"""
        client = self._require_client()
        client.setex(session_id, expire or settings.SESSION_EXPIRE_SECONDS, user_id)

    def get_session_user(self, session_id: str) -> Optional[str]:
        """Resolve a session id to the user id it was issued for (None when expired)"""
        client = self._require_client()
        value = client.get(session_id)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

# Singleton instance
cache = RedisCache()

def get_cache() -> RedisCache:
    """Dependency hook returning the process-wide cache"""
    return cache
