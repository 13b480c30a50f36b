# inkwell/memory/redis_cache.py

import json
import logging
from typing import Any, Optional

import redis

from inkwell import config

logger = logging.getLogger(__name__)


# ============================================================
# REDIS CONNECTION (SAFE + CONFIGURABLE)
# ============================================================

def connect_redis() -> Optional[redis.Redis]:
    """
    Open and ping a Redis client.
    Returns None when Redis is unreachable (caller falls back to memory).
    """
    try:
        client = redis.Redis(
            host=config.REDIS_HOST,
            port=config.REDIS_PORT,
            db=config.REDIS_DB,
            decode_responses=True,
        )
        client.ping()
        return client
    except Exception as e:
        logger.warning("Redis unavailable: %s", e)
        return None


# ============================================================
# CACHE (SAME CONTRACT AS ExpiringCache)
# ============================================================

class RedisCache:
    """
    Values are stored as JSON with SETEX, so expiry is Redis' job.
    Never raises: Redis errors read as a miss; set() returns False when
    the write did not land, so callers that cannot lose it can react.
    """

    backend_name = "redis"

    def __init__(self, client: redis.Redis, prefix: str = "inkwell:"):
        self._r = client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def set(self, key: str, value: Any, ttl_seconds: float) -> bool:
        try:
            self._r.setex(
                self._key(key),
                max(1, int(ttl_seconds)),
                json.dumps(value),
            )
            return True
        except Exception as e:
            logger.warning("[CACHE] redis set failed for %s: %s", key, e)
            return False

    def get(self, key: str) -> Optional[Any]:
        try:
            data = self._r.get(self._key(key))
        except Exception as e:
            logger.warning("[CACHE] redis get failed for %s: %s", key, e)
            return None

        if data is None:
            return None

        try:
            return json.loads(data)
        except (TypeError, ValueError) as e:
            logger.warning("[CACHE] corrupted entry %s dropped: %s", key, e)
            self.delete(key)
            return None

    def delete(self, key: str) -> None:
        try:
            self._r.delete(self._key(key))
        except Exception as e:
            logger.warning("[CACHE] redis delete failed for %s: %s", key, e)

    def ping(self) -> bool:
        try:
            return bool(self._r.ping())
        except Exception:
            return False
