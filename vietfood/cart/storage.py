"""Cart persistence backends.

Storage is best-effort: save() logs failures and reports them through its
return value, never by raising, so a failed write cannot undo a reducer step.
"""
import json
from typing import Dict, Optional, Protocol

from upstash_redis import Redis

from vietfood.config import CART_STORAGE_KEY
from vietfood.db import TTL, RedisKeys, get_redis_sync
from vietfood.errors import StorageFailure
from vietfood.logging import get_logger

logger = get_logger(__name__)


class CartStorage(Protocol):
    """Key-value persistence of the serialized cart ({"items": [...]})."""

    def load(self) -> Optional[dict]:
        """Stored cart, None if nothing is stored. Raises StorageFailure if unreadable."""
        ...

    def save(self, data: dict) -> bool:
        """Persist the cart. Returns False on failure."""
        ...


class RedisCartStorage:
    """
    Cart storage in Upstash Redis.

    One key per cart (cart:{cart_id}) with a 24-hour TTL refreshed on every save.
    """

    def __init__(self, cart_id: str = CART_STORAGE_KEY, redis: Optional[Redis] = None):
        self.cart_id = cart_id
        self._redis = redis  # Lazy initialization

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    @property
    def key(self) -> str:
        return RedisKeys.cart_key(self.cart_id)

    def load(self) -> Optional[dict]:
        try:
            raw = self.redis.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read cart from Redis: {e}")
            raise StorageFailure(str(e)) from e

        if not raw:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupted cart data under {self.key}: {e}")
            raise StorageFailure(f"corrupted cart data: {e}") from e

        if not isinstance(data, dict):
            raise StorageFailure("corrupted cart data: expected an object")
        return data

    def save(self, data: dict) -> bool:
        try:
            self.redis.set(self.key, json.dumps(data, ensure_ascii=False), ex=TTL.CART)
            return True
        except Exception as e:
            logger.error(f"Failed to save cart to Redis: {e}")
            return False


class InMemoryCartStorage:
    """Process-local storage for tests and local runs."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: Dict[str, str] = {}
        if initial is not None:
            self.save(initial)

    def load(self) -> Optional[dict]:
        raw = self._data.get(CART_STORAGE_KEY)
        return json.loads(raw) if raw else None

    def save(self, data: dict) -> bool:
        self._data[CART_STORAGE_KEY] = json.dumps(data, ensure_ascii=False)
        return True
