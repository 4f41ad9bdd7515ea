"""
Storage Module - Key-Value Storage Medium

The cart and wishlist persist as JSON strings under fixed keys. Two media:
- MemoryStorage for tests and local development
- RedisStorage backed by the synchronous Upstash Redis client in deployment
"""

from typing import Optional, Protocol

from upstash_redis import Redis

from storefront import config
from storefront.logging import get_logger

logger = get_logger(__name__)


class KeyValueStorage(Protocol):
    """Synchronous string storage scoped to one origin/session."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage; one instance per process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class RedisStorage:
    """
    Upstash Redis storage.

    Values are plain strings; no TTL is set so carts survive until cleared,
    the same lifetime browser local storage gives them.
    """

    def __init__(self, client, prefix: str = "storefront:"):
        self.client = client
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self.client.get(self._key(key))
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def set(self, key: str, value: str) -> None:
        self.client.set(self._key(key), value)

    def remove(self, key: str) -> None:
        self.client.delete(self._key(key))


class NamespacedStorage:
    """Prefixes every key, giving each browser session its own key space."""

    def __init__(self, storage: KeyValueStorage, namespace: str):
        self.storage = storage
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        return self.storage.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self.storage.set(self._key(key), value)

    def remove(self, key: str) -> None:
        self.storage.remove(self._key(key))


_storage: Optional[KeyValueStorage] = None


def get_storage() -> KeyValueStorage:
    """
    Get the process-wide storage medium (singleton).

    Uses Upstash Redis when UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN
    are set, in-memory storage otherwise.
    """
    global _storage

    if _storage is None:
        if config.UPSTASH_REDIS_REST_URL and config.UPSTASH_REDIS_REST_TOKEN:
            client = Redis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)
            _storage = RedisStorage(client)
            logger.info("Using Upstash Redis storage")
        else:
            _storage = MemoryStorage()
            logger.warning("Redis not configured; cart and wishlist are kept in memory")

    return _storage


def reset_storage() -> None:
    """Drop the singleton (tests)."""
    global _storage
    _storage = None
