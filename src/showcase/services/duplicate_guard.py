"""Client-scoped duplicate submission markers.

The guard answers "has this client already reviewed project X" and "has this
client already marked review Y helpful". It is advisory: a new client context
(another browser, cleared storage, a different ``X-Client-Id``) starts with an
empty record, and nothing server-side enforces uniqueness.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Final, Protocol

import redis

from showcase.core.settings import settings

logger = logging.getLogger(__name__)

REVIEWED_NAMESPACE: Final[str] = "reviewedProjects"
HELPFUL_NAMESPACE: Final[str] = "helpfulReviews"
_MARKER: Final[str] = "1"


class ClientStore(Protocol):
    """Minimal persistent key-value store scoped to client contexts."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def has(self, key: str) -> bool: ...


class MemoryClientStore:
    """In-process store; markers live as long as the process."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}
        self._lock = Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._values


class RedisClientStore:
    """Redis-backed store shared by every worker process."""

    def __init__(self, client: redis.Redis, *, ttl_seconds: int = 0) -> None:
        self._redis = client
        self._ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, *, ttl_seconds: int = 0) -> RedisClientStore:
        return cls(redis.Redis.from_url(url, decode_responses=True), ttl_seconds=ttl_seconds)

    def get(self, key: str) -> str | None:
        value = self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        if self._ttl_seconds > 0:
            self._redis.set(key, value, ex=self._ttl_seconds)
        else:
            self._redis.set(key, value)

    def has(self, key: str) -> bool:
        return bool(self._redis.exists(key))

    def close(self) -> None:
        self._redis.close()


class DuplicateGuard:
    """Duplicate-submission record for one client context."""

    def __init__(self, store: ClientStore, client_id: str) -> None:
        if not client_id:
            raise ValueError("client_id must be a non-empty string")
        self._store = store
        self.client_id = client_id

    def _key(self, namespace: str, item: object) -> str:
        return f"{namespace}:{self.client_id}:{item}"

    def has_reviewed(self, project_key: object) -> bool:
        """Return True if this client already reviewed ``project_key``."""
        return self._store.has(self._key(REVIEWED_NAMESPACE, project_key))

    def record_reviewed(self, project_key: object) -> None:
        """Remember that this client reviewed ``project_key``. Idempotent."""
        self._store.set(self._key(REVIEWED_NAMESPACE, project_key), _MARKER)

    def has_marked_helpful(self, review_id: object) -> bool:
        """Return True if this client already marked ``review_id`` helpful."""
        return self._store.has(self._key(HELPFUL_NAMESPACE, review_id))

    def record_helpful(self, review_id: object) -> None:
        """Remember that this client marked ``review_id`` helpful. Idempotent."""
        self._store.set(self._key(HELPFUL_NAMESPACE, review_id), _MARKER)


_MEMORY_STORE = MemoryClientStore()
_REDIS_STORE: RedisClientStore | None = None
_STORE_LOCK = Lock()


def get_client_store() -> ClientStore:
    """Return the process-wide client store selected by configuration."""
    global _REDIS_STORE
    if settings.client_store_backend != "redis":
        return _MEMORY_STORE
    with _STORE_LOCK:
        if _REDIS_STORE is None:
            logger.info("Using Redis client store at %s", settings.redis_url)
            _REDIS_STORE = RedisClientStore.from_url(
                settings.redis_url,
                ttl_seconds=settings.client_store_ttl_seconds,
            )
        return _REDIS_STORE


def close_client_store() -> None:
    """Release the Redis connection pool, if one was opened."""
    global _REDIS_STORE
    with _STORE_LOCK:
        if _REDIS_STORE is not None:
            _REDIS_STORE.close()
            _REDIS_STORE = None
