# inkwell/memory/cache.py

"""
Process-local expiring key-value store.

Design:
- Per-entry TTL, checked lazily on read (no background sweep)
- Optional entry bound: expired entries go first, then the oldest
  evictable inserts; pinned prefixes (sessions) are never evicted
- Injectable clock so tests can move time forward
- Thread-safe (handlers run in the FastAPI threadpool)
"""

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple


@dataclass
class CacheEntry:
    value: Any
    expires_at: float


class ExpiringCache:

    backend_name = "memory"

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        max_entries: Optional[int] = None,
        pinned_prefixes: Tuple[str, ...] = ("session:",),
    ):
        self._clock = clock
        self._max_entries = max_entries if max_entries and max_entries > 0 else None
        self._pinned = tuple(pinned_prefixes)
        self._store: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def set(self, key: str, value: Any, ttl_seconds: float) -> bool:
        with self._lock:
            self._store.pop(key, None)
            if self._max_entries and len(self._store) >= self._max_entries:
                self._make_room()
            self._store[key] = CacheEntry(
                value=value,
                expires_at=self._clock() + ttl_seconds,
            )
            return True

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if self._clock() > entry.expires_at:
                del self._store[key]
                return None
            return entry.value

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge_expired_locked()

    def __len__(self) -> int:
        return len(self._store)

    # --------------------------------------------------------
    # INTERNAL (caller holds the lock)
    # --------------------------------------------------------

    def _purge_expired_locked(self) -> int:
        now = self._clock()
        expired = [k for k, e in self._store.items() if now > e.expires_at]
        for k in expired:
            del self._store[k]
        return len(expired)

    def _make_room(self) -> None:
        self._purge_expired_locked()
        excess = len(self._store) - self._max_entries + 1
        if excess <= 0:
            return
        # dicts keep insertion order, so the front is the oldest insert
        victims = [k for k in self._store if not k.startswith(self._pinned)][:excess]
        for k in victims:
            del self._store[k]
