"""An in-process key-value store with per-key expiry, used as a cache."""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from typing import Any, Callable, Optional, Union

TTL = Union[float, int, timedelta, None]


def _seconds(ttl: TTL) -> Optional[float]:
    if ttl is None:
        return None
    if isinstance(ttl, timedelta):
        ttl = ttl.total_seconds()
    return float(ttl) if ttl > 0 else None


class KeyValueStore:
    """Thread-safe store whose keys may expire after a time-to-live."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._data: dict[str, tuple[Any, Optional[float]]] = {}

    def _live_entry(self, key: str) -> Optional[tuple[Any, Optional[float]]]:
        entry = self._data.get(key)
        if entry is None:
            return None
        expires_at = entry[1]
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return entry

    def get(self, key: str) -> Any:
        """Return the value stored under key, or None if it is absent or expired."""
        with self._lock:
            entry = self._live_entry(key)
            return None if entry is None else entry[0]

    def set(self, key: str, value: Any, ttl: TTL = None) -> None:
        """Store value under key; a ttl of None or zero means it never expires."""
        seconds = _seconds(ttl)
        with self._lock:
            expires_at = None if seconds is None else self._clock() + seconds
            self._data[key] = (value, expires_at)

    def delete(self, key: str) -> int:
        """Remove key; return the number of keys removed (0 or 1)."""
        with self._lock:
            if self._live_entry(key) is None:
                return 0
            del self._data[key]
            return 1

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._live_entry(key) is not None

    def ttl(self, key: str) -> Optional[float]:
        """Seconds left before key expires; None if absent or without expiry."""
        with self._lock:
            entry = self._live_entry(key)
            if entry is None or entry[1] is None:
                return None
            return entry[1] - self._clock()

    def ping(self) -> bool:
        """Report that the store answers."""
        with self._lock:
            return True