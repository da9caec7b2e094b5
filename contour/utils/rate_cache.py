"""Process-local TTL cache for looked-up values (exchange rates)"""
import time
from typing import Any, Callable, Dict, Optional


class TTLCache:
    """Dict-backed cache with per-key expiry. Not shared across processes."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._store: Dict[str, Any] = {}
        self._exp: Dict[str, float] = {}

    def get(self, key: str) -> Optional[Any]:
        if key not in self._store:
            return None
        if self._clock() > self._exp[key]:
            self.delete(key)
            return None
        return self._store[key]

    def set(self, key: str, value: Any) -> None:
        self._store[key] = value
        self._exp[key] = self._clock() + self._ttl

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self._exp.pop(key, None)

    def clear(self) -> None:
        self._store.clear()
        self._exp.clear()
