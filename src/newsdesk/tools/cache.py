import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from ..models.news import CacheStats


DEFAULT_TTL_SECONDS = 600.0


class TTLCache:
    """Process-local key/value store with a per-entry time-to-live.

    Expired entries are not returned by ``get`` but stay in memory until they
    are overwritten or the cache is cleared, so callers can still fall back to
    them with ``get_stale`` when a refresh fails.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _is_live(self, stored_at: float) -> bool:
        return self._clock() - stored_at < self.ttl_seconds

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not self._is_live(entry[0]):
                self._misses += 1
                return None
            self._hits += 1
            return entry[1]

    def get_stale(self, key: Hashable) -> Optional[Any]:
        """Return the stored value for ``key`` whether or not it has expired."""
        with self._lock:
            entry = self._entries.get(key)
        return entry[1] if entry is not None else None

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), value)

    def evict_expired(self, prefix: str = "") -> int:
        """Drop expired entries whose string key starts with ``prefix``."""
        with self._lock:
            expired = [
                key
                for key, (stored_at, _) in self._entries.items()
                if isinstance(key, str) and key.startswith(prefix) and not self._is_live(stored_at)
            ]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(hits=self._hits, misses=self._misses, keys=len(self._entries))

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self._is_live(entry[0])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
