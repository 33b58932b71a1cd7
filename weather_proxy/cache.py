"""
In-memory TTL cache for upstream weather payloads.
"""
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

DEFAULT_TTL_SECONDS = 600  # 10 minutes
CACHE_KEY_PREFIX = "weather"


class WeatherCache(Protocol):
    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


def build_cache_key(latitude: str, longitude: str, start: str, end: str) -> str:
    """Generate cache key from the raw query strings."""
    return f"{CACHE_KEY_PREFIX}-{latitude}-{longitude}-{start}-{end}"


class ResponseCache:
    """
    Keyed store with a fixed time-to-live per entry.

    Expired entries are dropped lazily on the next lookup; nothing sweeps the
    store in the background, so it grows with the number of distinct keys.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        """Get cached payload if present and not expired."""
        entry = self._cache.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            # a concurrent set() may already have replaced it
            if self._cache.get(key) is entry:
                self._cache.pop(key, None)
            return None

        return value

    def set(self, key: str, value: Any) -> None:
        """Cache payload, restarting its TTL from now."""
        self._cache[key] = (self._clock() + self.ttl_seconds, value)

    def clear(self) -> None:
        """Clear all cached data."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
