"""In-memory key/value cache whose entries expire a fixed time after insertion."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExpiringCache(Generic[K, V]):
    """Map with per-entry creation time.

    An entry is live while ``now - created < ttl``. Expired entries read as
    absent and are dropped on access; ``set`` always replaces the old entry.
    """

    def __init__(self, ttl: timedelta, clock: Clock = utcnow) -> None:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be > 0")
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[K, Tuple[V, datetime]] = {}

    def get(self, key: K) -> Optional[V]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, created = entry
        if self._clock() - created >= self.ttl:
            del self._entries[key]
            return None
        return value

    def set(self, key: K, value: V) -> None:
        self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)
