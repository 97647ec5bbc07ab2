"""TTL cache for catalog lookups."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Key-value cache with per-entry expiry."""

    def get(self, key: str) -> object | None:
        """Return the cached value, or None when missing or expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value for ``ttl_seconds``."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class _Entry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; expired entries are dropped on read and on write."""

    clock: Callable[[], datetime] = _utcnow
    _entries: dict[str, _Entry] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        """Return a live entry, evicting it if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self.clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a value with an expiry relative to the clock."""
        now = self.clock()
        for stale_key, entry in list(self._entries.items()):
            if now >= entry.expires_at:
                self._entries.pop(stale_key, None)
        self._entries[key] = _Entry(
            value=value, expires_at=now + timedelta(seconds=ttl_seconds)
        )

    def __len__(self) -> int:
        return len(self._entries)
