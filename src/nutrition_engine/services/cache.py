"""Resolution cache keyed by normalized food text."""

import hashlib
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol

DEFAULT_MAX_ENTRIES = 10_000


class Cache(Protocol):
    """Stores resolved foods and barcodes for a limited time."""

    def get(self, key: str) -> object | None:
        """Return a live value or None."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store ``value`` until ``ttl_seconds`` have passed."""


def input_key(prefix: str, text: str) -> str:
    """Key for free text; case and repeated whitespace do not matter."""
    normalized = " ".join(text.lower().split())
    digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()
    return f"{prefix}:{digest}"


@dataclass
class _Slot:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache bounded to ``max_entries``.

    Every write drops expired slots. When the cache is still full the oldest
    writes are evicted first; rewriting a key makes it the newest.
    """

    max_entries: int = DEFAULT_MAX_ENTRIES
    _slots: dict[str, _Slot] = field(default_factory=dict, init=False, repr=False)

    def __len__(self) -> int:
        return len(self._slots)

    def get(self, key: str) -> object | None:
        slot = self._slots.get(key)
        if slot is None:
            return None
        if slot.expires_at <= datetime.now(tz=UTC):
            del self._slots[key]
            return None
        return slot.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        now = datetime.now(tz=UTC)
        self._drop_expired(now)
        self._slots.pop(key, None)
        self._slots[key] = _Slot(
            value=value, expires_at=now + timedelta(seconds=ttl_seconds)
        )
        while len(self._slots) > self.max_entries:
            oldest = next(iter(self._slots))
            del self._slots[oldest]

    def _drop_expired(self, now: datetime) -> None:
        expired = [key for key, slot in self._slots.items() if slot.expires_at <= now]
        for key in expired:
            del self._slots[key]
