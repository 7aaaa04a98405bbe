"""ResultCache — memoized filter results per selector instance."""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

import userpicker.log  # noqa: F401  (registers TRACE)

logger = logging.getLogger(__name__)


class ResultCache:
    """Maps ``(instance_id, lowercased filter)`` to a filter result.

    Entries are written once and never replaced or evicted; their lifetime
    is that of the cache (one search session).
    """

    def __init__(self):
        self._entries: dict[tuple[Hashable, str], tuple[Hashable, ...] | None] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(instance_id: Hashable, filter_string: str | None) -> tuple[Hashable, str]:
        return instance_id, filter_string.lower() if filter_string else ""

    def lookup(self, instance_id: Hashable, filter_string: str | None) -> tuple[bool, tuple[Hashable, ...] | None]:
        """Return ``(found, result)`` without computing anything."""
        key = self.make_key(instance_id, filter_string)
        if key in self._entries:
            self.hits += 1
            logger.trace("Cache hit %r", key)
            return True, self._entries[key]
        self.misses += 1
        return False, None

    def store(self, instance_id: Hashable, filter_string: str | None,
              result: Any) -> tuple[Hashable, ...] | None:
        """Store *result* unless an entry exists; return the stored value."""
        key = self.make_key(instance_id, filter_string)
        if result is not None:
            result = tuple(result)
        stored = self._entries.setdefault(key, result)
        logger.trace("Cache store %r -> %s", key, "all" if stored is None else len(stored))
        return stored

    def get_or_compute(
        self,
        instance_id: Hashable,
        users: Any,
        filter_string: str | None,
        compute: Callable[[Any, str | None], tuple[Hashable, ...] | None],
    ) -> tuple[Hashable, ...] | None:
        """Return the cached result, computing and storing it on a miss."""
        found, result = self.lookup(instance_id, filter_string)
        if found:
            return result
        return self.store(instance_id, filter_string, compute(users, filter_string))

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self, instance_id: Hashable | None = None) -> None:
        """Drop all entries, or only those of *instance_id*."""
        if instance_id is None:
            self._entries.clear()
            return
        for key in [k for k in self._entries if k[0] == instance_id]:
            del self._entries[key]
