"""Transliteration dictionary: reverse mapping and substring decomposition.

The base dictionary maps Cyrillic letters/clusters to Latin spellings.
From it we derive:

* the reverse dictionary (Latin spelling -> Cyrillic letters);
* for every multi-character key, all strings obtained by replacing any
  other key found inside it with one of its equivalents, repeatedly,
  until nothing new appears (``decompose``).

The final dictionary is the union of both expanded directions, keyed by
the lowercase key.  Values always start with the key itself.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from typing import Iterator

logger = logging.getLogger(__name__)

SEPARATOR = "|"


def _split(alternatives: str) -> list[str]:
    return [a for a in alternatives.split(SEPARATOR) if a]


def create_reverse(forward: Mapping[str, str]) -> dict[str, str]:
    """Return the many-to-many reverse of *forward* (``alt -> key|key...``)."""
    reverse: dict[str, list[str]] = {}
    for key, alternatives in forward.items():
        if not alternatives:
            continue
        for alt in _split(alternatives):
            keys = reverse.setdefault(alt, [])
            if key not in keys:
                keys.append(key)
    return {alt: SEPARATOR.join(keys) for alt, keys in reverse.items()}


def decompose(dictionary: Mapping[str, str], text: str) -> dict[str, None]:
    """Return every string reachable from *text* by substituting dictionary keys.

    Each step replaces the first occurrence of a key (other than *text*
    itself) with one of its alternatives.  The returned ordered set doubles
    as the visited set: a string is expanded only once, so cyclic
    dictionaries terminate.
    """
    seen: dict[str, None] = {}
    queue: deque[str] = deque([text])
    while queue:
        current = queue.popleft()
        for key, alternatives in dictionary.items():
            if key == current or key not in current:
                continue
            for alt in _split(alternatives):
                candidate = current.replace(key, alt, 1)
                if candidate not in seen:
                    seen[candidate] = None
                    queue.append(candidate)
    return seen


def expand(dictionary: Mapping[str, str]) -> dict[str, tuple[str, ...]]:
    """Map each key to ``(key, *alternatives, *decompositions)`` without duplicates."""
    expanded: dict[str, tuple[str, ...]] = {}
    for key, alternatives in dictionary.items():
        variants = dict.fromkeys([key, *_split(alternatives)])
        if len(key) > 1:
            variants.update(decompose(dictionary, key))
        expanded[key] = tuple(variants)
    return expanded


class TranslitDictionary(Mapping):
    """Read-only, case-insensitive ``key -> equivalents`` mapping."""

    def __init__(self, entries: Mapping[str, tuple[str, ...]]):
        self._entries: dict[str, tuple[str, ...]] = {}
        for key, variants in entries.items():
            lowered = key.lower()
            merged = dict.fromkeys(self._entries.get(lowered, ()))
            merged.update(dict.fromkeys(variants))
            self._entries[lowered] = tuple(merged)
        self._by_length = tuple(sorted(self._entries, key=len, reverse=True))

    def __getitem__(self, key: str) -> tuple[str, ...]:
        return self._entries[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def alternation(self, key: str) -> str:
        """Return the equivalents of *key* joined with ``|``."""
        return SEPARATOR.join(self[key])

    def keys_by_length(self) -> tuple[str, ...]:
        """Keys, longest first: the order in which substitutions are tried."""
        return self._by_length

    @property
    def max_key_length(self) -> int:
        return len(self._by_length[0]) if self._by_length else 0


def build_translit_dictionary(forward: Mapping[str, str]) -> TranslitDictionary:
    """Build the bidirectional, decomposition-closed dictionary from *forward*."""
    for key in forward:
        if not key:
            raise ValueError("Transliteration keys must be non-empty strings")

    reverse = create_reverse(forward)
    entries: dict[str, tuple[str, ...]] = {}
    for part in (expand(forward), expand(reverse)):
        for key, variants in part.items():
            entries[key] = tuple(dict.fromkeys(entries.get(key, ()) + variants))

    dictionary = TranslitDictionary(entries)
    logger.debug(
        "Translit dictionary built: %d forward, %d reverse, %d keys total",
        len(forward), len(reverse), len(dictionary),
    )
    return dictionary
