"""Layout transliteration — rewrite text as if typed on another layout."""

from __future__ import annotations

from typing import Mapping, NamedTuple


class LayoutVariant(NamedTuple):
    locale: str
    value: str


class LayoutTransliterator:
    """Reinterprets characters by physical key position across layouts.

    Args:
        table: ``locale -> key sequence`` as returned by
               :func:`userpicker.matching.layouts.build_layout_table`.
    """

    def __init__(self, table: Mapping[str, str]):
        self._table = table
        # char -> key index, first source locale wins
        self._positions: dict[str, int] = {}
        for keys in table.values():
            for index, ch in enumerate(keys):
                self._positions.setdefault(ch, index)

    @property
    def locales(self) -> tuple[str, ...]:
        return tuple(self._table)

    def to_layout(self, text: str, target: str) -> str:
        """Rewrite *text* into *target* layout, leaving unknown characters as-is."""
        keys = self._table[target]
        positions = self._positions
        result = []
        for ch in text:
            index = positions.get(ch)
            result.append(ch if index is None else keys[index])
        return "".join(result)

    def convert(self, text: str, source: str, target: str) -> str:
        """Convert only the characters of *source* layout into *target*."""
        src = self._table[source]
        dst = self._table[target]
        result = []
        for ch in text:
            index = src.find(ch)
            result.append(ch if index == -1 else dst[index])
        return "".join(result)

    def expand_to_all_layouts(self, text: str) -> list[LayoutVariant]:
        """Return *text* rewritten into every known layout, in table order."""
        return [LayoutVariant(locale, self.to_layout(text, locale)) for locale in self._table]
