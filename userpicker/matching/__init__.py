"""Fuzzy name matching across keyboard layouts and transliterations.

The layout table and the transliteration dictionary are built once, on
first use, and are read-only afterwards.
"""

from __future__ import annotations

from typing import Any, Hashable, Mapping

from userpicker.matching.cache import ResultCache
from userpicker.matching.layouts import LAYOUTS, build_layout_table
from userpicker.matching.matcher import Matcher
from userpicker.matching.pattern import CompiledPattern, PatternCompiler
from userpicker.matching.translit import TranslitDictionary, build_translit_dictionary
from userpicker.matching.translit_data import FORWARD
from userpicker.matching.transliterator import LayoutTransliterator, LayoutVariant

__all__ = [
    "CompiledPattern",
    "LayoutTransliterator",
    "LayoutVariant",
    "Matcher",
    "PatternCompiler",
    "ResultCache",
    "TranslitDictionary",
    "filter",
    "get_layout_table",
    "get_matcher",
    "get_translit_dictionary",
    "get_transliterator",
]

_layout_table: Mapping[str, str] | None = None
_translit_dictionary: TranslitDictionary | None = None
_matcher: Matcher | None = None

default_cache = ResultCache()


def get_layout_table() -> Mapping[str, str]:
    global _layout_table
    if _layout_table is None:
        _layout_table = build_layout_table(LAYOUTS)
    return _layout_table


def get_translit_dictionary() -> TranslitDictionary:
    global _translit_dictionary
    if _translit_dictionary is None:
        _translit_dictionary = build_translit_dictionary(FORWARD)
    return _translit_dictionary


def get_transliterator() -> LayoutTransliterator:
    return get_matcher().compiler.transliterator


def get_matcher() -> Matcher:
    """Return the process-wide matcher over the default tables."""
    global _matcher
    if _matcher is None:
        compiler = PatternCompiler(LayoutTransliterator(get_layout_table()), get_translit_dictionary())
        _matcher = Matcher(compiler)
    return _matcher


def filter(candidates: Any, filter_string: str | None, instance_id: Hashable,
           cache: ResultCache | None = None) -> tuple[Hashable, ...] | None:
    """Filter *candidates* and return matching ids (``None`` = unfiltered).

    Results are memoized per ``(instance_id, filter_string.lower())``.
    """
    cache = default_cache if cache is None else cache
    return cache.get_or_compute(instance_id, candidates, filter_string, get_matcher().filter_user_ids)
