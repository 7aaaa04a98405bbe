"""Tests for ResultCache and the cached ``filter`` entry point."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import userpicker.matching as matching
from userpicker.matching import ResultCache


@pytest.fixture
def spy(matcher, monkeypatch):
    """Call-count spy wrapped around the real matcher."""
    spy = MagicMock(wraps=matcher.filter_user_ids)
    monkeypatch.setattr(matcher, "filter_user_ids", spy)
    return spy


class TestFilterCaching:

    def test_second_call_served_from_cache(self, users, cache, spy):
        first = matching.filter(users, "ivan", 1, cache=cache)
        second = matching.filter(users, "ivan", 1, cache=cache)
        assert first == second == (1, 2, 4)
        assert spy.call_count == 1
        assert cache.hits == 1 and cache.misses == 1

    def test_key_is_case_insensitive(self, users, cache, spy):
        matching.filter(users, "Abc", 1, cache=cache)
        matching.filter(users, "abc", 1, cache=cache)
        matching.filter(users, "ABC", 1, cache=cache)
        assert spy.call_count == 1

    def test_instances_do_not_share_entries(self, users, cache, spy):
        matching.filter(users, "ivan", 1, cache=cache)
        matching.filter(users, "ivan", 2, cache=cache)
        assert spy.call_count == 2

    def test_none_and_empty_share_entry(self, users, cache, spy):
        assert matching.filter(users, None, 1, cache=cache) is None
        assert matching.filter(users, "", 1, cache=cache) is None
        assert spy.call_count == 1

    def test_backspace_reuses_earlier_entry(self, users, cache, spy):
        for query in ("i", "iv", "iva", "iv", "i"):
            matching.filter(users, query, 7, cache=cache)
        assert spy.call_count == 3

    def test_default_cache_used_when_not_given(self, users, monkeypatch):
        fresh = ResultCache()
        monkeypatch.setattr(matching, "default_cache", fresh)
        matching.filter(users, "sch", "selector-a")
        assert ("selector-a", "sch") in fresh


class TestResultCache:

    def test_stored_results_are_tuples(self, cache):
        result = cache.get_or_compute(1, [], "x", lambda users, f: [3, 1])
        assert result == (3, 1)
        assert isinstance(result, tuple)

    def test_none_result_cached(self, cache):
        compute = MagicMock(return_value=None)
        cache.get_or_compute(1, [], "", compute)
        cache.get_or_compute(1, [], None, compute)
        assert compute.call_count == 1

    def test_entries_never_replaced(self, cache):
        cache.get_or_compute(1, [], "q", lambda users, f: (1,))
        result = cache.get_or_compute(1, [], "Q", lambda users, f: (2,))
        assert result == (1,)

    def test_clear_one_instance(self, cache):
        cache.get_or_compute(1, [], "q", lambda users, f: (1,))
        cache.get_or_compute(2, [], "q", lambda users, f: (2,))
        cache.clear(1)
        assert (1, "q") not in cache
        assert (2, "q") in cache
        assert len(cache) == 1

    def test_clear_all(self, cache):
        cache.get_or_compute(1, [], "q", lambda users, f: (1,))
        cache.clear()
        assert len(cache) == 0

    def test_make_key(self):
        assert ResultCache.make_key(5, "АбВ") == (5, "абв")
        assert ResultCache.make_key(5, None) == (5, "")

    def test_lookup_miss_then_hit(self, cache):
        assert cache.lookup(1, "q") == (False, None)
        cache.store(1, "q", [4])
        assert cache.lookup(1, "Q") == (True, (4,))
        assert (cache.hits, cache.misses) == (1, 1)

    def test_lookup_distinguishes_cached_none(self, cache):
        cache.store(1, None, None)
        assert cache.lookup(1, "") == (True, None)

    def test_store_keeps_first_value(self, cache):
        assert cache.store(1, "q", (1,)) == (1,)
        assert cache.store(1, "q", (2,)) == (1,)
