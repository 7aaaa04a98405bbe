"""Tests for layout tables and LayoutTransliterator."""

from __future__ import annotations

import pytest

from userpicker.matching import get_layout_table, get_transliterator
from userpicker.matching.layouts import LAYOUTS, build_layout_table
from userpicker.matching.transliterator import LayoutTransliterator, LayoutVariant


# ------------------------------------------------------------------
# build_layout_table
# ------------------------------------------------------------------

class TestBuildLayoutTable:

    def test_default_locales(self):
        table = get_layout_table()
        assert list(table) == ["ru", "en"]

    def test_all_locales_same_length(self):
        table = build_layout_table(LAYOUTS)
        assert len({len(keys) for keys in table.values()}) == 1

    def test_lower_then_upper(self):
        table = build_layout_table(LAYOUTS)
        assert table["ru"].startswith("йцукен")
        assert table["ru"][len(table["ru"]) // 2] == "Й"

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="same physical keys"):
            build_layout_table({"a": ("ab", "AB"), "b": ("xyz", "XYZ")})

    def test_shifted_section_mismatch_raises(self):
        with pytest.raises(ValueError, match="shifted"):
            build_layout_table({"a": ("ab", "A")})

    def test_duplicate_character_raises(self):
        with pytest.raises(ValueError, match="duplicate"):
            build_layout_table({"a": ("a.", "A.")})

    def test_table_is_read_only(self):
        table = get_layout_table()
        with pytest.raises(TypeError):
            table["xx"] = "abc"  # type: ignore[index]


# ------------------------------------------------------------------
# LayoutTransliterator
# ------------------------------------------------------------------

@pytest.fixture
def tr() -> LayoutTransliterator:
    return get_transliterator()


def test_expand_to_all_layouts_order(tr):
    assert tr.expand_to_all_layouts("ghbdtn") == [
        LayoutVariant("ru", "привет"),
        LayoutVariant("en", "ghbdtn"),
    ]


def test_expand_preserves_case(tr):
    variants = dict(tr.expand_to_all_layouts("Bdfy"))
    assert variants["ru"] == "Иван"


def test_shifted_symbols_map_to_uppercase(tr):
    assert tr.to_layout("{fhbnjy", "ru") == "Харитон"


def test_unmapped_characters_pass_through(tr):
    assert tr.to_layout("12 -3", "ru") == "12 -3"
    assert tr.to_layout("12 -3", "en") == "12 -3"


def test_mixed_layout_input(tr):
    """Строка, набранная наполовину в одной раскладке, приводится целиком."""
    assert tr.to_layout("ghbвет", "ru") == "привет"
    assert tr.to_layout("ghbвет", "en") == "ghbdtn"


def test_convert_only_touches_source_layout(tr):
    assert tr.convert("ghb вет", "en", "ru") == "при вет"
    assert tr.convert("ghb вет", "ru", "en") == "ghb dtn"


@pytest.mark.parametrize("source,target", [("ru", "en"), ("en", "ru")])
def test_round_trip_every_key(tr, source, target):
    keys = get_layout_table()[source]
    there = tr.convert(keys, source, target)
    assert tr.convert(there, target, source) == keys


def test_round_trip_names(tr):
    for name in ("Щербаков", "Ёлкин", "Хэмингуэй", "Объедков"):
        assert tr.to_layout(tr.to_layout(name, "en"), "ru") == name
