"""Tests for UserRecord and loading candidate lists."""

from __future__ import annotations

import json

import pytest

from userpicker.core.records import (
    UserRecord,
    UserSourceError,
    load_users,
    parse_users,
    user_id,
    user_names,
)


class TestUserRecord:

    def test_from_dict(self):
        u = UserRecord.from_dict({"id": 7, "first_name": "Анна", "last_name": "Ли", "extra": 1})
        assert u == UserRecord(7, "Анна", "Ли")
        assert u.full_name == "Анна Ли"

    def test_missing_names_become_empty(self):
        assert UserRecord.from_dict({"id": "x"}) == UserRecord("x", "", "")

    @pytest.mark.parametrize("raw", [{}, {"id": None}, {"id": [1]}, "abc", None])
    def test_invalid_id(self, raw):
        with pytest.raises(ValueError):
            UserRecord.from_dict(raw)

    def test_non_string_name(self):
        with pytest.raises(ValueError, match="names"):
            UserRecord.from_dict({"id": 1, "first_name": 5})


def test_accessors_accept_records_and_mappings():
    rec = UserRecord(1, "A", "B")
    raw = {"id": 1, "first_name": "A", "last_name": "B"}
    assert user_id(rec) == user_id(raw) == 1
    assert user_names(rec) == user_names(raw) == ("A", "B")


def test_user_names_drops_non_string_values():
    raw = {"id": 1, "first_name": 5, "last_name": ["B"]}
    assert user_names(raw) == (None, None)
    assert user_names({"id": 2, "first_name": "A", "last_name": 7}) == ("A", None)


def test_parse_users_skips_bad_and_duplicate(caplog):
    users = parse_users([
        {"id": 1, "first_name": "A", "last_name": "B"},
        {"first_name": "no id"},
        {"id": 1, "first_name": "dup", "last_name": ""},
        UserRecord(2, "C", "D"),
    ])
    assert [u.id for u in users] == [1, 2]
    assert "duplicate" in caplog.text


class TestLoadUsers:

    def test_loads_json_array(self, users_file):
        users = load_users(users_file)
        assert len(users) == 6
        assert users[2].last_name == "Щербакова"

    def test_missing_file(self, tmp_path):
        with pytest.raises(UserSourceError, match="Cannot read"):
            load_users(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(UserSourceError, match="Invalid JSON"):
            load_users(str(path))

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text(json.dumps({"users": []}), encoding="utf-8")
        with pytest.raises(UserSourceError, match="expected a JSON array"):
            load_users(str(path))
