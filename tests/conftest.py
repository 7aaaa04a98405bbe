import json

import pytest

from userpicker.core.records import UserRecord
from userpicker.matching import ResultCache, get_matcher


RAW_USERS = [
    {"id": 1, "first_name": "Иван", "last_name": "Петров"},
    {"id": 2, "first_name": "Пётр", "last_name": "Иванов"},
    {"id": 3, "first_name": "Анна", "last_name": "Щербакова"},
    {"id": 4, "first_name": "Ivan", "last_name": "Smith"},
    {"id": 5, "first_name": "Мария", "last_name": "Царева"},
    {"id": 6, "first_name": "Алексей", "last_name": "Кузнецов"},
]


@pytest.fixture
def raw_users() -> list[dict]:
    return [dict(u) for u in RAW_USERS]


@pytest.fixture
def users() -> list[UserRecord]:
    return [UserRecord.from_dict(u) for u in RAW_USERS]


@pytest.fixture
def matcher():
    return get_matcher()


@pytest.fixture
def cache() -> ResultCache:
    """Fresh cache so tests never see each other's entries."""
    return ResultCache()


@pytest.fixture
def users_file(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps(RAW_USERS, ensure_ascii=False), encoding="utf-8")
    return str(path)
