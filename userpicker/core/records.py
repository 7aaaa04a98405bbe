"""UserRecord and loading of candidate lists."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterable

logger = logging.getLogger(__name__)


class UserSourceError(Exception):
    """Candidate list could not be read or parsed."""


@dataclass(frozen=True)
class UserRecord:
    id: Hashable
    first_name: str
    last_name: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_dict(cls, data: dict) -> "UserRecord":
        """Build a record from a ``{id, first_name, last_name}`` mapping.

        Raises ``ValueError`` when a field is missing or has the wrong type.
        """
        try:
            user_id = data["id"]
        except (KeyError, TypeError):
            raise ValueError(f"User record without 'id': {data!r}")
        if user_id is None or isinstance(user_id, (list, dict)):
            raise ValueError(f"Invalid user id: {user_id!r}")
        first = data.get("first_name") or ""
        last = data.get("last_name") or ""
        if not isinstance(first, str) or not isinstance(last, str):
            raise ValueError(f"User {user_id!r}: names must be strings")
        return cls(user_id, first, last)


def user_id(user: Any) -> Hashable:
    if isinstance(user, dict):
        return user.get("id")
    return getattr(user, "id", None)


def user_names(user: Any) -> tuple[str | None, str | None]:
    """Return ``(first_name, last_name)`` of a record or a plain mapping.

    Values that are not strings are reported as ``None``.
    """
    if isinstance(user, dict):
        names = user.get("first_name"), user.get("last_name")
    else:
        names = getattr(user, "first_name", None), getattr(user, "last_name", None)
    return tuple(n if isinstance(n, str) else None for n in names)


def parse_users(items: Iterable[Any]) -> list[UserRecord]:
    """Convert raw JSON items into records, skipping malformed ones."""
    users: list[UserRecord] = []
    seen: set = set()
    for item in items:
        if isinstance(item, UserRecord):
            record = item
        else:
            try:
                record = UserRecord.from_dict(item)
            except ValueError as exc:
                logger.warning("Skipping user record: %s", exc)
                continue
        if record.id in seen:
            logger.warning("Skipping duplicate user id %r", record.id)
            continue
        seen.add(record.id)
        users.append(record)
    return users


def load_users(path: str) -> list[UserRecord]:
    """Load a JSON array of users from *path*.

    Raises :class:`UserSourceError` if the file is missing, is not valid
    JSON, or does not contain an array.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise UserSourceError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise UserSourceError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, list):
        raise UserSourceError(f"{path}: expected a JSON array, got {type(data).__name__}")

    users = parse_users(data)
    logger.info("Loaded %d users from %s", len(users), path)
    return users
