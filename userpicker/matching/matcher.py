"""Matcher — filters a candidate list by a free-text query.

Every whitespace-separated token must match (AND); a token matches a user
when it is a prefix of the first name or of the last name (OR).
"""

from __future__ import annotations

import logging
from typing import Any, Hashable, Sequence

from userpicker.core.records import user_id, user_names
from userpicker.matching.pattern import CompiledPattern, PatternCompiler

logger = logging.getLogger(__name__)


class Matcher:
    """Applies compiled token patterns to user records."""

    def __init__(self, compiler: PatternCompiler):
        self.compiler = compiler

    def compile_filter(self, filter_string: str) -> list[CompiledPattern]:
        """One pattern per non-empty token of *filter_string*."""
        return [self.compiler.compile(token) for token in filter_string.split()]

    @staticmethod
    def user_matches(user: Any, patterns: Sequence[CompiledPattern]) -> bool:
        names = user_names(user)
        return all(any(p.matches(name) for name in names) for p in patterns)

    def filter_users(self, users: Any, filter_string: str | None) -> list | None:
        """Return matching records in original order.

        ``None`` means "no filtering applied": *users* is not a list or the
        filter is empty.  An empty list means nothing matched.
        """
        if not isinstance(users, (list, tuple)) or not filter_string:
            return None
        patterns = self.compile_filter(filter_string)
        if not patterns:
            return None
        matched = [user for user in users if self.user_matches(user, patterns)]
        logger.debug("Filter %r: %d of %d users", filter_string, len(matched), len(users))
        return matched

    def filter_user_ids(self, users: Any, filter_string: str | None) -> tuple[Hashable, ...] | None:
        """Like :meth:`filter_users` but returns ids only."""
        matched = self.filter_users(users, filter_string)
        if matched is None:
            return None
        return tuple(user_id(user) for user in matched)
