"""SelectorSession — state of one user picker instance."""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable

from userpicker.config import validate_config
from userpicker.core.debounce import Debouncer
from userpicker.core.records import UserRecord, parse_users
from userpicker.matching import ResultCache, default_cache, get_matcher

logger = logging.getLogger(__name__)

_instance_ids = itertools.count()


@dataclass(frozen=True)
class Window:
    """Slice of the (filtered) id list that has to be rendered."""

    start: int
    end: int
    item_height: int
    total: int

    @property
    def top(self) -> int:
        """Pixel offset of the first rendered item."""
        return self.start * self.item_height

    @property
    def height(self) -> int:
        """Pixel height of the whole list."""
        return self.total * self.item_height


def compute_window(offset: float, total: int, item_height: int,
                   visible_items_count: int, overscan_items_count: int = 0) -> Window:
    """Return the rendered range for a scroll *offset*.

    The start is snapped down to a multiple of *overscan_items_count* so
    that small scrolls do not change the rendered range.
    """
    if item_height <= 0:
        raise ValueError(f"Invalid item_height: {item_height}")
    start = int(max(offset, 0) // item_height)
    visible = visible_items_count
    if overscan_items_count:
        start = max(0, start - start % overscan_items_count)
        visible += overscan_items_count
    end = min(start + 1 + visible, total)
    return Window(min(start, total), end, item_height, total)


class SelectorSession:
    """Candidates, filter, selection and scroll state of one picker.

    ``filtered_ids`` is ``None`` while no filter is applied and a (possibly
    empty) tuple otherwise.  ``active_id`` follows the first filtered id and
    can be moved with :meth:`activate_next` / :meth:`activate_prev`.
    ``selected_ids`` keeps the picked users in the order they were picked.

    Debounced filters run on a timer thread.  State changes are serialized
    by a lock, and every ``load``, ``filter`` or ``reset_filter`` starts a
    new generation: a filter that finishes after a newer one was started is
    dropped instead of overwriting the newer state.
    """

    def __init__(
        self,
        config: dict | None = None,
        cache: ResultCache | None = None,
        on_change: Callable[["SelectorSession"], None] | None = None,
    ):
        self.config = validate_config(config)
        self.id: int = next(_instance_ids)
        self.cache = default_cache if cache is None else cache
        self.on_change = on_change

        self.users: tuple[UserRecord, ...] | None = None
        self.users_by_id: dict[Hashable, UserRecord] = {}
        self.filter_value: str | None = None
        self.filtered_ids: tuple[Hashable, ...] | None = None
        self.active_id: Hashable | None = None
        self.selected_ids: list[Hashable] = []
        self.offset: float = 0

        self._lock = threading.RLock()
        self._generation = 0
        self._debouncer = Debouncer(self.filter, self.config['debounce_delay'])

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def load(self, users: Iterable[Any]) -> None:
        """Replace the candidate list; raw mappings are converted to records."""
        records = tuple(parse_users(users))
        with self._lock:
            self._generation += 1
            self._debouncer.cancel()
            self.users = records
            self.users_by_id = {u.id: u for u in records}
            self.cache.clear(self.id)
            self.filter_value = None
            self.filtered_ids = None
            self.active_id = None
            self.selected_ids = []
            self.offset = 0
        logger.debug("Selector %d: loaded %d users", self.id, len(records))
        self._changed()

    @property
    def all_ids(self) -> tuple[Hashable, ...]:
        return tuple(u.id for u in self.users) if self.users is not None else ()

    @property
    def is_filtered(self) -> bool:
        return self.filtered_ids is not None

    @property
    def items(self) -> tuple[Hashable, ...]:
        """Ids currently listed: the filtered ones, or all of them."""
        return self.filtered_ids if self.filtered_ids is not None else self.all_ids

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def filter(self, value: str | None) -> tuple[Hashable, ...] | None:
        """Apply *value* now and return the filtered ids (``None`` = all).

        Matching runs outside the lock.  If another ``load``, ``filter`` or
        ``reset_filter`` started meanwhile, the result is discarded and the
        current ``filtered_ids`` is returned.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            users = self.users
            found, result = self.cache.lookup(self.id, value)

        if not found:
            result = get_matcher().filter_user_ids(
                list(users) if users is not None else None, value
            )

        with self._lock:
            if generation != self._generation:
                logger.debug("Selector %d: dropping stale result for %r", self.id, value)
                return self.filtered_ids
            if not found:
                result = self.cache.store(self.id, value, result)
            self.filter_value = value
            self.filtered_ids = result
            self.offset = 0
            self.active_id = result[0] if result else None
        logger.debug(
            "Selector %d: filter %r -> %s", self.id, value,
            "all" if result is None else len(result),
        )
        self._changed()
        return result

    def filter_later(self, value: str | None) -> None:
        """Debounced :meth:`filter`; replaces any filter still pending."""
        self._debouncer.call(value)

    def flush(self) -> bool:
        """Apply a pending debounced filter immediately."""
        return self._debouncer.flush()

    def reset_filter(self) -> None:
        with self._lock:
            self._debouncer.cancel()
            filtered = self.is_filtered
            if not filtered:
                self._generation += 1
                self.filter_value = None
        if filtered:
            self.filter(None)

    def close(self) -> None:
        with self._lock:
            self._generation += 1
            self._debouncer.cancel()
            self.cache.clear(self.id)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def is_selected(self, user_id: Hashable) -> bool:
        return user_id in self.selected_ids

    def toggle(self, user_id: Hashable) -> bool:
        """Select *user_id* or unselect it; returns the new selection state.

        Selecting a user clears the filter so the full list is shown again.
        Raises ``KeyError`` for ids that are not among the loaded users.
        """
        if user_id not in self.users_by_id:
            raise KeyError(user_id)
        with self._lock:
            if user_id in self.selected_ids:
                self.selected_ids.remove(user_id)
                selected = False
            else:
                self.selected_ids.append(user_id)
                selected = True
        logger.debug("Selector %d: %s %r", self.id, "selected" if selected else "unselected", user_id)
        if selected:
            self.reset_filter()
        self._changed()
        return selected

    def toggle_active(self) -> bool | None:
        """Toggle the active user; ``None`` when nothing is active."""
        if self.active_id is None:
            return None
        return self.toggle(self.active_id)

    def activate(self, user_id: Hashable | None) -> None:
        self.active_id = user_id
        self._changed()

    def activate_next(self) -> Hashable | None:
        """Move the active item one step down the listed ids."""
        return self._step(1)

    def activate_prev(self) -> Hashable | None:
        """Move the active item one step up the listed ids."""
        return self._step(-1)

    def _step(self, delta: int) -> Hashable | None:
        items = self.items
        index = items.index(self.active_id) if self.active_id in items else -1
        if (delta < 0 and index > 0) or (delta > 0 and index < len(items) - 1):
            self.activate(items[index + delta])
        return self.active_id

    # ------------------------------------------------------------------
    # Windowing
    # ------------------------------------------------------------------

    def scroll_to(self, offset: float) -> None:
        self.offset = max(0, offset)

    def window(self) -> Window:
        return compute_window(
            self.offset,
            len(self.items),
            self.config['item_height'],
            self.config['visible_items_count'],
            self.config['overscan_items_count'],
        )

    def visible_ids(self) -> tuple[Hashable, ...]:
        w = self.window()
        return self.items[w.start:w.end]

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
