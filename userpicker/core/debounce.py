"""Debouncer — runs a callback once input has settled."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)

DEFAULT_DELAY = 0.016


class Debouncer:
    """Delays *callback* by *delay* seconds; a new call replaces the pending one.

    At most one call is pending at any time.  The callback runs on a
    :class:`threading.Timer` thread unless :meth:`flush` is used.
    """

    def __init__(self, callback: Callable[..., Any], delay: float = DEFAULT_DELAY):
        if delay < 0:
            raise ValueError(f"Invalid debounce delay: {delay}")
        self.callback = callback
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: tuple[tuple, dict] | None = None

    def call(self, *args: Any, **kwargs: Any) -> None:
        """Schedule the callback, cancelling any call still waiting."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self.delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> bool:
        """Run the pending call now, in the caller's thread.

        Returns True if there was a pending call.
        """
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            pending, self._pending = self._pending, None
        if pending is None:
            return False
        args, kwargs = pending
        self.callback(*args, **kwargs)
        return True

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def _fire(self) -> None:
        with self._lock:
            if threading.current_thread() is not self._timer:
                return
            self._timer = None
            pending, self._pending = self._pending, None
        if pending is None:
            return
        args, kwargs = pending
        try:
            self.callback(*args, **kwargs)
        except Exception:
            logger.exception("Debounced callback failed")
