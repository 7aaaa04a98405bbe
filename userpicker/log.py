"""TRACE log level used by the matching hot paths.

Pattern compilation and cache lookups run once per keystroke and per
token, far too often for DEBUG.  They log at ``TRACE`` (5) through
``logger.trace(...)``, which this module installs on ``logging.Logger``.
Modules that call ``logger.trace`` import this module for that side
effect.

The CLI turns it on with ``--trace``; library users call
:func:`enable_trace`.
"""

import logging

TRACE: int = 5
ROOT_LOGGER = 'userpicker'

logging.addLevelName(TRACE, 'TRACE')


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


if not hasattr(logging.Logger, 'trace'):
    logging.Logger.trace = _trace  # type: ignore[attr-defined]


def enable_trace(name: str = ROOT_LOGGER) -> logging.Logger:
    """Lower *name* and its handlers to TRACE so per-token records get through."""
    log = logging.getLogger(name)
    log.setLevel(TRACE)
    for handler in log.handlers:
        handler.setLevel(TRACE)
    return log
