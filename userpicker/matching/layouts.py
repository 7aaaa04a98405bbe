"""RU/EN keyboard layout tables.

Each locale is described by the physical key sequence of a standard
QWERTY/ЙЦУКЕН keyboard, first without Shift, then with Shift.  Position *i*
is the same physical key in every locale.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

# locale -> (unshifted keys, shifted keys)
LAYOUTS: dict[str, tuple[str, str]] = {
    "ru": (
        "йцукенгшщзхъфывапролджэячсмитьбюё",
        "ЙЦУКЕНГШЩЗХЪФЫВАПРОЛДЖЭЯЧСМИТЬБЮЁ",
    ),
    "en": (
        "qwertyuiop[]asdfghjkl;'zxcvbnm,.`",
        'QWERTYUIOP{}ASDFGHJKL:"ZXCVBNM<>~',
    ),
}


def build_layout_table(layouts: Mapping[str, tuple[str, str]] = LAYOUTS) -> Mapping[str, str]:
    """Return a read-only ``locale -> key sequence`` table (lower + upper).

    Raises ``ValueError`` if the locales do not describe the same number of
    keys or if a character repeats inside one locale.
    """
    table: dict[str, str] = {}
    for locale, (lower, upper) in layouts.items():
        if len(lower) != len(upper):
            raise ValueError(
                f"Layout '{locale}': shifted section has {len(upper)} keys, expected {len(lower)}"
            )
        keys = lower + upper
        if len(set(keys)) != len(keys):
            dupes = sorted({c for c in keys if keys.count(c) > 1})
            raise ValueError(f"Layout '{locale}': duplicate characters {dupes}")
        table[locale] = keys

    lengths = {len(keys) for keys in table.values()}
    if len(lengths) > 1:
        raise ValueError(
            "Layouts must describe the same physical keys: "
            + ", ".join(f"{loc}={len(keys)}" for loc, keys in table.items())
        )

    logger.debug("Layout table built: %s", ", ".join(table))
    return MappingProxyType(table)
