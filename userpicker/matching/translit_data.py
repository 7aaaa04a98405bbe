"""Cyrillic → Latin transliteration renderings.

Keys are lowercase Cyrillic letters or letter clusters, values are the
common Latin spellings joined with ``|``.  The reverse direction and all
indirect equivalences are derived in :mod:`userpicker.matching.translit`.
"""

from __future__ import annotations

FORWARD: dict[str, str] = {
    "а": "a",
    "б": "b",
    "в": "v|w",
    "г": "g|h",
    "д": "d",
    "е": "e|ye|je",
    "ё": "e|yo|jo|io",
    "ж": "zh|j|g",
    "з": "z",
    "и": "i|y",
    "й": "y|i|j",
    "к": "k|c|q",
    "л": "l",
    "м": "m",
    "н": "n",
    "о": "o",
    "п": "p",
    "р": "r",
    "с": "s|c",
    "т": "t",
    "у": "u|ou",
    "ф": "f|ph",
    "х": "h|kh|x",
    "ц": "c|ts|tz",
    "ч": "ch|tch",
    "ш": "sh",
    "щ": "sch|shch",
    "ы": "y|i",
    "э": "e",
    "ю": "yu|ju|iu",
    "я": "ya|ja|ia",
    # Clusters with spellings of their own
    "кс": "x",
    "дж": "j|dzh",
    "ий": "y|iy|ij",
    "ый": "y|iy",
    "ья": "ya|ia",
    "ье": "ye|ie",
    "ью": "yu|iu",
    "ьи": "yi",
}
