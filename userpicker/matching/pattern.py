"""PatternCompiler — turns one filter token into a prefix matcher.

A token is rewritten into every keyboard layout; each variant is then cut
into segments: runs of literal characters and alternations of
transliteration equivalents.  At every position the longest dictionary key
wins, so ``"tsar"`` yields ``[ts|ц|...][a|а][r|р]`` and never ``t`` + ``s``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

import userpicker.log  # noqa: F401  (registers TRACE)
from userpicker.matching.translit import TranslitDictionary
from userpicker.matching.transliterator import LayoutTransliterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Literal:
    text: str

    def render(self) -> str:
        return re.escape(self.text)


@dataclass(frozen=True)
class Alternation:
    key: str
    options: tuple[str, ...]

    def render(self) -> str:
        return "(?:" + "|".join(re.escape(option) for option in self.options) + ")"


Segment = Union[Literal, Alternation]


@dataclass(frozen=True)
class CompiledPattern:
    """Case-insensitive prefix matcher for one filter token."""

    token: str
    variants: tuple[tuple[Segment, ...], ...]
    regex: re.Pattern

    def matches(self, text: str | None) -> bool:
        return isinstance(text, str) and self.regex.match(text) is not None

    @property
    def source(self) -> str:
        return self.regex.pattern


class PatternCompiler:
    """Compiles filter tokens against fixed layout and translit tables."""

    def __init__(self, transliterator: LayoutTransliterator, dictionary: TranslitDictionary):
        self.transliterator = transliterator
        self.dictionary = dictionary

    def segment(self, text: str) -> tuple[Segment, ...]:
        """Split *text* into literal runs and longest-match alternations."""
        dictionary = self.dictionary
        longest = dictionary.max_key_length
        segments: list[Segment] = []
        literal: list[str] = []
        i = 0
        while i < len(text):
            for length in range(min(longest, len(text) - i), 0, -1):
                chunk = text[i:i + length].lower()
                if chunk in dictionary:
                    if literal:
                        segments.append(Literal("".join(literal)))
                        literal = []
                    segments.append(Alternation(chunk, dictionary[chunk]))
                    i += length
                    break
            else:
                literal.append(text[i])
                i += 1
        if literal:
            segments.append(Literal("".join(literal)))
        return tuple(segments)

    def compile(self, token: str) -> CompiledPattern:
        """Compile *token* into a :class:`CompiledPattern`.

        Raises ``ValueError`` for an empty token.
        """
        if not token:
            raise ValueError("Cannot compile an empty filter token")

        variants: list[tuple[Segment, ...]] = []
        sources: dict[str, None] = {}
        for variant in self.transliterator.expand_to_all_layouts(token):
            segments = self.segment(variant.value)
            rendered = "".join(seg.render() for seg in segments)
            if rendered not in sources:
                sources[rendered] = None
                variants.append(segments)

        regex = re.compile("^(?:" + "|".join(sources) + ")", re.IGNORECASE)
        logger.trace("Compiled %r -> %s", token, regex.pattern)
        return CompiledPattern(token, tuple(variants), regex)
