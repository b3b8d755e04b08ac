"""Match-span finders for search highlighting and column ranges.

Searchers report ``(start, end)`` character spans over a line's plain text;
the overlay layer maps those spans onto cells.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)


class LiteralSearcher:
    """Finds non-overlapping occurrences of a fixed word."""

    def __init__(self, word: str, case_sensitive: bool = False) -> None:
        self.word = word
        self.case_sensitive = case_sensitive
        self._pattern = None if case_sensitive else re.compile(re.escape(word), re.IGNORECASE)

    def find_all(self, text: str) -> list[tuple[int, int]]:
        if not self.word or not text:
            return []
        if self._pattern is not None:
            return [match.span() for match in self._pattern.finditer(text)]

        spans: list[tuple[int, int]] = []
        cursor = 0
        while True:
            idx = text.find(self.word, cursor)
            if idx < 0:
                break
            end = idx + len(self.word)
            spans.append((idx, end))
            cursor = end
        return spans


class RegexSearcher:
    """Finds regular-expression matches; empty matches are skipped.

    The pattern is compiled eagerly so an invalid expression raises
    ``re.error`` here rather than while drawing.
    """

    def __init__(self, pattern: str, case_sensitive: bool = False) -> None:
        flags = 0 if case_sensitive else re.IGNORECASE
        self.pattern = pattern
        self._regex = re.compile(pattern, flags)

    def find_all(self, text: str) -> list[tuple[int, int]]:
        if not text:
            return []
        return [match.span() for match in self._regex.finditer(text) if match.end() > match.start()]


Searcher = LiteralSearcher | RegexSearcher


def build_searcher(word: str, regexp: bool = False, case_sensitive: bool = False) -> Searcher | None:
    """Return the searcher for the active search word, or ``None`` when empty.

    An invalid regular expression falls back to a literal search of the
    same text.
    """
    if not word:
        return None
    if regexp:
        try:
            return RegexSearcher(word, case_sensitive)
        except re.error as exc:
            logger.debug("invalid search pattern %r (%s); searching literally", word, exc)
    return LiteralSearcher(word, case_sensitive)


def range_position(text: str, delimiter: str, column: int) -> tuple[int, int]:
    """Return the ``[start, end)`` span of the ``column``-th delimited field.

    Fields are counted from 0. ``(-1, -1)`` means the field does not exist.
    """
    if not delimiter or column < 0:
        return -1, -1

    left = 0
    for _ in range(column):
        idx = text.find(delimiter, left)
        if idx < 0:
            return -1, -1
        left = idx + len(delimiter)

    right = text.find(delimiter, left)
    if right < 0:
        return left, len(text)
    return left, right


__all__ = [
    "LiteralSearcher",
    "RegexSearcher",
    "Searcher",
    "build_searcher",
    "range_position",
]
