"""Exception types raised by pager collaborators.

Rendering itself never lets these escape a frame; they mark lookups that a
caller may want to report and then recover from.
"""

from __future__ import annotations


class PagerError(Exception):
    """Base class for pager errors."""


class LineNotFoundError(PagerError, LookupError):
    """A logical line outside the buffered range was requested."""

    def __init__(self, line: int, line_count: int) -> None:
        super().__init__(f"line {line} not found (buffered lines: {line_count})")
        self.line = line
        self.line_count = line_count
