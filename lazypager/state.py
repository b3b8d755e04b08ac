"""Viewer state shared between navigation and the frame renderer.

Navigation produces new ``ScrollState`` snapshots between frames; the renderer
reads one snapshot per frame and is the only writer of the derived
bookkeeping (bottom position, row map, header row count).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .input import InputState, SearchFlags

if TYPE_CHECKING:
    from .document import Document


@dataclass(frozen=True)
class ScrollState:
    """``top_ln`` is relative to the first content line; ``top_lx`` is the
    cell offset into it when wrapping, ``x`` the horizontal scroll otherwise."""

    top_ln: int = 0
    top_lx: int = 0
    x: int = 0


@dataclass(frozen=True)
class LineNumber:
    """Row-map entry: logical line shown on a row and its wrap segment.

    ``line`` is -1 for rows that show no logical line.
    """

    line: int
    wrap: int = 0


EMPTY_ROW = LineNumber(-1, 0)


@dataclass(frozen=True)
class MouseSelection:
    """Active drag selection in screen coordinates, both ends inclusive."""

    x1: int
    y1: int
    x2: int
    y2: int

    def normalized(self) -> MouseSelection:
        if (self.y2, self.x2) < (self.y1, self.x1):
            return MouseSelection(self.x2, self.y2, self.x1, self.y1)
        return self


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int
    start_x: int = 0
    min_start_x: int = 0
    status_rows: int = 1

    @property
    def status_row(self) -> int:
        return self.height - self.status_rows

    @property
    def usable_rows(self) -> int:
        return max(0, self.height - self.status_rows)

    @property
    def content_width(self) -> int:
        return max(0, self.width - self.start_x)


def gutter_width(line_count: int) -> int:
    """Columns reserved for right-justified line numbers plus one space."""
    return len(str(max(1, line_count))) + 1


@dataclass
class ViewerState:
    documents: list[Document]
    current_doc: int = 0
    follow_all: bool = False
    message: str = ""
    input: InputState = field(default_factory=InputState)
    search_flags: SearchFlags = field(default_factory=SearchFlags)
    search_word: str = ""
    mouse_select: MouseSelection | None = None
    bottom_ln: int = 0
    bottom_lx: int = 0
    header_rows: int = 0
    row_map: list[LineNumber] = field(default_factory=list)

    @property
    def doc(self) -> Document:
        return self.documents[self.current_doc]

    @property
    def document_count(self) -> int:
        return len(self.documents)
