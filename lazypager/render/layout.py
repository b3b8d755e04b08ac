"""Placement of one logical line's cells onto a terminal row.

``WrapLayout`` continues a long line over several rows and reports where the
next row resumes; ``NoWrapLayout`` shows a horizontal window of the line and
always moves on to the next line. The frame picks one of them up front.
"""

from __future__ import annotations

import logging
from bisect import bisect_right

from ..content import DEFAULT_CELL, Cell, LineContent
from ..screen import CellScreen
from ..state import Viewport

logger = logging.getLogger(__name__)


def wrap_segment_end(cells: LineContent, lx: int, avail: int) -> int:
    """Return the index of the first cell that does not fit on a row starting at ``lx``.

    A glyph wider than the whole row is consumed alone so wrapping always
    makes progress.
    """
    x = 0
    while lx + x < len(cells):
        if x + cells[lx + x].width > avail:
            return lx + max(x, 1)
        x += 1
    return len(cells)


def wrap_starts(cells: LineContent, avail: int) -> list[int]:
    """Start offsets of every wrap segment of a line."""
    starts = [0]
    if avail <= 0:
        return starts
    lx = 0
    while True:
        lx = wrap_segment_end(cells, lx, avail)
        if lx >= len(cells):
            return starts
        starts.append(lx)


def wrap_segment_index(cells: LineContent, lx: int, avail: int) -> int:
    """Number of the wrap segment that contains offset ``lx``."""
    return max(0, bisect_right(wrap_starts(cells, avail), lx) - 1)


class LineLayout:
    """Places cells of one logical line on row ``y``.

    ``draw`` returns the offset the next row resumes from and whether the
    logical line is finished.
    """

    wraps = False

    def __init__(self, viewport: Viewport) -> None:
        self.start_x = viewport.start_x
        self.width = viewport.width
        self.min_start_x = viewport.min_start_x
        self.avail = viewport.content_width

    def draw(self, screen: CellScreen, y: int, cells: LineContent, lx: int) -> tuple[int, bool]:
        raise NotImplementedError

    def _blank(self, cell: Cell) -> Cell:
        return DEFAULT_CELL.with_style(cell.style)


class WrapLayout(LineLayout):
    wraps = True

    def draw(self, screen: CellScreen, y: int, cells: LineContent, lx: int) -> tuple[int, bool]:
        if lx < 0:
            logger.warning("illegal wrap offset %d on row %d", lx, y)
            return 0, True
        if self.avail <= 0:
            return 0, True

        end = wrap_segment_end(cells, lx, self.avail)
        for x, cell in enumerate(cells[lx:end]):
            if cell.width > self.avail:
                cell = self._blank(cell)
            screen.set_cell(self.start_x + x, y, cell)

        if end >= len(cells):
            return 0, True
        return end, False


class NoWrapLayout(LineLayout):
    def draw(self, screen: CellScreen, y: int, cells: LineContent, lx: int) -> tuple[int, bool]:
        if lx < self.min_start_x:
            lx = self.min_start_x

        x = 0
        while self.start_x + x < self.width:
            idx = lx + x
            if idx >= len(cells):
                break
            cell = DEFAULT_CELL if idx < 0 else cells[idx]
            if cell.width == 0 and x == 0:
                # Right half of a wide glyph cut off by the left edge.
                cell = self._blank(cell)
            elif self.start_x + x + cell.width > self.width:
                cell = self._blank(cell)
            screen.set_cell(self.start_x + x, y, cell)
            x += 1
        return lx, True


def select_layout(wrap_mode: bool, viewport: Viewport) -> LineLayout:
    if wrap_mode:
        return WrapLayout(viewport)
    return NoWrapLayout(viewport)
