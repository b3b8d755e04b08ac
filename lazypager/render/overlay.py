"""Highlight overlays for body and header rows.

Content overlays (column and search highlight) are computed against a line's
plain text and mapped onto cells before layout. Row overlays (alternate rows,
marked lines, header, mouse selection) are composed onto cells already on
screen. Application order: base line style, column, search, alternate row,
mark line, header.
"""

from __future__ import annotations

import logging

from ..content import LineContent, range_style
from ..document import Document
from ..screen import CellScreen
from ..search import Searcher, range_position
from ..state import MouseSelection
from ..style import OverlayStyle, apply_style
from ..theme import PagerTheme

logger = logging.getLogger(__name__)


def style_row(screen: CellScreen, y: int, start: int, end: int, overlay: OverlayStyle) -> None:
    """Compose ``overlay`` onto the cells of row ``y`` in ``[start, end)``."""
    if overlay.is_empty():
        return
    for x in range(max(0, start), min(end, screen.width)):
        cell = screen.get_content(x, y)
        screen.set_cell(x, y, cell.with_style(apply_style(cell.style, overlay)))


class OverlayResolver:
    def __init__(
        self,
        theme: PagerTheme,
        document: Document,
        searcher: Searcher | None,
        width: int,
        mark_style_width: int,
    ) -> None:
        self.theme = theme
        self.document = document
        self.searcher = searcher
        self.width = width
        self.mark_width = min(width, max(0, mark_style_width))

    def _apply_span(
        self,
        cells: LineContent,
        pos_map: dict[int, int],
        start: int,
        end: int,
        overlay: OverlayStyle,
    ) -> LineContent:
        cell_start = pos_map.get(start)
        cell_end = pos_map.get(end)
        if cell_start is None or cell_end is None:
            logger.debug("no cell for text range %d-%d; overlay skipped", start, end)
            return cells
        return range_style(cells, cell_start, cell_end, overlay)

    def column_span(self, text: str) -> tuple[int, int] | None:
        if not self.document.column_mode:
            return None
        start, end = range_position(text, self.document.column_delimiter, self.document.column_num)
        if start < 0:
            return None
        return start, end

    def decorate(
        self,
        cells: LineContent,
        text: str,
        pos_map: dict[int, int],
        *,
        search: bool = True,
    ) -> LineContent:
        """Return ``cells`` with column and search highlights applied.

        The input tuple is left untouched, so cached line contents can be
        decorated again on the next frame.
        """
        span = self.column_span(text)
        if span is not None:
            cells = self._apply_span(cells, pos_map, span[0], span[1], self.theme.column_highlight)

        if search and self.searcher is not None:
            for start, end in self.searcher.find_all(text):
                cells = self._apply_span(cells, pos_map, start, end, self.theme.search_highlight)
        return cells

    def apply_row_overlays(self, screen: CellScreen, y: int, line: int) -> None:
        """Alternate-row styling spans the full row; mark styling its leading columns."""
        if self.document.alternate_rows and line % 2 == 1:
            style_row(screen, y, 0, self.width, self.theme.alternate)
        if line in self.document.marked:
            style_row(screen, y, 0, self.mark_width, self.theme.mark_line)

    def apply_header(self, screen: CellScreen, y: int) -> None:
        style_row(screen, y, 0, self.width, self.theme.header)

    def apply_selection(self, screen: CellScreen, selection: MouseSelection) -> None:
        """Highlight a stream selection; both end points are inclusive."""
        sel = selection.normalized()
        overlay = self.theme.selection
        if sel.y1 == sel.y2:
            x1, x2 = sorted((sel.x1, sel.x2))
            style_row(screen, sel.y1, x1, x2 + 1, overlay)
            return
        style_row(screen, sel.y1, sel.x1, self.width, overlay)
        for y in range(sel.y1 + 1, sel.y2):
            style_row(screen, y, 0, self.width, overlay)
        style_row(screen, sel.y2, 0, sel.x2 + 1, overlay)
