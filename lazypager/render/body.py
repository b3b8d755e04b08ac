"""Scrolling body rows between the header and the status line.

Walks terminal rows top to bottom while a cursor moves through logical lines.
In wrap mode several rows share one logical line; its cells are expanded and
decorated once and reused until the cursor moves on.
"""

from __future__ import annotations

import logging

from ..content import LineContent, LineContentCache, line_style, str_to_contents
from ..document import Document
from ..errors import LineNotFoundError
from ..screen import CellScreen
from ..state import EMPTY_ROW, LineNumber, Viewport
from ..style import DEFAULT_STYLE, OverlayStyle, apply_style
from .layout import LineLayout, wrap_segment_index
from .overlay import OverlayResolver

logger = logging.getLogger(__name__)


def initial_wrap_segment(
    document: Document,
    layout: LineLayout,
    line: int,
    lx: int,
) -> int:
    """Recover which wrap segment of ``line`` the body starts in.

    A line that cannot be located is reported and treated as starting at its
    first segment.
    """
    if not layout.wraps or lx <= 0:
        return 0
    try:
        cells = document.line_cells(line, document.tab_width)
    except LineNotFoundError as exc:
        logger.warning("%s while drawing body from line %d", exc, line)
        return 0
    return wrap_segment_index(cells, lx, layout.avail)


def line_number_contents(
    number: int | None,
    gutter_width: int,
    overlay: OverlayStyle,
) -> LineContent:
    """Right-justified number (or blanks) filling the gutter minus its separator."""
    text = " " * gutter_width if number is None else f"{number:>{gutter_width}}"
    style = apply_style(DEFAULT_STYLE, overlay)
    return tuple(cell.with_style(style) for cell in str_to_contents(text))


def render_body(
    screen: CellScreen,
    document: Document,
    viewport: Viewport,
    layout: LineLayout,
    resolver: OverlayResolver,
    row_map: list[LineNumber],
    top_ln: int,
    lx: int,
    ly: int,
    header_rows: int,
) -> tuple[int, int]:
    """Draw body rows and return the ``(lx, ly)`` position after the last row.

    ``ly`` counts from the first header line, so the logical line on a row is
    ``top_ln + ly``.
    """
    tab_width = document.tab_width
    line_count = document.buffered_line_count()
    first_line = document.first_content_line()
    body_overlay = resolver.theme.body
    number_overlay = resolver.theme.line_number
    number_width = viewport.start_x - 1

    wrap = initial_wrap_segment(document, layout, top_ln + ly, lx)
    cache = LineContentCache()
    cells: LineContent = ()

    for y in range(header_rows, viewport.status_row):
        line = top_ln + ly
        if line >= line_count:
            row_map[y] = EMPTY_ROW
            ly += 1
            lx = 0 if layout.wraps else lx
            continue

        if cache.fetch(document, line, tab_width):
            base = line_style(cache.cells, body_overlay)
            cells = resolver.decorate(base, cache.text, cache.pos_map)

        if document.line_num_mode and number_width > 0:
            number = line - first_line + 1 if wrap == 0 else None
            screen.put_contents(0, y, line_number_contents(number, number_width, number_overlay))

        row_map[y] = LineNumber(line, wrap)

        lx, advanced = layout.draw(screen, y, cells, lx)
        wrap = 0 if advanced else wrap + 1

        resolver.apply_row_overlays(screen, y, line)

        if advanced:
            ly += 1

    return lx, ly
