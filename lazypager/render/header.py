"""Header rows: the fixed leading lines shown above the scrolling body."""

from __future__ import annotations

from ..content import str_to_contents
from ..document import Document
from ..screen import CellScreen
from ..state import LineNumber, Viewport
from .layout import LineLayout
from .overlay import OverlayResolver


def render_header(
    screen: CellScreen,
    document: Document,
    viewport: Viewport,
    layout: LineLayout,
    resolver: OverlayResolver,
    row_map: list[LineNumber],
    lx: int,
) -> tuple[int, int]:
    """Draw header lines and return ``(next line, header rows drawn)``.

    Lines before ``skip_lines`` are hidden; lines up to the first content line
    are drawn, wrapping onto extra rows in wrap mode, and every header row
    gets the header style over its full width.
    """
    ly = max(0, document.skip_lines)
    first_line = document.first_content_line()
    tab_width = document.tab_width
    wrap = 0
    hy = 0
    while ly < first_line and hy < viewport.usable_rows:
        cells = document.get_contents(ly, tab_width)
        text, pos_map = document.get_contents_str(ly, cells)
        cells = resolver.decorate(cells, text, pos_map, search=False)

        if document.line_num_mode and viewport.start_x > 0:
            screen.put_contents(0, hy, str_to_contents(" " * (viewport.start_x - 1)))

        row_map[hy] = LineNumber(ly, wrap)

        lx, advanced = layout.draw(screen, hy, cells, lx)
        if advanced:
            ly += 1
            wrap = 0
        else:
            wrap += 1

        resolver.apply_header(screen, hy)
        hy += 1

    return ly, hy
