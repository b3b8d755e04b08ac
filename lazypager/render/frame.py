"""Frame orchestration: header, body, selection, status, flush.

One call to ``FrameRenderer.draw`` produces one complete frame from a snapshot
of the viewer state. Degenerate geometry or an empty document short-circuits
to a status-only frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ..config import GeneralConfig
from ..document import Document
from ..screen import CellScreen
from ..search import build_searcher
from ..state import EMPTY_ROW, LineNumber, ScrollState, ViewerState, Viewport, gutter_width
from ..theme import DEFAULT_THEME, PagerTheme
from .body import render_body
from .header import render_header
from .layout import select_layout
from .overlay import OverlayResolver
from .status import draw_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameResult:
    populated: bool
    bottom_ln: int = 0
    bottom_lx: int = 0
    header_rows: int = 0
    row_map: tuple[LineNumber, ...] = field(default_factory=tuple)
    cursor: tuple[int, int] = (0, 0)


def build_viewport(document: Document, width: int, height: int, min_start_x: int = 0) -> Viewport:
    start_x = 0
    if document.line_num_mode:
        start_x = gutter_width(document.buffered_line_count())
    return Viewport(width=width, height=height, start_x=start_x, min_start_x=min_start_x)


def sanitize_scroll(scroll: ScrollState, min_x: int = 0) -> ScrollState:
    """Clamp scroll offsets below their floor, reporting each correction.

    ``top_ln`` and ``top_lx`` never go below 0; ``x`` may reach ``min_x``.
    """
    changes: dict[str, int] = {}
    for name, floor in (("top_ln", 0), ("top_lx", 0), ("x", min(0, min_x))):
        value = getattr(scroll, name)
        if value < floor:
            logger.warning("%s %d below %d corrected", name, value, floor)
            changes[name] = floor
    if not changes:
        return scroll
    return replace(scroll, **changes)


class FrameRenderer:
    def __init__(
        self,
        screen: CellScreen,
        theme: PagerTheme = DEFAULT_THEME,
        general: GeneralConfig | None = None,
    ) -> None:
        self.screen = screen
        self.theme = theme
        self.general = general if general is not None else GeneralConfig()

    def draw(self, state: ViewerState, *, flush: bool = True) -> FrameResult:
        screen = self.screen
        document = state.doc
        screen.clear()

        min_start_x = min(0, self.general.min_start_x)
        viewport = build_viewport(document, screen.width, screen.height, min_start_x)
        row_map = [EMPTY_ROW] * viewport.height

        if document.buffered_line_count() == 0 or viewport.usable_rows <= 0:
            document.scroll = replace(document.scroll, top_ln=0)
            return self._finish(state, viewport, row_map, FrameResult(populated=False), flush)

        scroll = sanitize_scroll(document.scroll, min_start_x)
        if scroll != document.scroll:
            document.scroll = scroll

        searcher = build_searcher(
            state.search_word,
            regexp=state.search_flags.regexp_search,
            case_sensitive=state.search_flags.case_sensitive,
        )
        layout = select_layout(document.wrap_mode, viewport)
        resolver = OverlayResolver(
            self.theme,
            document,
            searcher,
            viewport.width,
            self.general.mark_style_width,
        )

        header_lx = 0 if layout.wraps else scroll.x
        ly, header_rows = render_header(screen, document, viewport, layout, resolver, row_map, header_lx)

        body_lx = scroll.top_lx if layout.wraps else scroll.x
        lx, ly = render_body(
            screen,
            document,
            viewport,
            layout,
            resolver,
            row_map,
            scroll.top_ln,
            body_lx,
            ly,
            header_rows,
        )

        if state.mouse_select is not None:
            resolver.apply_selection(screen, state.mouse_select)

        result = FrameResult(
            populated=True,
            bottom_ln=scroll.top_ln + max(ly, 0),
            bottom_lx=lx,
            header_rows=header_rows,
        )
        return self._finish(state, viewport, row_map, result, flush)

    def _finish(
        self,
        state: ViewerState,
        viewport: Viewport,
        row_map: list[LineNumber],
        result: FrameResult,
        flush: bool,
    ) -> FrameResult:
        cursor = draw_status(self.screen, state, viewport)
        if flush:
            self.screen.show()

        state.row_map = row_map
        state.header_rows = result.header_rows
        if result.populated:
            state.bottom_ln = result.bottom_ln
            state.bottom_lx = result.bottom_lx
        return replace(result, row_map=tuple(row_map), cursor=cursor)


def draw_frame(
    screen: CellScreen,
    state: ViewerState,
    theme: PagerTheme = DEFAULT_THEME,
    general: GeneralConfig | None = None,
    *,
    flush: bool = True,
) -> FrameResult:
    """Render one frame with a throwaway ``FrameRenderer``."""
    return FrameRenderer(screen, theme, general).draw(state, flush=flush)
