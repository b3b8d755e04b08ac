"""Screen composition for the pager.

Turns the current document, scroll position and viewer modes into one frame
of styled cells: header rows, body rows, overlays and the status line.
"""

from __future__ import annotations

from .body import render_body
from .frame import FrameRenderer, FrameResult, build_viewport, draw_frame
from .header import render_header
from .layout import LineLayout, NoWrapLayout, WrapLayout, select_layout, wrap_starts
from .overlay import OverlayResolver
from .status import draw_status, left_status, right_status

__all__ = [
    "FrameRenderer",
    "FrameResult",
    "LineLayout",
    "NoWrapLayout",
    "OverlayResolver",
    "WrapLayout",
    "build_viewport",
    "draw_frame",
    "draw_status",
    "left_status",
    "render_body",
    "render_header",
    "right_status",
    "select_layout",
    "wrap_starts",
]
