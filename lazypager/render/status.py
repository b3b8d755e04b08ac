"""Status line: document/mode info on the left, position on the right."""

from __future__ import annotations

from ..content import DEFAULT_CELL, LineContent, str_to_contents
from ..screen import CellScreen
from ..state import ViewerState, Viewport
from ..style import Style

STATUS_PALETTE_SIZE = 16
DEFAULT_STATUS_COLOR = 7


def status_color(doc_index: int) -> int:
    """Palette color for a document; document 0 keeps the default white."""
    if doc_index == 0:
        return DEFAULT_STATUS_COLOR
    return (doc_index + 8) % STATUS_PALETTE_SIZE


def normal_left_status(state: ViewerState) -> tuple[LineContent, int]:
    doc = state.doc
    number = f"[{state.current_doc}]" if state.document_count > 1 else ""
    follow = ""
    if doc.follow_mode:
        follow = "(Follow Mode)"
    if state.follow_all:
        follow = "(Follow All)"
    text = f"{number}{follow}{doc.file_name}:{state.message}"

    style = Style(fg=status_color(state.current_doc), reverse=True)
    contents = tuple(cell.with_style(style) for cell in str_to_contents(text))
    return contents, len(contents)


def input_left_status(state: ViewerState) -> tuple[LineContent, int]:
    """Prompt and typed value; the cursor sits inside the typed value."""
    flags = ""
    if state.input.is_search:
        if state.search_flags.regexp_search:
            flags += "(R)"
        if state.search_flags.incsearch:
            flags += "(I)"
        if state.search_flags.case_sensitive:
            flags += "(Aa)"
    prompt = flags + state.input.prompt
    contents = str_to_contents(prompt + state.input.value)
    prompt_width = len(str_to_contents(prompt))
    return contents, prompt_width + max(0, state.input.cursor_x)


def left_status(state: ViewerState) -> tuple[LineContent, int]:
    if state.input.is_normal:
        return normal_left_status(state)
    return input_left_status(state)


def right_status(state: ViewerState) -> LineContent:
    doc = state.doc
    more = "" if doc.is_at_end_of_buffer() else "..."
    return str_to_contents(f"({doc.scroll.top_ln}/{doc.buffered_line_count()}{more})")


def set_content_string(screen: CellScreen, x: int, y: int, contents: LineContent) -> None:
    """Write ``contents`` and terminate it with one default cell."""
    screen.put_contents(x, y, contents)
    screen.set_cell(x + len(contents), y, DEFAULT_CELL)


def draw_status(screen: CellScreen, state: ViewerState, viewport: Viewport) -> tuple[int, int]:
    """Draw both status segments and place the cursor; return the cursor position.

    On narrow screens the right segment may overwrite the left one.
    """
    y = viewport.status_row
    left, cursor_x = left_status(state)
    set_content_string(screen, 0, y, left)

    right = right_status(state)
    set_content_string(screen, viewport.width - len(right), y, right)

    screen.show_cursor(cursor_x, y)
    return cursor_x, y
