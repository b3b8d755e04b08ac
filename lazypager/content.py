"""Styled cell sequences for logical lines.

A logical line is expanded once into a tuple of ``Cell`` values: tabs become
runs of cells up to the next tab stop, wide glyphs are followed by a
zero-width filler cell, and ANSI SGR sequences turn into cell styles. Because
every display column owns exactly one cell, a cell index doubles as the
column offset inside the line.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .ansi import ANSI_ESCAPE_RE, TAB_STOP, char_display_width, is_combining, parse_sgr
from .style import DEFAULT_STYLE, OverlayStyle, Style, apply_style

if TYPE_CHECKING:
    from .document import Document

FILLER = ""


@dataclass(frozen=True)
class Cell:
    """One terminal column worth of content."""

    mainc: str = " "
    combc: tuple[str, ...] = ()
    width: int = 1
    style: Style = DEFAULT_STYLE

    def with_style(self, style: Style) -> Cell:
        if style == self.style:
            return self
        return replace(self, style=style)

    @property
    def is_filler(self) -> bool:
        """Tab padding or the right half of a wide glyph."""
        return self.mainc == FILLER


DEFAULT_CELL = Cell()

LineContent = tuple[Cell, ...]


def _control_caret(ch: str) -> str:
    if ch == "\x7f":
        return "?"
    return chr(ord(ch) + 64)


def parse_contents(text: str, tab_width: int = TAB_STOP) -> LineContent:
    """Expand one line of (possibly ANSI-colored) text into cells.

    ``tab_width <= 0`` keeps each tab as a single cell. Other control
    characters are shown in caret notation (``^A``).
    """
    cells: list[Cell] = []
    style = DEFAULT_STYLE
    idx = 0
    n = len(text)
    while idx < n:
        ch = text[idx]
        if ch == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, idx)
            if match is not None:
                seq = match.group(0)
                if seq.endswith("m"):
                    style = parse_sgr(seq[2:-1], style)
                idx = match.end()
                continue
        idx += 1

        if ch == "\t":
            cells.append(Cell("\t", style=style))
            if tab_width > 0:
                pad = char_display_width("\t", len(cells) - 1, tab_width) - 1
                cells.extend(Cell(FILLER, style=style) for _ in range(pad))
            continue

        if is_combining(ch):
            base = len(cells) - 1
            while base >= 0 and cells[base].is_filler:
                base -= 1
            if base < 0:
                # Nothing to attach to: carry the mark on a blank column.
                cells.append(Cell(" ", combc=(ch,), style=style))
            else:
                cells[base] = replace(cells[base], combc=cells[base].combc + (ch,))
            continue

        if ch < " " or ch == "\x7f":
            cells.append(Cell("^", style=style))
            cells.append(Cell(_control_caret(ch), style=style))
            continue

        width = char_display_width(ch, len(cells), tab_width)
        cells.append(Cell(ch, width=width, style=style))
        if width == 2:
            cells.append(Cell(FILLER, width=0, style=style))

    return tuple(cells)


def str_to_contents(text: str, tab_width: int = -1) -> LineContent:
    """Expand status/gutter text; tabs are not aligned to stops by default."""
    return parse_contents(text, tab_width)


def contents_to_str(cells: LineContent) -> tuple[str, dict[int, int]]:
    """Return the plain text of ``cells`` and its text-index to cell-index map.

    Only the first character of each cell is mapped; the text length maps to
    ``len(cells)`` so half-open match ranges ending at end of line resolve.
    """
    parts: list[str] = []
    pos_map: dict[int, int] = {}
    length = 0
    for idx, cell in enumerate(cells):
        if cell.is_filler:
            continue
        pos_map[length] = idx
        chunk = cell.mainc + "".join(cell.combc)
        parts.append(chunk)
        length += len(chunk)
    pos_map[length] = len(cells)
    return "".join(parts), pos_map


def range_style(cells: LineContent, start: int, end: int, overlay: OverlayStyle) -> LineContent:
    """Return a copy of ``cells`` with ``overlay`` composed over ``[start, end)``."""
    start = max(0, start)
    end = min(len(cells), end)
    if start >= end or overlay.is_empty():
        return cells
    styled = tuple(cell.with_style(apply_style(cell.style, overlay)) for cell in cells[start:end])
    return cells[:start] + styled + cells[end:]


def line_style(cells: LineContent, overlay: OverlayStyle) -> LineContent:
    return range_style(cells, 0, len(cells), overlay)


class LineContentCache:
    """Remembers the expansion of the most recently fetched logical line.

    Wrapped lines are drawn over several rows; the cache keeps those rows from
    expanding the same line again.
    """

    def __init__(self) -> None:
        self.line = -1
        self.cells: LineContent = ()
        self.text = ""
        self.pos_map: dict[int, int] = {0: 0}

    def fetch(self, document: Document, line: int, tab_width: int) -> bool:
        """Load ``line`` unless it is already cached; return whether it changed."""
        if line == self.line:
            return False
        self.cells = document.get_contents(line, tab_width)
        self.text, self.pos_map = document.get_contents_str(line, self.cells)
        self.line = line
        return True

    def invalidate(self) -> None:
        self.line = -1
