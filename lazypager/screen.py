"""In-memory terminal cell grid.

The renderer writes cells here and reads them back when composing row-level
overlays. ``show`` repaints the whole grid as one ANSI frame.
"""

from __future__ import annotations

import os
import sys

from .content import DEFAULT_CELL, FILLER, Cell, LineContent
from .style import DEFAULT_STYLE, Style


class CellScreen:
    def __init__(self, width: int, height: int, out_fd: int | None = None) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.out_fd = out_fd
        self.cursor: tuple[int, int] | None = None
        self._cells: list[list[Cell]] = self._blank_grid()

    def _blank_grid(self) -> list[list[Cell]]:
        return [[DEFAULT_CELL] * self.width for _ in range(self.height)]

    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._cells = self._blank_grid()
        self.cursor = None

    def clear(self) -> None:
        self._cells = self._blank_grid()
        self.cursor = None

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_cell(self, x: int, y: int, cell: Cell) -> None:
        """Store ``cell`` at ``(x, y)``; writes outside the grid are ignored."""
        if self.in_bounds(x, y):
            self._cells[y][x] = cell

    def put_contents(self, x: int, y: int, cells: LineContent) -> None:
        for offset, cell in enumerate(cells):
            self.set_cell(x + offset, y, cell)

    def set_content(
        self,
        x: int,
        y: int,
        mainc: str,
        combc: tuple[str, ...] = (),
        style: Style = DEFAULT_STYLE,
        width: int = 1,
    ) -> None:
        self.set_cell(x, y, Cell(mainc, tuple(combc), width, style))

    def get_content(self, x: int, y: int) -> Cell:
        if self.in_bounds(x, y):
            return self._cells[y][x]
        return DEFAULT_CELL

    def show_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def row_text(self, y: int) -> str:
        """Return the plain characters of row ``y`` (tab and wide fillers dropped)."""
        if not 0 <= y < self.height:
            return ""
        out: list[str] = []
        for cell in self._cells[y]:
            if cell.width == 0:
                continue
            out.append(_cell_glyph(cell))
        return "".join(out)

    def row_styles(self, y: int) -> list[Style]:
        if not 0 <= y < self.height:
            return []
        return [cell.style for cell in self._cells[y]]

    def render_ansi(self) -> str:
        """Compose a full-repaint ANSI frame of the grid and cursor."""
        out: list[str] = ["\033[H\033[J"]
        for y, row in enumerate(self._cells):
            current: Style | None = None
            for cell in row:
                if cell.width == 0:
                    continue
                if cell.style != current:
                    out.append(cell.style.sgr())
                    current = cell.style
                out.append(_cell_glyph(cell))
            out.append("\033[0m")
            if y < self.height - 1:
                out.append("\r\n")
        if self.cursor is not None:
            x, y = self.cursor
            out.append(f"\033[{y + 1};{x + 1}H\033[?25h")
        else:
            out.append("\033[?25l")
        return "".join(out)

    def show(self) -> None:
        """Flush the grid to the terminal."""
        fd = self.out_fd if self.out_fd is not None else sys.stdout.fileno()
        os.write(fd, self.render_ansi().encode("utf-8", errors="replace"))


def _cell_glyph(cell: Cell) -> str:
    if cell.mainc == FILLER:
        return " "
    if cell.mainc == "\t":
        return " " + "".join(cell.combc)
    return cell.mainc + "".join(cell.combc)
