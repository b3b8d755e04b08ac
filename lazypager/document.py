"""In-memory document model consumed by the renderer.

Holds the raw (possibly ANSI-colored) lines of one file or stream together
with the per-document view modes. Lines are expanded into cells lazily and
the expansions are cached until the tab width changes.
"""

from __future__ import annotations

from pathlib import Path

from .content import LineContent, contents_to_str, parse_contents
from .errors import LineNotFoundError
from .highlight import DEFAULT_STYLE_NAME, colorize_source, read_text, sanitize_terminal_text
from .state import ScrollState

DEFAULT_TAB_WIDTH = 8
MAX_CACHED_LINES = 4096


class Document:
    def __init__(
        self,
        lines: list[str] | None = None,
        file_name: str = "",
        *,
        eof: bool = True,
        tab_width: int = DEFAULT_TAB_WIDTH,
    ) -> None:
        self._lines: list[str] = list(lines or [])
        self._partial = False
        self.eof = eof
        self.file_name = file_name

        self.wrap_mode = True
        self.column_mode = False
        self.column_delimiter = ","
        self.column_num = 0
        self.line_num_mode = False
        self.alternate_rows = False
        self.marked: set[int] = set()
        self.follow_mode = False
        self.tab_width = tab_width
        self.skip_lines = 0
        self.header = 0
        self.scroll = ScrollState()

        self._contents: dict[int, LineContent] = {}
        self._contents_tab_width = tab_width
        self._strs: dict[int, tuple[LineContent, str, dict[int, int]]] = {}

    @classmethod
    def from_text(
        cls,
        text: str,
        file_name: str = "",
        *,
        highlight: bool = False,
        style: str = DEFAULT_STYLE_NAME,
        eof: bool = True,
    ) -> Document:
        source = sanitize_terminal_text(text)
        if highlight and source:
            source = colorize_source(source, Path(file_name or "untitled.txt"), style)
        doc = cls(file_name=file_name, eof=eof)
        doc._append(source)
        return doc

    @classmethod
    def from_path(
        cls,
        path: Path,
        *,
        highlight: bool = True,
        style: str = DEFAULT_STYLE_NAME,
    ) -> Document:
        return cls.from_text(read_text(path), str(path), highlight=highlight, style=style)

    def append_text(self, text: str) -> None:
        """Append streamed text; an unterminated last line keeps growing."""
        self._append(sanitize_terminal_text(text))

    def _append(self, text: str) -> None:
        if not text:
            return
        pieces = text.split("\n")
        if self._partial and self._lines:
            last = len(self._lines) - 1
            self._lines[last] += pieces.pop(0)
            if pieces:
                self._lines[last] = self._lines[last].rstrip("\r")
            self._forget(last)
            if not pieces:
                return

        trailing = pieces.pop()
        self._lines.extend(piece.rstrip("\r") for piece in pieces)
        if trailing:
            self._lines.append(trailing)
            self._partial = True
        else:
            self._partial = False

    def _forget(self, line: int) -> None:
        self._contents.pop(line, None)
        self._strs.pop(line, None)

    def buffered_line_count(self) -> int:
        return len(self._lines)

    def is_at_end_of_buffer(self) -> bool:
        return self.eof

    def first_content_line(self) -> int:
        """First scrollable line: after the skipped lines and the header."""
        return max(0, self.skip_lines) + max(0, self.header)

    def raw_line(self, line: int) -> str:
        if 0 <= line < len(self._lines):
            return self._lines[line]
        return ""

    def get_contents(self, line: int, tab_width: int | None = None) -> LineContent:
        """Return the cells of ``line``; out-of-range lines yield no cells."""
        if tab_width is None:
            tab_width = self.tab_width
        if not 0 <= line < len(self._lines):
            return ()
        if tab_width != self._contents_tab_width:
            self._contents.clear()
            self._strs.clear()
            self._contents_tab_width = tab_width

        cells = self._contents.get(line)
        if cells is None:
            if len(self._contents) >= MAX_CACHED_LINES:
                self._contents.clear()
                self._strs.clear()
            cells = parse_contents(self._lines[line], tab_width)
            self._contents[line] = cells
        return cells

    def get_contents_str(self, line: int, cells: LineContent) -> tuple[str, dict[int, int]]:
        """Plain text of ``cells`` and its text-to-cell index map, cached per line."""
        cached = self._strs.get(line)
        if cached is not None and cached[0] is cells:
            return cached[1], cached[2]
        text, pos_map = contents_to_str(cells)
        if 0 <= line < len(self._lines):
            self._strs[line] = (cells, text, pos_map)
        return text, pos_map

    def line_cells(self, line: int, tab_width: int | None = None) -> LineContent:
        """Like ``get_contents`` but raise ``LineNotFoundError`` when out of range."""
        if not 0 <= line < len(self._lines):
            raise LineNotFoundError(line, len(self._lines))
        return self.get_contents(line, tab_width)

    def toggle_mark(self, line: int) -> None:
        if line in self.marked:
            self.marked.discard(line)
        else:
            self.marked.add(line)
