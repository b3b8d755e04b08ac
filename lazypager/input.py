"""Input-line state read by the status composer.

Key decoding lives elsewhere; this module only names the input modes, their
prompts, and the search option flags shown next to a search prompt.
"""

from __future__ import annotations

from dataclasses import dataclass

NORMAL = "normal"
SEARCH = "search"
BACKSEARCH = "backsearch"
GOTO = "goto"
HEADER = "header"
SKIP_LINES = "skip_lines"
DELIMITER = "delimiter"
TAB_WIDTH = "tab_width"
COLUMN = "column"

PROMPTS: dict[str, str] = {
    NORMAL: "",
    SEARCH: "/",
    BACKSEARCH: "?",
    GOTO: "Goto line:",
    HEADER: "Header length:",
    SKIP_LINES: "Skip lines:",
    DELIMITER: "Delimiter:",
    TAB_WIDTH: "TAB width:",
    COLUMN: "Column number:",
}

SEARCH_MODES = frozenset({SEARCH, BACKSEARCH})


@dataclass(frozen=True)
class SearchFlags:
    regexp_search: bool = False
    incsearch: bool = True
    case_sensitive: bool = False


@dataclass(frozen=True)
class InputState:
    """Snapshot of the input line: mode, typed value and cursor column."""

    mode: str = NORMAL
    value: str = ""
    cursor_x: int = 0
    prompt_text: str | None = None

    @property
    def prompt(self) -> str:
        if self.prompt_text is not None:
            return self.prompt_text
        return PROMPTS.get(self.mode, "")

    @property
    def is_normal(self) -> bool:
        return self.mode == NORMAL

    @property
    def is_search(self) -> bool:
        return self.mode in SEARCH_MODES
