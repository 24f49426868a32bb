"""Text widgets: a scrolling list of lines and a single-line input box."""

from __future__ import annotations

from typing import Iterable, List, Union

from hexcells.game import PlayerData

DELETE_KEY = 8
ENTER_KEY = 13
ESCAPE_KEY = 27
MAX_STRING_LENGTH_DEFAULT = 15


class MessageList:
    """Lines wrapped to a fixed width and shown through a scrolling window."""

    def __init__(self, max_displayed: int, max_chars: int) -> None:
        if max_displayed < 1 or max_chars < 1:
            raise ValueError("list dimensions must be positive")
        self._max_displayed = max_displayed
        self._max_chars = max_chars
        self._lines: List[str] = []
        self._first = 0
        self._text = ""

    def _wrap(self, strings: Iterable[str]) -> List[str]:
        lines: List[str] = []
        width = self._max_chars
        for text in strings:
            if len(text) > width:
                pieces = len(text) // width
                lines.extend(">" + text[width * i: width * (i + 1)] for i in range(pieces))
                start = width * pieces
                lines.append(text[start: start + len(text) % width])
            else:
                lines.append(">" + text)
        return lines

    def _render(self) -> None:
        shown = self._lines[self._first: self._first + self._max_displayed]
        self._text = "".join(line + "\n" for line in shown)

    def set_players(self, players: Iterable[PlayerData]) -> None:
        """Show players' nicknames from the top of the list."""
        self._lines = self._wrap(player.nickname for player in players)
        self._first = 0
        self._render()

    def set_strings(self, messages: Iterable[str], display_from_end: bool = False) -> None:
        """Show messages scrolled to the end of the list.

        The view always scrolls to the latest lines, whatever ``display_from_end`` says.
        """
        self._lines = self._wrap(messages)
        total = len(self._lines)
        if total >= self._max_displayed - 1:
            self._first = total - self._max_displayed + 1
        else:
            self._first = 0
        self._render()

    def shift_up(self) -> None:
        if self._first > 0:
            self._first -= 1
        self._render()

    def shift_down(self) -> None:
        if self._first + self._max_displayed < len(self._lines):
            self._first += 1
        self._render()

    def text(self) -> str:
        """The visible lines, each ending with a newline."""
        return self._text


class Textbox:
    """A single-line ASCII input box with a length limit and optional scrolling."""

    def __init__(
        self,
        selected: bool = False,
        default: str = "",
        max_length: int = MAX_STRING_LENGTH_DEFAULT,
        moving_window: bool = False,
        max_displayed_char: int = MAX_STRING_LENGTH_DEFAULT,
    ) -> None:
        self._selected = selected
        self._moving_window = moving_window
        self._max_displayed_char = max_displayed_char - 1
        self._limit = max_length - 1
        self._first = 0
        self._text = ""
        if selected:
            self._display = "_"
        else:
            if len(default) > self._limit:
                raise ValueError("String is too long")
            self._text = default
            self._display = default

    def typed(self, char: Union[str, int]) -> None:
        """Handle one typed character, given as a one-character string or a code."""
        if not self._selected:
            return
        code = ord(char) if isinstance(char, str) else char
        if code >= 128:
            return
        if len(self._text) <= self._limit:
            self._input(code)
        elif code == DELETE_KEY:
            self._delete_last()
        elif self._moving_window:
            self._input(code)

    def _delete_last(self) -> None:
        if self._first > 0:
            self._first -= 1
        self._text = self._text[:-1]
        self._display = self._text + "_"

    def _input(self, code: int) -> None:
        if code not in (DELETE_KEY, ENTER_KEY, ESCAPE_KEY):
            if len(self._text) >= self._max_displayed_char:
                self._first += 1
            self._text += chr(code)
        elif code == DELETE_KEY and self._text:
            self._delete_last()

        if self._moving_window:
            self._display = self._text[self._first:] + "_"
        else:
            self._display = self._text + "_"

    def set_selected(self, selected: bool) -> None:
        self._selected = selected
        if not selected:
            self._display = self._text

    def selected(self) -> bool:
        return self._selected

    def get_text(self, clear: bool = False) -> str:
        """The typed text; with ``clear`` the box is emptied afterwards."""
        text = self._text
        if clear:
            self.clear()
        return text

    def clear(self) -> None:
        self._text = ""
        self._first = 0
        self._display = ""

    def display(self) -> str:
        """What the box shows, with a trailing cursor while editing."""
        return self._display