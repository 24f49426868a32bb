"""Chat panel: a scrolling message history paired with an input box."""

from __future__ import annotations

from typing import Iterable, Optional

from hexcells.widgets import MessageList, Textbox

HISTORY_LINES = 25
HISTORY_LINE_CHARS = 15
INPUT_MAX_LENGTH = 15


class Chat:
    """Message history plus the box the player types new messages into."""

    def __init__(
        self,
        message_list: Optional[MessageList] = None,
        textbox: Optional[Textbox] = None,
    ) -> None:
        self.message_list = (
            message_list
            if message_list is not None
            else MessageList(HISTORY_LINES, HISTORY_LINE_CHARS)
        )
        self.textbox = (
            textbox
            if textbox is not None
            else Textbox(selected=False, default="", max_length=INPUT_MAX_LENGTH, moving_window=True)
        )

    def load_messages(self, messages: Iterable[str], display_from_end: bool = False) -> None:
        """Replace the shown history with ``messages``."""
        self.message_list.set_strings(messages, display_from_end)

    def take_text(self) -> str:
        """Return what was typed and empty the input box."""
        return self.textbox.get_text(True)