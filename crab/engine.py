"""Cursor movement and edit operations over a session."""

import logging
import unicodedata
from typing import Optional

from .model import Cursor, TextBuffer
from .session import Session

logger = logging.getLogger(__name__)


def is_control(ch: str) -> bool:
    """True for characters in the Unicode ``Cc`` category."""
    return unicodedata.category(ch) == "Cc"


class EditEngine:
    """Applies key-level operations to a :class:`Session`.

    Buffer and cursor are always mutated together so the cursor stays
    valid, and the viewport is re-synced after every row change.
    """

    def __init__(self, session: Optional[Session] = None, strip_trailing_whitespace: bool = True):
        self.session = session or Session()
        self.strip_trailing_whitespace = strip_trailing_whitespace

    @property
    def buffer(self) -> TextBuffer:
        return self.session.buffer

    @property
    def cursor(self) -> Cursor:
        return self.session.cursor

    # --- File operations ---

    def open(self, path: str) -> None:
        """Load ``path`` and bind the session to it.

        The cursor and viewport go back to the top of the document.
        """
        self.session.buffer = TextBuffer.load(path, self.strip_trailing_whitespace)
        self.session.path = path
        self.session.cursor = Cursor(0, 0)
        self.session.viewport.row_offset = 0
        logger.info(f"Opened {path} ({len(self.session.buffer)} lines)")

    def save(self) -> bool:
        """Write the buffer to the session path.

        Returns:
            True on success. False when there is no path or the write failed.
        """
        if self.session.path is None:
            return False
        saved = self.session.buffer.save(self.session.path)
        if saved:
            logger.info(f"Saved {self.session.path}")
        return saved

    # --- Cursor movement ---

    def scroll(self, visible_rows: Optional[int] = None) -> int:
        """Re-sync the viewport with the cursor.

        Args:
            visible_rows: Terminal height. Defaults to the last snapshot
                stored on the session.
        """
        if visible_rows is not None:
            self.session.visible_rows = visible_rows
        return self.session.viewport.scroll(self.cursor, self.session.visible_rows)

    def cursor_up(self) -> None:
        if self.cursor.row > 0:
            self.cursor.row -= 1
            self.cursor.column = min(self.cursor.column, self.buffer.line_length(self.cursor.row))
        self.scroll()

    def cursor_down(self) -> None:
        if self.cursor.row + 1 < len(self.buffer):
            self.cursor.row += 1
            self.cursor.column = min(self.cursor.column, self.buffer.line_length(self.cursor.row))
        self.scroll()

    def cursor_left(self) -> None:
        if self.cursor.column >= 1:
            self.cursor.column -= 1

    def cursor_right(self) -> None:
        self.cursor.column = min(self.cursor.column + 1, self.buffer.line_length(self.cursor.row))

    # --- Editing ---

    def insert(self, ch: str) -> bool:
        """Insert a single character at the cursor.

        A newline splits the line. Other control characters are ignored.

        Returns:
            True if the buffer changed.
        """
        if ch == "\n":
            self.buffer.split_line(self.cursor.row, self.cursor.column)
            self.cursor.row += 1
            self.cursor.column = 0
            self.scroll()
            return True
        if is_control(ch):
            return False
        self.buffer.insert_char(self.cursor.row, self.cursor.column, ch)
        self.cursor_right()
        return True

    def backspace(self) -> bool:
        """Delete the character before the cursor.

        At the start of a line the line is joined onto the previous one and
        the cursor lands on the join point.

        Returns:
            True if the buffer changed.
        """
        if self.cursor.row == 0 and self.cursor.column == 0:
            return False

        if self.cursor.column == 0:
            line = self.buffer.remove_line(self.cursor.row)
            self.cursor.row -= 1
            self.cursor.column = self.buffer.line_length(self.cursor.row)
            self.buffer.append_to_line(self.cursor.row, line)
            self.scroll()
        else:
            self.cursor_left()
            self.buffer.delete_char(self.cursor.row, self.cursor.column)
        return True
