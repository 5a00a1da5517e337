"""Editing session state.

The buffer, cursor, viewport and document path live together in one
:class:`Session` that is passed explicitly to whoever needs it.
"""

from dataclasses import dataclass, field
from typing import Optional

from .constants import EditorConstants
from .model import Cursor, TextBuffer
from .viewport import Viewport


@dataclass
class Session:
    buffer: TextBuffer = field(default_factory=TextBuffer)
    cursor: Cursor = field(default_factory=Cursor)
    viewport: Viewport = field(default_factory=Viewport)
    path: Optional[str] = None
    # Terminal height from the most recent size snapshot
    visible_rows: int = EditorConstants.DEFAULT_ROWS

    def check_invariants(self) -> None:
        """Assert the buffer and cursor are consistent."""
        assert len(self.buffer) >= 1, "buffer is empty"
        row, column = self.cursor.row, self.cursor.column
        assert 0 <= row < len(self.buffer), f"cursor row {row} out of range"
        assert 0 <= column <= self.buffer.line_length(row), \
            f"cursor column {column} out of range for row {row}"
