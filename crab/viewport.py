"""Vertical scroll state."""

from dataclasses import dataclass

from .model import Cursor


@dataclass
class Viewport:
    """Index of the topmost buffer row currently visible."""
    row_offset: int = 0

    def scroll(self, cursor: Cursor, visible_rows: int) -> int:
        """Bring ``cursor.row`` back inside the window.

        Scrolls up at once when the cursor is above the window and down by
        the smallest amount that keeps it on the last visible row otherwise.
        Applying it twice with the same inputs is a no-op the second time.
        """
        visible_rows = max(1, visible_rows)
        self.row_offset = min(self.row_offset, cursor.row)
        if cursor.row + 1 >= visible_rows:
            self.row_offset = max(self.row_offset, cursor.row + 1 - visible_rows)
        return self.row_offset
