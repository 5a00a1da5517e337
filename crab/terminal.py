"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import select
import sys
from typing import Optional

import blessed

from .constants import EditorConstants

logger = logging.getLogger(__name__)


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream=None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None

    def setup(self):
        """Enter fullscreen mode and start reading key events."""
        self.write(self.term.enter_fullscreen + self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
            except Exception as e:
                # curtsies can fail to initialize without a real tty (CI,
                # pipes); the editor then runs without key input.
                logger.warning(f"Keyboard input unavailable: {e}")
                self._curtsies_input = None

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            self.write(self.term.exit_fullscreen + self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception as e:
                # Teardown must not mask the error that ended the session
                logger.warning(f"Could not leave raw mode cleanly: {e}")
            finally:
                self._curtsies_input = None

    def size(self) -> tuple[int, int]:
        """Snapshot of the terminal size as (rows, cols)."""
        rows = self.term.height or EditorConstants.DEFAULT_ROWS
        cols = self.term.width or EditorConstants.DEFAULT_COLUMNS
        return (rows, cols)

    def write(self, data: str) -> None:
        """Write and flush. Errors from the output stream propagate."""
        self.stream.write(data)
        self.stream.flush()

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, a curtsies PasteEvent for pasted text,
            or None if no key arrived.
        """
        if self._curtsies_input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        return next(self._curtsies_input)  # type: ignore
