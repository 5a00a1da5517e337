"""Main editor controller."""

import logging
import os
import select
import signal
import sys
import termios
from typing import Optional

from .commands import CommandRegistry
from .config import EditorConfig
from .constants import EditorConstants
from .engine import EditEngine
from .keyboard import KeyboardHandler, KeyEvent
from .session import Session
from .terminal import TerminalInterface
from .view import Decorator, layout, render_frame

logger = logging.getLogger(__name__)


class Editor:
    """Terminal editor application controller.

    Each handled key event runs one command followed by one full redraw.
    """

    def __init__(self, config: Optional[EditorConfig] = None,
                 terminal: Optional[TerminalInterface] = None,
                 decorate: Optional[Decorator] = None):
        """Initialize the editor components."""
        self.config = config or EditorConfig()
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.session = Session()
        self.engine = EditEngine(self.session, self.config.strip_trailing_whitespace)
        self.command_registry = CommandRegistry()
        self.decorate = decorate
        self.running = False
        self.modified = False
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, EditorConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) by asking the main loop to quit."""
        del signum, frame  # Unused
        os.write(self._resize_pipe_w, EditorConstants.QUIT_PIPE_MARKER)

    def load_file(self, filename: str):
        """Open ``filename``; a missing or unreadable file gives an empty buffer."""
        self.engine.open(filename)
        self.modified = False

    def save(self) -> bool:
        """Save to the session path. Failures leave the session untouched."""
        if self.engine.save():
            self.modified = False
            return True
        return False

    def draw(self):
        """Redraw the whole screen from a single terminal size snapshot."""
        rows, cols = self.terminal.size()
        self.engine.scroll(rows)
        frame = layout(self.session.buffer, self.session.cursor,
                       self.session.viewport.row_offset, rows, cols,
                       decorate=self.decorate)
        self.terminal.write(render_frame(self.terminal.term, frame))

    def handle_key_event(self, key_event: KeyEvent):
        """Dispatch a key event to its command."""
        if self.command_registry.execute(self, key_event):
            self.modified = True
        self.session.check_invariants()

    def run(self):
        """Run the main editor loop."""
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        try:
            with self.terminal.term.cbreak():
                # Let Ctrl-S and Ctrl-Q through instead of flow control
                old_settings = None
                try:
                    old_settings = termios.tcgetattr(sys.stdin)
                    new_settings = list(old_settings)
                    new_settings[0] &= ~(termios.IXON | termios.IXOFF)
                    termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
                except (termios.error, AttributeError, OSError):
                    old_settings = None

                try:
                    self._loop()
                finally:
                    if old_settings:
                        try:
                            termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
                        except (termios.error, OSError) as e:
                            logger.warning(f"Could not restore terminal settings: {e}")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self.terminal.cleanup()

    def _loop(self):
        need_draw = True
        while self.running:
            if need_draw:
                self.draw()
                need_draw = False

            # fd 0 is stdin
            ready, _, _ = select.select([0, self._resize_pipe_r], [], [])

            if self._resize_pipe_r in ready:
                data = os.read(self._resize_pipe_r, 1024)
                if EditorConstants.QUIT_PIPE_MARKER in data:
                    self.running = False
                else:
                    need_draw = True
            elif 0 in ready:
                key_event = self.keyboard.get_key_event(timeout=0)
                if key_event:
                    self.handle_key_event(key_event)
                    need_draw = True
