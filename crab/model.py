"""Text buffer and cursor position for the editor."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


@dataclass
class Cursor:
    """Logical edit position, 0-indexed.

    ``column`` may equal the length of the line, meaning "after the last
    character".
    """
    row: int = 0
    column: int = 0


class TextBuffer:
    """The document as an ordered list of lines.

    A buffer always holds at least one line; an empty document is ``[""]``.
    Lines never contain a line terminator.
    """

    lines: list[str]

    def __init__(self, lines: Optional[list[str]] = None):
        self.lines = list(lines) if lines else [""]

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, row: int) -> str:
        return self.lines[row]

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def line_length(self, row: int) -> int:
        return len(self.lines[row])

    def insert_char(self, row: int, column: int, ch: str) -> None:
        line = self.lines[row]
        self.lines[row] = line[:column] + ch + line[column:]

    def delete_char(self, row: int, column: int) -> None:
        line = self.lines[row]
        self.lines[row] = line[:column] + line[column + 1:]

    def split_line(self, row: int, column: int) -> None:
        """Break ``row`` at ``column``; the tail becomes the next line."""
        line = self.lines[row]
        self.lines[row] = line[:column]
        self.lines.insert(row + 1, line[column:])

    def remove_line(self, row: int) -> str:
        assert len(self.lines) > 1, "buffer must keep at least one line"
        return self.lines.pop(row)

    def append_to_line(self, row: int, text: str) -> None:
        self.lines[row] += text

    @classmethod
    def from_text(cls, text: str, strip_trailing_whitespace: bool = True) -> "TextBuffer":
        """Build a buffer from file contents.

        Lines end at ``\\n`` (a preceding ``\\r`` is dropped too). Trailing
        whitespace on each line is dropped unless disabled, so a load/save
        round trip is lossy for such lines.
        """
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        if strip_trailing_whitespace:
            lines = [line.rstrip() for line in lines]
        return cls(lines)

    def to_text(self) -> str:
        """Serialize with a newline after every line, including the last."""
        return "".join(line + "\n" for line in self.lines)

    @classmethod
    def load(cls, path: str, strip_trailing_whitespace: bool = True) -> "TextBuffer":
        """Read ``path`` into a buffer.

        Any read failure yields an empty single-line buffer so that a path
        that does not exist yet can still be edited.
        """
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except FileNotFoundError:
            logger.debug(f"{path} does not exist, starting with an empty buffer")
            return cls()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not load {path}: {e}")
            return cls()
        return cls.from_text(text, strip_trailing_whitespace)

    def save(self, path: str) -> bool:
        """Write the buffer to ``path`` atomically.

        A symlinked path writes through to its target. An existing file keeps
        its permission bits; one that is not writable is left alone.

        Returns:
            True if the file was written, False if the write failed. Failures
            are logged and never raised.
        """
        target = os.path.realpath(path)
        exists = os.path.exists(target)
        if exists and not os.access(target, os.W_OK):
            logger.warning(f"Could not save {path}: file is not writable")
            return False

        dir_name = os.path.dirname(target) or "."
        temp_filename = None
        try:
            with tempfile.NamedTemporaryFile(mode="w", encoding="utf-8", newline="\n",
                                             dir=dir_name, prefix=".",
                                             suffix=".tmp", delete=False) as temp_file:
                temp_filename = temp_file.name
                temp_file.write(self.to_text())
                temp_file.flush()
                os.fsync(temp_file.fileno())
            if exists:
                mode = stat.S_IMODE(os.stat(target).st_mode)
            else:
                mode = 0o666 & ~_current_umask()
            os.chmod(temp_filename, mode)
            os.replace(temp_filename, target)
            return True
        except (OSError, UnicodeEncodeError) as e:
            logger.warning(f"Could not save {path}: {e}")
            if temp_filename and os.path.exists(temp_filename):
                try:
                    os.remove(temp_filename)
                except OSError:
                    pass
            return False


def _current_umask() -> int:
    # The umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask
