"""Screen layout: wrap buffer lines onto a fixed character grid."""

from dataclasses import dataclass, field
from typing import Callable, Optional

from wcwidth import wcwidth

from .model import Cursor, TextBuffer

# Maps a line to one display string per character (e.g. with color
# sequences around it). Widths are always taken from the raw characters.
Decorator = Callable[[str], list[str]]


def char_width(ch: str) -> int:
    """Number of terminal columns ``ch`` occupies.

    Combining marks are 0 wide, East Asian wide characters 2. Characters
    with no defined width (controls) count as 0.
    """
    width = wcwidth(ch)
    return width if width > 0 else 0


@dataclass
class Layout:
    """Result of laying out the visible part of a buffer.

    ``rows`` holds the emitted cells of each screen row. ``cursor`` is the
    screen (row, col) of the logical cursor, or None if it was not reached.
    """
    rows: list[list[str]] = field(default_factory=lambda: [[]])
    cursor: Optional[tuple[int, int]] = None

    @property
    def lines(self) -> list[str]:
        return ["".join(cells) for cells in self.rows]


def layout(buffer: TextBuffer, cursor: Cursor, row_offset: int, rows: int, cols: int,
           decorate: Optional[Decorator] = None) -> Layout:
    """Lay out buffer lines from ``row_offset`` onto a ``rows`` x ``cols`` grid.

    Each line is visited at positions ``0..len(line)`` inclusive; the extra
    position is where a cursor after the last character is drawn. A
    character wraps to the next screen row when ``col + width >= cols``.
    Layout stops when the buffer or the screen rows run out, possibly in
    the middle of a line. No row break follows the last buffer line.
    """
    if rows <= 0:
        return Layout(rows=[])
    result = Layout()
    row = 0
    col = 0

    for i in range(row_offset, len(buffer)):
        line = buffer[i]
        cells = decorate(line) if decorate is not None else list(line)
        for j in range(len(line) + 1):
            if cursor.row == i and cursor.column == j:
                result.cursor = (row, col)
            if j == len(line):
                break
            width = char_width(line[j])
            if col + width >= cols:
                row += 1
                col = 0
                if row >= rows:
                    return result
                result.rows.append([])
            result.rows[row].append(cells[j])
            col += width

        if i + 1 == len(buffer):
            break
        row += 1
        col = 0
        if row >= rows:
            break
        result.rows.append([])

    return result


def render_frame(term, frame: Layout) -> str:
    """Compose the terminal output for one full-screen redraw.

    Clears the screen, writes rows top-down separated by CR LF, and ends
    with a cursor move when the cursor is on screen.
    """
    out = [str(term.home), str(term.clear)]
    out.append("\r\n".join(frame.lines))
    if frame.cursor is not None:
        y, x = frame.cursor
        out.append(str(term.move(y, x)))
    return "".join(out)
