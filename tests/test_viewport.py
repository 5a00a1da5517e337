"""Tests for viewport scroll sync."""

import pytest

from crab.model import Cursor
from crab.viewport import Viewport


def test_scroll_down_keeps_cursor_on_last_visible_row():
    """Terminal of 3 rows, cursor on row 7 -> rows 5..7 are shown."""
    viewport = Viewport()
    assert viewport.scroll(Cursor(7, 0), 3) == 5
    assert 7 - viewport.row_offset == 3 - 1


def test_scroll_up_snaps_to_cursor():
    viewport = Viewport(row_offset=8)
    viewport.scroll(Cursor(2, 0), 3)
    assert viewport.row_offset == 2


def test_no_scroll_when_cursor_inside_window():
    viewport = Viewport(row_offset=4)
    viewport.scroll(Cursor(5, 0), 3)
    assert viewport.row_offset == 4


def test_top_of_document_stays_at_zero():
    viewport = Viewport()
    viewport.scroll(Cursor(0, 0), 24)
    assert viewport.row_offset == 0


def test_cursor_on_last_row_of_first_screen():
    viewport = Viewport()
    viewport.scroll(Cursor(23, 0), 24)
    assert viewport.row_offset == 0
    viewport.scroll(Cursor(24, 0), 24)
    assert viewport.row_offset == 1


def test_shrinking_terminal_pulls_window_down():
    viewport = Viewport(row_offset=0)
    viewport.scroll(Cursor(10, 0), 24)
    assert viewport.row_offset == 0
    viewport.scroll(Cursor(10, 0), 4)
    assert viewport.row_offset == 7


@pytest.mark.parametrize("row,offset,visible", [
    (0, 0, 1), (7, 0, 3), (2, 9, 3), (50, 10, 24), (5, 5, 1), (3, 1, 10),
])
def test_scroll_is_idempotent_and_keeps_cursor_visible(row, offset, visible):
    viewport = Viewport(row_offset=offset)
    first = viewport.scroll(Cursor(row, 0), visible)
    second = viewport.scroll(Cursor(row, 0), visible)
    assert first == second
    assert viewport.row_offset <= row < viewport.row_offset + visible


def test_zero_rows_treated_as_one():
    viewport = Viewport()
    viewport.scroll(Cursor(4, 0), 0)
    assert viewport.row_offset == 4
