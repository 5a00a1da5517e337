"""Tests for loading files into the buffer."""

import os
import tempfile

import pytest

from crab.engine import EditEngine
from crab.model import Cursor, TextBuffer


@pytest.fixture
def temp_file():
    paths = []

    def make(data: bytes) -> str:
        with tempfile.NamedTemporaryFile(suffix='.txt', delete=False) as f:
            f.write(data)
            paths.append(f.name)
        return f.name

    yield make
    for path in paths:
        if os.path.exists(path):
            os.remove(path)


def test_load_splits_lines(temp_file):
    path = temp_file(b"Line 1\nLine 2\nLine 3")
    assert TextBuffer.load(path).lines == ["Line 1", "Line 2", "Line 3"]


def test_load_strips_trailing_whitespace_and_crlf(temp_file):
    path = temp_file(b"a  \r\nb\t\r\n  c\n")
    assert TextBuffer.load(path).lines == ["a", "b", "  c"]


def test_load_splits_only_on_newline(temp_file):
    """Lone carriage returns and Unicode separators stay inside a line."""
    path = temp_file("a\rb\nx\u2028y\u0085z\x0cw\n".encode('utf-8'))
    assert TextBuffer.load(path).lines == ["a\rb", "x\u2028y\u0085z\x0cw"]


def test_load_keeps_trailing_whitespace_when_disabled(temp_file):
    path = temp_file(b"a  \nb\n")
    assert TextBuffer.load(path, strip_trailing_whitespace=False).lines == ["a  ", "b"]


def test_load_empty_file_gives_single_empty_line(temp_file):
    path = temp_file(b"")
    assert TextBuffer.load(path).lines == [""]


def test_load_missing_file_gives_single_empty_line():
    assert TextBuffer.load("/nonexistent/dir/file.txt").lines == [""]


def test_load_invalid_utf8_gives_single_empty_line(temp_file):
    path = temp_file(b"ok\n\xff\xfe\xfa\n")
    assert TextBuffer.load(path).lines == [""]


def test_load_directory_gives_single_empty_line():
    temp_dir = tempfile.mkdtemp()
    try:
        assert TextBuffer.load(temp_dir).lines == [""]
    finally:
        os.rmdir(temp_dir)


def test_open_resets_cursor_and_viewport(temp_file):
    path = temp_file(b"one\ntwo\nthree\n")
    engine = EditEngine()
    engine.session.cursor = Cursor(0, 0)
    engine.insert('\n')
    engine.insert('\n')
    engine.session.viewport.row_offset = 2

    engine.open(path)

    assert engine.session.path == path
    assert engine.buffer.lines == ["one", "two", "three"]
    assert engine.cursor == Cursor(0, 0)
    assert engine.session.viewport.row_offset == 0


def test_open_missing_path_binds_session():
    """A path that does not exist yet can still be edited and saved later."""
    temp_dir = tempfile.mkdtemp()
    path = os.path.join(temp_dir, "new.txt")
    try:
        engine = EditEngine()
        engine.open(path)
        assert engine.session.path == path
        assert engine.buffer.lines == [""]

        engine.insert('h')
        engine.insert('i')
        assert engine.save()
        with open(path, 'r', encoding='utf-8') as f:
            assert f.read() == "hi\n"
    finally:
        if os.path.exists(path):
            os.remove(path)
        os.rmdir(temp_dir)


def test_buffer_never_empty():
    assert TextBuffer([]).lines == [""]
    assert TextBuffer(None).lines == [""]
    assert len(TextBuffer.from_text("")) == 1
