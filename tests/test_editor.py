import os
import tempfile

import pytest
from unittest.mock import patch, MagicMock

from crab.editor import Editor
from crab.keyboard import KeyEvent, KeyType
from crab.model import Cursor
from crab.terminal import TerminalInterface


def make_editor():
    terminal = MagicMock(spec=TerminalInterface)
    terminal.term = MagicMock()
    terminal.size.return_value = (24, 80)
    return Editor(terminal=terminal)


def key(key_type, value):
    return KeyEvent(key_type=key_type, value=value, raw=value)


def test_typing_marks_document_modified():
    editor = make_editor()
    editor.handle_key_event(key(KeyType.REGULAR, 'a'))
    assert editor.session.buffer.lines == ["a"]
    assert editor.modified == True


def test_movement_does_not_mark_modified():
    editor = make_editor()
    editor.handle_key_event(key(KeyType.SPECIAL, 'right'))
    editor.handle_key_event(key(KeyType.SPECIAL, 'down'))
    assert editor.modified == False


def test_noop_backspace_does_not_mark_modified():
    editor = make_editor()
    editor.handle_key_event(key(KeyType.SPECIAL, 'backspace'))
    assert editor.modified == False


def test_ctrl_s_saves_and_clears_modified():
    editor = make_editor()
    with tempfile.TemporaryDirectory() as temp_dir:
        path = os.path.join(temp_dir, "doc.txt")
        editor.load_file(path)
        for value in "hi":
            editor.handle_key_event(key(KeyType.REGULAR, value))
        editor.handle_key_event(key(KeyType.SPECIAL, 'enter'))
        assert editor.modified == True

        editor.handle_key_event(key(KeyType.CTRL, 's'))

        assert editor.modified == False
        with open(path, 'r', encoding='utf-8') as f:
            assert f.read() == "hi\n\n"


def test_failed_save_keeps_modified():
    editor = make_editor()
    editor.handle_key_event(key(KeyType.REGULAR, 'x'))
    editor.handle_key_event(key(KeyType.CTRL, 's'))  # no path
    assert editor.modified == True
    assert editor.session.buffer.lines == ["x"]


def test_quit_keys_stop_editor():
    for value in ('c', 'q'):
        editor = make_editor()
        editor.running = True
        editor.handle_key_event(key(KeyType.CTRL, value))
        assert editor.running == False


def test_load_file_resets_modified():
    editor = make_editor()
    editor.handle_key_event(key(KeyType.REGULAR, 'x'))
    editor.load_file("/nonexistent/file.txt")
    assert editor.modified == False
    assert editor.session.buffer.lines == [""]
    assert editor.session.cursor == Cursor(0, 0)


def test_sigint_marker_quits_loop():
    editor = make_editor()
    os.write(editor._resize_pipe_w, b'C')
    with patch('crab.editor.termios.tcgetattr', side_effect=OSError()):
        with patch('crab.editor.select.select') as mock_select:
            mock_select.side_effect = [([editor._resize_pipe_r], [], [])]
            editor.run()

    assert editor.running == False
    editor.terminal.setup.assert_called_once_with()
    editor.terminal.cleanup.assert_called_once_with()
    assert editor.terminal.write.call_count == 1


def test_resize_triggers_redraw():
    editor = make_editor()
    quit_event = KeyEvent(key_type=KeyType.CTRL, value='q', raw='<Ctrl-q>', is_ctrl=True)
    os.write(editor._resize_pipe_w, b'R')

    with patch('crab.editor.termios.tcgetattr', side_effect=OSError()):
        with patch.object(editor.keyboard, 'get_key_event', return_value=quit_event):
            with patch.object(editor, 'draw') as mock_draw:
                with patch('crab.editor.select.select') as mock_select:
                    mock_select.side_effect = [
                        ([editor._resize_pipe_r], [], []),  # Resize pipe ready
                        ([0], [], []),  # stdin ready
                    ]
                    editor.run()

    # Initial draw plus one after the resize
    assert mock_draw.call_count == 2
    assert editor.running == False


def test_terminal_cleanup_runs_when_draw_fails():
    editor = make_editor()
    editor.terminal.write.side_effect = OSError("broken pipe")
    with patch('crab.editor.termios.tcgetattr', side_effect=OSError()):
        with pytest.raises(OSError):
            editor.run()
    editor.terminal.cleanup.assert_called_once_with()
