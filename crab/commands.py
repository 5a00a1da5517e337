"""Command pattern implementation for editor actions."""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command

        Returns:
            True if the command modified the document
        """


class MovementCommand(EditorCommand):
    """Base class for cursor movement commands."""

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        self._move(editor)
        return False

    @abstractmethod
    def _move(self, editor: 'Editor'):
        """Perform the movement."""


class UpLineCommand(MovementCommand):
    def _move(self, editor):
        editor.engine.cursor_up()


class DownLineCommand(MovementCommand):
    def _move(self, editor):
        editor.engine.cursor_down()


class LeftCharCommand(MovementCommand):
    def _move(self, editor):
        editor.engine.cursor_left()


class RightCharCommand(MovementCommand):
    def _move(self, editor):
        editor.engine.cursor_right()


class BackspaceCommand(EditorCommand):
    def execute(self, editor, key_event):
        return editor.engine.backspace()


class InsertNewlineCommand(EditorCommand):
    def execute(self, editor, key_event):
        return editor.engine.insert('\n')


class InsertTextCommand(EditorCommand):
    def execute(self, editor, key_event):
        # Pastes carry many characters; newlines among them split lines
        changed = False
        for ch in key_event.value:
            changed = editor.engine.insert(ch) or changed
        return changed


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.save()
        return False


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.running = False
        return False


class CommandRegistry:
    """Maps key events to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._insert_text = InsertTextCommand()

        self.register((KeyType.SPECIAL, 'up'), UpLineCommand())
        self.register((KeyType.SPECIAL, 'down'), DownLineCommand())
        self.register((KeyType.SPECIAL, 'left'), LeftCharCommand())
        self.register((KeyType.SPECIAL, 'right'), RightCharCommand())

        self.register((KeyType.SPECIAL, 'backspace'), BackspaceCommand())
        self.register((KeyType.SPECIAL, 'enter'), InsertNewlineCommand())

        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'c'), QuitCommand())
        self.register((KeyType.CTRL, 'q'), QuitCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        self._commands[key] = command

    def get_command(self, key_event: 'KeyEvent') -> Optional[EditorCommand]:
        if key_event.key_type in (KeyType.REGULAR, KeyType.PASTE):
            return self._insert_text
        return self._commands.get((key_event.key_type, key_event.value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Run the command bound to ``key_event``.

        Returns:
            True if the document was modified. Unbound keys do nothing.
        """
        command = self.get_command(key_event)
        if command is None:
            return False
        return command.execute(editor, key_event)
