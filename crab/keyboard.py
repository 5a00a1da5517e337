"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum

from curtsies.events import PasteEvent


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    CTRL = "ctrl"
    SPECIAL = "special"
    PASTE = "paste"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The key (e.g., 'a', 'left', 's'), or the text of a paste
    raw: str  # The key string as delivered by curtsies
    is_ctrl: bool = False


SPECIAL_KEYS = {'left', 'right', 'up', 'down', 'enter', 'backspace'}


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name or paste into a KeyEvent.

        Handles names like ``'<LEFT>'`` and ``'<Ctrl-s>'`` as well as bare
        characters, including raw ASCII control bytes. Names crab has no
        binding for come back as SPECIAL events with the lowercased name.
        """
        if isinstance(key, PasteEvent):
            return self._parse_paste(key)

        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_named(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if o in (0x08, 0x7f):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                # Ctrl-J/Ctrl-M are what terminals send for Enter
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_named(self, key_str: str) -> KeyEvent:
        parts = key_str[1:-1].lower().split('-')
        base = parts[-1]
        mods = set(parts[:-1])

        if not mods:
            if base == 'space':
                return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
            if base == 'tab':
                return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
            if base in SPECIAL_KEYS:
                return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
        if mods == {'ctrl'} and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
        return KeyEvent(key_type=KeyType.SPECIAL, value=key_str[1:-1].lower(), raw=key_str)

    def _parse_paste(self, paste: PasteEvent) -> KeyEvent:
        """Collapse a paste into its text; Enter keys become newlines."""
        chars = []
        for name in paste.events:
            event = self.parse_key(name)
            if event.key_type == KeyType.REGULAR:
                chars.append(event.value)
            elif event.key_type == KeyType.SPECIAL and event.value == 'enter':
                chars.append('\n')
        return KeyEvent(key_type=KeyType.PASTE, value=''.join(chars), raw=repr(paste))
