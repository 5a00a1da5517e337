"""Crab - a small terminal text editor."""

from .model import TextBuffer, Cursor
from .viewport import Viewport
from .session import Session
from .engine import EditEngine
from .view import Layout, layout, render_frame, char_width

__all__ = [
    'TextBuffer',
    'Cursor',
    'Viewport',
    'Session',
    'EditEngine',
    'Layout',
    'layout',
    'render_frame',
    'char_width',
]
