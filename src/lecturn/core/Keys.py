# src/lecturn/core/Keys.py
"""Logical key names delivered by the terminal layer.

Printable input arrives as a one-character ``str``; everything else is one of
the :class:`Key` members below. Because ``Key`` subclasses ``str``,
``Key.ENTER == "\\n"`` holds and both kinds can be compared uniformly.
"""

from enum import Enum
from typing import Union


class Key(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    DELETE = "delete"
    BACKSPACE = "backspace"
    ESC = "esc"
    ENTER = "\n"
    TAB = "\t"
    RESIZE = "resize"


KeyEvent = Union[Key, str]

MOVEMENT_KEYS = frozenset(
    {
        Key.UP,
        Key.DOWN,
        Key.LEFT,
        Key.RIGHT,
        Key.PAGE_UP,
        Key.PAGE_DOWN,
        Key.HOME,
        Key.END,
    }
)


def is_printable(key: KeyEvent) -> bool:
    """True for plain text input (a single printable character or a tab)."""
    if isinstance(key, Key):
        return key is Key.TAB
    return len(key) == 1 and (key.isprintable() or key == "\t")


class InteractionMode(Enum):
    """What the editor does with the next key."""

    COMMAND = "command"
    INSERT = "insert"
    SEARCH = "search"
