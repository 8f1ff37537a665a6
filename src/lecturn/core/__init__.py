# src/lecturn/core/__init__.py
"""Public facade for lecturn.core: re-export main classes from CamelCase modules.

Keeps one file per concept (Row.py, Document.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Commands import Command, CommandRegistry  # noqa: F401
from .Document import Document, MissingFileNameError  # noqa: F401
from .Highlighting import Highlight, HighlightKind, Palette  # noqa: F401
from .Keys import InteractionMode, Key  # noqa: F401
from .Lecturn import Lecturn, StatusMessage  # noqa: F401
from .Navigation import Position, Size, clamp_to_document, move_cursor, scroll  # noqa: F401
from .Row import Row  # noqa: F401
from .Search import JumpDirection, SearchEngine, SearchState  # noqa: F401
from .Settings import Settings  # noqa: F401


__all__ = [
    "Command",
    "CommandRegistry",
    "Document",
    "MissingFileNameError",
    "Highlight",
    "HighlightKind",
    "Palette",
    "InteractionMode",
    "Key",
    "Lecturn",
    "StatusMessage",
    "Position",
    "Size",
    "clamp_to_document",
    "move_cursor",
    "scroll",
    "Row",
    "JumpDirection",
    "SearchEngine",
    "SearchState",
    "Settings",
]
