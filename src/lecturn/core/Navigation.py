# src/lecturn/core/Navigation.py
"""Pure cursor and viewport arithmetic.

Nothing here mutates state: every function takes positions and returns a new
one. ``y`` may legally equal ``len(document)`` (the empty virtual row past the
last line, where typing appends a new row); that bound is applied the same way
for every vertical key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .Keys import Key, KeyEvent

if TYPE_CHECKING:
    from .Document import Document
    from .Row import Row


@dataclass(frozen=True)
class Position:
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Size:
    width: int
    height: int


def _row_length(document: "Document", y: int) -> int:
    row = document.row(y)
    return len(row) if row is not None else 0


def clamp_to_document(position: Position, document: "Document") -> Position:
    """Pulls *position* back inside the document (virtual last row included)."""
    y = max(0, min(position.y, len(document)))
    x = max(0, min(position.x, _row_length(document, y)))
    return Position(x, y)


def move_cursor(
    position: Position, key: KeyEvent, document: "Document", viewport_height: int
) -> Position:
    """Returns the cursor position after pressing *key*.

    Left/Right wrap across row boundaries, vertical keys clamp to
    ``[0, len(document)]`` and ``x`` is always re-clamped to the target row.
    Keys that don't move the cursor return the (clamped) input position.
    """
    x, y = position.x, position.y
    last_y = len(document)
    width = _row_length(document, y)
    page = max(1, viewport_height)

    if key == Key.UP:
        y = max(0, y - 1)
    elif key == Key.DOWN:
        y = min(last_y, y + 1)
    elif key == Key.LEFT:
        if x > 0:
            x -= 1
        elif y > 0:
            y -= 1
            x = _row_length(document, y)
    elif key == Key.RIGHT:
        if x < width:
            x += 1
        elif y + 1 < last_y:
            y += 1
            x = 0
    elif key == Key.PAGE_UP:
        y = max(0, y - page)
    elif key == Key.PAGE_DOWN:
        y = min(last_y, y + page)
    elif key == Key.HOME:
        x = 0
    elif key == Key.END:
        x = width

    return clamp_to_document(Position(x, y), document)


def scroll(
    position: Position,
    viewport: Size,
    offset: Position,
    row: Optional["Row"] = None,
    tab_width: int = 4,
) -> Position:
    """Shifts *offset* just enough to keep *position* visible on each axis.

    Without *row* the horizontal axis counts clusters. With the cursor's row
    it counts display cells, so tabs and wide glyphs push the view further.
    """
    off_x, off_y = offset.x, offset.y

    if position.y < off_y:
        off_y = position.y
    elif viewport.height > 0 and position.y >= off_y + viewport.height:
        off_y = position.y - viewport.height + 1

    if position.x < off_x:
        off_x = position.x
    elif viewport.width > 0:
        if row is None:
            if position.x >= off_x + viewport.width:
                off_x = position.x - viewport.width + 1
        else:
            while off_x < position.x and row.cell_width(off_x, position.x, tab_width) >= viewport.width:
                off_x += 1

    return Position(off_x, off_y)
