# src/lecturn/core/Search.py
"""Search-with-highlight.

Two entry points share the same match computation and viewport placement:

* :meth:`SearchEngine.live` runs once per keystroke while a query is being
  typed. It jumps to the first (forward) or last (backward) match, highlights
  everything and returns at once.
* :meth:`SearchEngine.modal` runs after a query is committed. It blocks on
  the terminal, stepping through matches with ``n`` (previous) and ``N``
  (next) until Enter or Esc.

Placement: the first jump into a match set, and every jump after ``N``,
pushes the offset half a viewport down from where the match would sit on
the bottom edge. A jump after ``n`` pushes it half a viewport up from where
the match would sit on the top edge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

import grapheme

from .Keys import InteractionMode, Key
from .Navigation import Position, scroll

if TYPE_CHECKING:
    from .Lecturn import Lecturn


class JumpDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass
class SearchState:
    """Matches of one query and the cursor into them.

    Stepping saturates at both ends; the index never leaves
    ``[0, len(matches) - 1]``.
    """

    matches: List[Position]
    index: int = 0
    direction: JumpDirection = JumpDirection.FORWARD
    first_jump: bool = field(default=True)

    @classmethod
    def start(cls, matches: List[Position], direction: JumpDirection) -> "SearchState":
        index = 0 if direction is JumpDirection.FORWARD else len(matches) - 1
        return cls(matches, index=index, direction=direction)

    @property
    def current(self) -> Position:
        return self.matches[self.index]

    def step_forward(self) -> None:
        self.index = min(self.index + 1, len(self.matches) - 1)
        self.direction = JumpDirection.FORWARD

    def step_backward(self) -> None:
        self.index = max(self.index - 1, 0)
        self.direction = JumpDirection.BACKWARD

    def placement(self) -> JumpDirection:
        return JumpDirection.FORWARD if self.first_jump else self.direction


class SearchEngine:
    def __init__(self, editor: "Lecturn") -> None:
        self.editor = editor
        self.state: Optional[SearchState] = None

    # ── entry points ─────────────────────────────────────────────────────────

    def live(self, query: str, direction: JumpDirection, prompt: str = "") -> Optional[SearchState]:
        """Single pass for the query typed so far."""
        document = self.editor.document
        document.reset_highlighting()

        matches = document.find(query)
        if not matches:
            self.state = None
            self.editor.set_status(f"{prompt}{query} (no results)")
            return None

        self.state = SearchState.start(matches, direction)
        self._jump(self.state)
        self._highlight(self.state, query)
        return self.state

    def modal(self, query: str, direction: JumpDirection) -> None:
        """Blocks, stepping through matches until Enter or Esc."""
        editor = self.editor
        matches = editor.document.find(query)
        if not matches:
            editor.set_error(f"ERR: No results for '{query}'")
            return

        logging.info("Search for %r: %d matches", query, len(matches))
        state = self.state = SearchState.start(matches, direction)
        previous_mode = editor.mode
        editor.mode = InteractionMode.SEARCH

        while True:
            self._jump(state)
            self._highlight(state, query)
            editor.set_status(f"Match {state.index + 1}/{len(matches)}")
            editor.refresh_screen()
            editor.document.reset_highlighting()

            key = editor.terminal.read_key()
            if key == "n":
                state.step_backward()
            elif key == "N":
                state.step_forward()
            elif key in (Key.ENTER, Key.ESC):
                break

        editor.mode = previous_mode
        editor.set_status("")

    # ── helpers ──────────────────────────────────────────────────────────────

    def _jump(self, state: SearchState) -> None:
        editor = self.editor
        match = state.current
        size = editor.viewport_size()
        height = max(1, size.height)

        # Start from the match on the bottom edge (forward) or the top edge
        # (backward), then push the offset half a viewport down or up.
        if state.placement() is JumpDirection.FORWARD:
            off_y = match.y - (height - 1) + height // 2
        else:
            off_y = match.y - height // 2
        off_y = max(0, min(off_y, len(editor.document)))

        editor.cursor_position = match
        row = editor.document.row(match.y)
        off_x = scroll(
            match, size, Position(editor.offset.x, off_y), row, editor.settings.tab_size
        ).x
        editor.offset = Position(off_x, off_y)
        state.first_jump = False

    def _highlight(self, state: SearchState, query: str) -> None:
        self.editor.document.highlight(state.matches, grapheme.length(query), selected=state.index)
