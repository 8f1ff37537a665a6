# src/lecturn/core/Highlighting.py
"""Highlight kinds and their presentation attributes.

A highlight is the only styling the editor applies to buffer text: search
matches and the currently selected search match. Everything else is drawn
with the ``NONE`` pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class HighlightKind(Enum):
    """Closed set of highlight states a grapheme cluster can carry."""

    NONE = "none"
    SEARCH = "search"
    SEARCH_SELECTED = "search_selected"


@dataclass(frozen=True)
class Highlight:
    """Foreground/background pair as ``#rrggbb`` strings."""

    fg: str
    bg: str


@dataclass(frozen=True)
class Palette:
    """Maps every :class:`HighlightKind` to a :class:`Highlight`."""

    none: Highlight = field(default_factory=lambda: Highlight("#ffffff", "#000000"))
    search: Highlight = field(default_factory=lambda: Highlight("#000000", "#f9f1a5"))
    search_selected: Highlight = field(
        default_factory=lambda: Highlight("#000000", "#ffffff")
    )

    def to_highlight(self, kind: HighlightKind) -> Highlight:
        if kind is HighlightKind.SEARCH:
            return self.search
        if kind is HighlightKind.SEARCH_SELECTED:
            return self.search_selected
        return self.none

    @classmethod
    def from_colors(cls, colors: Dict[str, Any]) -> "Palette":
        """Builds a palette from the ``[colors]`` config section.

        Missing keys fall back to the built-in pairs.
        """
        default = cls()
        return cls(
            none=Highlight(
                colors.get("default_fg", default.none.fg),
                colors.get("default_bg", default.none.bg),
            ),
            search=Highlight(
                colors.get("search_fg", default.search.fg),
                colors.get("search_bg", default.search.bg),
            ),
            search_selected=Highlight(
                colors.get("search_selected_fg", default.search_selected.fg),
                colors.get("search_selected_bg", default.search_selected.bg),
            ),
        )
