# src/lecturn/core/Row.py
"""A single line of text addressed by grapheme cluster.

Every column the editor deals with (cursor x, search hits, highlight tags,
render bounds) is a grapheme-cluster index, never a code point or byte
offset. ``grapheme`` does the segmentation.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import grapheme
from wcwidth import wcswidth

from .Highlighting import HighlightKind


class Row:
    """Text storage for one line plus per-cluster highlight tags."""

    def __init__(self, content: str = "") -> None:
        self.content: str = content
        self.grapheme_length: int = grapheme.length(content)
        self.highlight_tags: List[HighlightKind] = [HighlightKind.NONE] * self.grapheme_length

    def __len__(self) -> int:
        return self.grapheme_length

    def __repr__(self) -> str:
        return f"Row({self.content!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Row):
            return self.content == other.content
        return NotImplemented

    def length(self) -> int:
        return self.grapheme_length

    def is_empty(self) -> bool:
        return self.grapheme_length == 0

    def as_text(self) -> str:
        return self.content

    # ── mutation ─────────────────────────────────────────────────────────────

    def _set_content(self, content: str) -> None:
        # Any text change invalidates highlight positions.
        self.content = content
        self.grapheme_length = grapheme.length(content)
        self.reset_highlighting()

    def insert(self, index: int, char: str) -> None:
        """Inserts *char* before the cluster at *index*, or appends."""
        if index >= self.grapheme_length:
            self._set_content(self.content + char)
            return

        result = []
        for i, cluster in enumerate(grapheme.graphemes(self.content)):
            if i == index:
                result.append(char)
            result.append(cluster)
        self._set_content("".join(result))

    def delete(self, index: int) -> None:
        """Removes the cluster at *index*; out-of-range indices are ignored."""
        if index < 0 or index >= self.grapheme_length:
            return
        self._set_content(
            "".join(
                cluster
                for i, cluster in enumerate(grapheme.graphemes(self.content))
                if i != index
            )
        )

    def split(self, index: int) -> "Row":
        """Truncates this row to *index* clusters and returns the remainder."""
        clusters = list(grapheme.graphemes(self.content))
        index = max(0, min(index, len(clusters)))
        remainder = Row("".join(clusters[index:]))
        remainder.highlight_tags = []
        self._set_content("".join(clusters[:index]))
        return remainder

    def append(self, other: "Row") -> None:
        self._set_content(self.content + other.content)

    # ── search ───────────────────────────────────────────────────────────────

    def find(self, query: str, after: int = 0) -> Optional[int]:
        """Grapheme index of the first match at or after *after*, or None.

        Only matches that start on a cluster boundary count, so a query can't
        hit the combining mark in the middle of a cluster.
        """
        if not query or query not in self.content:
            return None

        offset = 0
        for i, cluster in enumerate(grapheme.graphemes(self.content)):
            if i >= after and self.content.startswith(query, offset):
                return i
            offset += len(cluster)
        return None

    # ── highlighting ─────────────────────────────────────────────────────────

    def add_highlighting(self, kind: HighlightKind, index: int) -> None:
        """Tags the cluster at *index*. Out-of-range indices are ignored."""
        if 0 <= index < len(self.highlight_tags):
            self.highlight_tags[index] = kind

    def reset_highlighting(self) -> None:
        self.highlight_tags = [HighlightKind.NONE] * self.grapheme_length

    # ── rendering ────────────────────────────────────────────────────────────

    def cell_width(self, start: int, end: int, tab_width: int = 4) -> int:
        """Terminal cells taken by clusters ``[start, end)`` once rendered.

        Tabs take *tab_width* cells, wide glyphs two; anything wcwidth can't
        measure counts as one.
        """
        cells = 0
        for i, cluster in enumerate(grapheme.graphemes(self.content)):
            if i >= end:
                break
            if i < start:
                continue
            if cluster == "\t":
                cells += tab_width
            else:
                width = wcswidth(cluster)
                cells += width if width > 0 else 1
        return cells

    def render(
        self, start: int, end: int, tab_width: int = 4
    ) -> List[Tuple[str, HighlightKind]]:
        """Returns the visible clusters in ``[start, end)`` as styled runs.

        Each run is ``(text, kind)`` and covers a maximal stretch of clusters
        sharing the same highlight; a new run starts wherever the appearance
        changes. Tabs expand to *tab_width* spaces.
        """
        end = min(end, self.grapheme_length)
        start = max(0, start)
        if start >= end:
            return []

        runs: List[Tuple[str, HighlightKind]] = []
        current = HighlightKind.NONE
        buffer: List[str] = []

        for i, cluster in enumerate(grapheme.graphemes(self.content)):
            if i < start:
                continue
            if i >= end:
                break
            kind = self.highlight_tags[i] if i < len(self.highlight_tags) else HighlightKind.NONE
            if kind is not current and buffer:
                runs.append(("".join(buffer), current))
                buffer = []
            current = kind
            buffer.append(" " * tab_width if cluster == "\t" else cluster)

        if buffer:
            runs.append(("".join(buffer), current))
        return runs
