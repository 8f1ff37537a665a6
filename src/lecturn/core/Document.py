# src/lecturn/core/Document.py
"""In-memory text buffer: an ordered, never-empty list of :class:`Row`."""

from __future__ import annotations

import logging
from typing import List, Optional

import chardet
import grapheme

from .Highlighting import HighlightKind
from .Navigation import Position
from .Row import Row


class MissingFileNameError(OSError):
    """Raised by :meth:`Document.save` when the buffer has no file name yet."""


class Document:
    """Rows of text plus file identity and a dirty flag.

    All mutation goes through :meth:`insert` and :meth:`delete`, which mark
    the document dirty. Addressing outside the document is a silent no-op,
    since cursor arithmetic may briefly propose such positions.
    """

    def __init__(
        self,
        rows: Optional[List[Row]] = None,
        file_name: Optional[str] = None,
        encoding: str = "utf-8",
    ) -> None:
        self.rows: List[Row] = rows if rows else [Row()]
        self.file_name: Optional[str] = file_name
        self.encoding: str = encoding
        self.dirty: bool = False

    @classmethod
    def from_lines(cls, lines: List[str], file_name: Optional[str] = None) -> "Document":
        return cls([Row(line) for line in lines], file_name=file_name)

    @classmethod
    def open(cls, path: str) -> "Document":
        """Reads *path* into one row per line.

        ``OSError`` (missing file, no permission, a directory) propagates to
        the caller. The decoding that worked is remembered for :meth:`save`.
        """
        with open(path, "rb") as f:
            raw = f.read()

        text, encoding = _decode(raw, path)
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        rows = [Row(line[:-1] if line.endswith("\r") else line) for line in lines]

        logging.info("Opened '%s' (%d lines, encoding %s)", path, len(rows), encoding)
        return cls(rows, file_name=path, encoding=encoding)

    def save(self) -> None:
        """Writes every row followed by ``\\n``, overwriting the file.

        Raises:
            MissingFileNameError: no file name is set.
            UnicodeEncodeError: the text can't be represented in the file's
                encoding; the file on disk is left untouched.
            OSError: the write failed.

        The document stays dirty whenever this raises.
        """
        if not self.file_name:
            raise MissingFileNameError("No file name set for this document")

        # Encode before opening: opening for write truncates the target.
        data = "".join(row.content + "\n" for row in self.rows).encode(self.encoding)
        with open(self.file_name, "wb") as f:
            f.write(data)

        self.dirty = False
        logging.info("Saved '%s' (%d lines)", self.file_name, len(self.rows))

    # ── queries ──────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.rows)

    def row(self, index: int) -> Optional[Row]:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def is_dirty(self) -> bool:
        return self.dirty

    def is_empty(self) -> bool:
        return len(self.rows) == 1 and self.rows[0].is_empty()

    def set_file_name(self, name: str) -> None:
        self.file_name = name

    def find(self, query: str) -> List[Position]:
        """Every non-overlapping occurrence of *query*, top to bottom."""
        if not query:
            return []

        step = max(1, grapheme.length(query))
        matches: List[Position] = []
        for y, row in enumerate(self.rows):
            x = row.find(query)
            while x is not None:
                matches.append(Position(x, y))
                x = row.find(query, x + step)
        return matches

    # ── mutation ─────────────────────────────────────────────────────────────

    def insert(self, position: Position, char: str) -> None:
        """Inserts *char* at *position*; ``\\n`` splits the addressed row."""
        if position.y > len(self.rows):
            return

        if char == "\n":
            if position.y == len(self.rows):
                self.rows.append(Row())
            else:
                remainder = self.rows[position.y].split(position.x)
                self.rows.insert(position.y + 1, remainder)
        elif position.y == len(self.rows):
            self.rows.append(Row(char))
        else:
            self.rows[position.y].insert(position.x, char)

        self.dirty = True

    def delete(self, position: Position) -> None:
        """Deletes the cluster at *position*, joining rows at a row's end."""
        if position.y >= len(self.rows):
            return

        row = self.rows[position.y]
        if position.x >= len(row):
            if position.y + 1 >= len(self.rows):
                return
            row.append(self.rows.pop(position.y + 1))
        else:
            row.delete(position.x)

        self.dirty = True

    # ── highlighting ─────────────────────────────────────────────────────────

    def highlight(self, matches: List[Position], length: int, selected: Optional[int] = None) -> None:
        """Tags *length* clusters at every match; *selected* gets its own kind."""
        for i, match in enumerate(matches):
            row = self.row(match.y)
            if row is None:
                continue
            kind = HighlightKind.SEARCH_SELECTED if i == selected else HighlightKind.SEARCH
            for x in range(match.x, match.x + length):
                row.add_highlighting(kind, x)

    def reset_highlighting(self) -> None:
        for row in self.rows:
            row.reset_highlighting()


def _decode(raw: bytes, path: str) -> tuple[str, str]:
    """Decodes file bytes: UTF-8, then a confident chardet guess, then latin-1."""
    if not raw:
        return "", "utf-8"

    try:
        return raw.decode("utf-8"), "utf-8"
    except UnicodeDecodeError:
        logging.debug("'%s' is not valid UTF-8, asking chardet", path)

    result = chardet.detect(raw[: 1024 * 20])
    guess = result.get("encoding")
    confidence = result.get("confidence") or 0.0
    logging.debug("chardet guessed '%s' with confidence %.2f for '%s'", guess, confidence, path)

    if guess and confidence >= 0.75:
        try:
            return raw.decode(guess), guess
        except (UnicodeDecodeError, LookupError) as e:
            logging.warning("Failed to decode '%s' as %s: %s", path, guess, e)

    return raw.decode("latin-1"), "latin-1"
