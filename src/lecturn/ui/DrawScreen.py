# lecturn/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen renders one frame of the Lecturn editor through the terminal
capability object:

- the line-number gutter,
- the visible slice of every row, styled by its highlight runs,
- the welcome banner on an empty, untouched document,
- the status bar (file name, dirty marker, cursor line/column),
- the message bar (insert-mode indicator or the current status message).

Display widths come from :pyfunc:`wcwidth.wcwidth`, so wide glyphs (CJK,
emoji) take two cells; columns in the buffer stay grapheme indices.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from wcwidth import wcswidth, wcwidth

from lecturn.core.Highlighting import HighlightKind
from lecturn.core.Keys import InteractionMode
from lecturn.core.Navigation import Position

if TYPE_CHECKING:
    from lecturn.core.Lecturn import Lecturn


## ================= class DrawScreen ==============================
class DrawScreen:
    """Draws the editor screen.

    Attributes:
        editor (Lecturn): The session being displayed.
        settings (Settings): Colors, tab size and message timeout.
    """

    MAX_FILE_NAME = 20

    def __init__(self, editor: "Lecturn") -> None:
        self.editor = editor
        self.settings = editor.settings

    # ── width helpers ────────────────────────────────────────────────────────

    def get_string_width(self, text: str) -> int:
        """Display width of *text*; non-printable characters count as one cell."""
        width = wcswidth(text)
        if width >= 0:
            return width
        return sum(max(wcwidth(ch), 1) for ch in text)

    def truncate_string(self, s: str, max_width: int) -> str:
        """Return `s` clipped to visual width `max_width`."""
        result: list[str] = []
        consumed = 0

        for ch in s:
            w = wcwidth(ch)
            if w < 0:  # Non-printable → treat as single-cell
                w = 1
            if consumed + w > max_width:
                break
            result.append(ch)
            consumed += w

        return "".join(result)

    def gutter_width(self) -> int:
        """Digits of the highest line number plus one separating space."""
        return len(str(max(1, len(self.editor.document)))) + 1

    def screen_cursor(self) -> Position:
        """Screen cell of the editing cursor."""
        editor = self.editor
        cursor, offset = editor.cursor_position, editor.offset
        row = editor.document.row(cursor.y)

        cells = 0 if row is None else row.cell_width(offset.x, cursor.x, self.settings.tab_size)

        return Position(self.gutter_width() + cells, cursor.y - offset.y)

    # ── frame ────────────────────────────────────────────────────────────────

    def draw(self) -> None:
        """The main screen drawing method."""
        terminal = self.editor.terminal
        size = terminal.size()

        for screen_row in range(size.height):
            terminal.move_to(Position(0, screen_row))
            terminal.clear_current_line()
            self._draw_row(screen_row, size.width)

        self._draw_status_bar(size.height, size.width)
        self._draw_message_bar(size.height + 1, size.width)

    def draw_goodbye(self) -> None:
        terminal = self.editor.terminal
        terminal.reset_colors()
        terminal.clear_screen()
        terminal.write("Goodbye.")
        logging.debug("Goodbye drawn")

    def _draw_row(self, screen_row: int, width: int) -> None:
        editor = self.editor
        terminal = editor.terminal
        document = editor.document
        gutter = self.gutter_width()
        text_width = max(0, width - gutter)
        doc_y = editor.offset.y + screen_row

        if doc_y >= len(document):
            terminal.reset_colors()
            if document.is_empty() and editor.just_entered and screen_row == terminal.size().height // 3:
                self._draw_welcome(width)
            else:
                terminal.write("~")
            return

        terminal.set_fg_color(self.settings.line_number_fg)
        terminal.write(f"{doc_y + 1:>{gutter - 1}} ")
        terminal.reset_colors()

        row = document.row(doc_y)
        remaining = text_width
        start = editor.offset.x
        for text, kind in row.render(start, start + text_width, self.settings.tab_size):
            if remaining <= 0:
                break
            text = self.truncate_string(text, remaining)
            remaining -= self.get_string_width(text)
            if kind is HighlightKind.NONE:
                terminal.reset_colors()
            else:
                highlight = self.settings.palette.to_highlight(kind)
                terminal.set_fg_color(highlight.fg)
                terminal.set_bg_color(highlight.bg)
            terminal.write(text)
        terminal.reset_colors()

    def _draw_welcome(self, width: int) -> None:
        message = self.truncate_string(f"Lecturn v{self.settings.version}", max(0, width - 1))
        padding = max(0, (width - self.get_string_width(message)) // 2)
        line = "~" + " " * max(0, padding - 1) + message
        self.editor.terminal.write(self.truncate_string(line, width))

    def _draw_status_bar(self, y: int, width: int) -> None:
        """Inverse bar: ``name [+]`` on the left, ``line,col`` on the right."""
        editor = self.editor
        terminal = editor.terminal
        document = editor.document

        name = (document.file_name or "[No Name]")[: self.MAX_FILE_NAME]
        left = f"{name}{' [+]' if document.is_dirty() else ''}"
        right = f"{editor.cursor_position.y + 1},{editor.cursor_position.x + 1}"

        spacing = max(1, width - self.get_string_width(left) - self.get_string_width(right))
        line = self.truncate_string(left + " " * spacing + right, width)
        line += " " * max(0, width - self.get_string_width(line))

        terminal.move_to(Position(0, y))
        terminal.clear_current_line()
        terminal.set_fg_color(self.settings.status_fg)
        terminal.set_bg_color(self.settings.status_bg)
        terminal.write(line)
        terminal.reset_colors()

    def _draw_message_bar(self, y: int, width: int) -> None:
        editor = self.editor
        terminal = editor.terminal
        terminal.move_to(Position(0, y))
        terminal.clear_current_line()

        status = editor.status
        if editor.mode is InteractionMode.INSERT:
            text, color = "-- INSERT --", self.settings.message_fg
        elif status.is_visible(self.settings.status_timeout, time.time()):
            text, color = status.text, status.color or self.settings.message_fg
        else:
            return

        terminal.set_fg_color(color)
        terminal.write(self.truncate_string(text, max(0, width - 1)))
        terminal.reset_colors()
