# lecturn/ui/Terminal.py
"""Terminal.py
==================
curses implementation of the terminal capability object the editor core
talks to.

The core never touches curses directly. It asks this object for the editing
area size, for one logical key at a time, and to draw text at positions with
the current foreground/background colors. Colors are given as ``#rrggbb``
strings and mapped to the nearest xterm-256 index; curses color pairs are
allocated lazily, one per distinct (fg, bg) combination.

Always pair :meth:`enter` with :meth:`exit` (try/finally).
"""

from __future__ import annotations

import curses
import logging
from typing import Dict, Optional, Tuple

from lecturn.core.Keys import Key, KeyEvent
from lecturn.core.Navigation import Position, Size
from lecturn.ui.KeyBinder import decode_escape_sequence
from lecturn.utils.logging_config import KEY_LOGGER
from lecturn.utils.utils import hex_to_xterm

# Rows reserved below the text area: status bar and message bar.
RESERVED_ROWS = 2

CURSES_KEY_MAP: Dict[int, Key] = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_PPAGE: Key.PAGE_UP,
    curses.KEY_NPAGE: Key.PAGE_DOWN,
    curses.KEY_HOME: Key.HOME,
    curses.KEY_END: Key.END,
    curses.KEY_DC: Key.DELETE,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_RESIZE: Key.RESIZE,
}

CONTROL_CHAR_MAP: Dict[str, Key] = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\t": Key.TAB,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}

CURSOR_BAR = 1
CURSOR_BLOCK = 2


class Terminal:
    """Wraps a curses window.

    Attributes:
        stdscr (curses.window): The window everything is drawn on.
    """

    def __init__(self, stdscr: "curses.window") -> None:
        self.stdscr = stdscr
        self._entered = False
        self._cursor_shape = CURSOR_BLOCK
        self._fg: int = -1
        self._bg: int = -1
        self._pairs: Dict[Tuple[int, int], int] = {}

    # ── lifecycle ────────────────────────────────────────────────────────────

    def enter(self) -> None:
        """Puts the terminal into the editor's input mode.

        raw + noecho, keypad decoding, a short ESC delay and default colors.
        """
        try:
            curses.raw()  # deliver all control chars to us
        except curses.error:
            curses.cbreak()  # fallback if raw is unavailable
        curses.noecho()
        self.stdscr.keypad(True)

        try:
            curses.set_escdelay(35)
        except (curses.error, AttributeError) as e:
            logging.debug("set_escdelay unavailable: %r", e)

        if curses.has_colors():
            try:
                curses.start_color()
                curses.use_default_colors()
            except curses.error as e:
                logging.debug("Color setup failed: %r", e)

        self.stdscr.scrollok(False)
        self.stdscr.erase()
        self._entered = True
        logging.debug("Terminal: entered editor mode.")

    def exit(self) -> None:
        if not self._entered:
            return
        self.stdscr.keypad(False)
        try:
            curses.noraw()
        except curses.error:
            curses.nocbreak()
        curses.echo()
        self._entered = False
        logging.debug("Terminal: exited (restored terminal modes).")

    # ── capability interface ─────────────────────────────────────────────────

    def size(self) -> Size:
        """Editing area: full width, height minus the two bars."""
        height, width = self.stdscr.getmaxyx()
        return Size(width, max(0, height - RESERVED_ROWS))

    def screen_size(self) -> Size:
        height, width = self.stdscr.getmaxyx()
        return Size(width, height)

    def read_key(self) -> KeyEvent:
        """Blocks until one logical key is available.

        Unknown function keys and control characters are skipped.
        """
        while True:
            ch = self.stdscr.get_wch()
            KEY_LOGGER.debug("raw input: %r", ch)

            if isinstance(ch, int):
                key = CURSES_KEY_MAP.get(ch)
                if key is not None:
                    return key
                continue

            if ch == "\x1b":
                return self._read_escape_sequence()
            if ch in CONTROL_CHAR_MAP:
                return CONTROL_CHAR_MAP[ch]
            if ch.isprintable():
                return ch

    def _read_escape_sequence(self) -> Key:
        """Reads what follows an ESC without blocking: lone ESC or a key sequence."""
        seq = ""
        self.stdscr.nodelay(True)
        try:
            while True:
                try:
                    nx = self.stdscr.get_wch()
                except curses.error:
                    break
                seq += nx if isinstance(nx, str) else f"<{nx}>"
        finally:
            self.stdscr.nodelay(False)

        if not seq:
            return Key.ESC
        return decode_escape_sequence(seq) or Key.ESC

    def flush(self) -> None:
        self.stdscr.noutrefresh()
        curses.doupdate()

    def cursor_show(self) -> None:
        self._curs_set(self._cursor_shape)

    def cursor_hide(self) -> None:
        self._curs_set(0)

    def cursor_bar(self) -> None:
        self._cursor_shape = CURSOR_BAR

    def cursor_block(self) -> None:
        self._cursor_shape = CURSOR_BLOCK

    def set_fg_color(self, color: str) -> None:
        self._fg = self._color_index(color)

    def set_bg_color(self, color: str) -> None:
        self._bg = self._color_index(color)

    def reset_colors(self) -> None:
        self._fg = self._bg = -1

    def clear_screen(self) -> None:
        self.stdscr.erase()
        self.move_to(Position(0, 0))

    def clear_current_line(self) -> None:
        self.stdscr.clrtoeol()

    def move_to(self, position: Position) -> None:
        try:
            self.stdscr.move(position.y, position.x)
        except curses.error:
            logging.debug("move_to(%s) outside the window", position)

    def write(self, text: str) -> None:
        try:
            self.stdscr.addstr(text, self._attr())
        except curses.error:
            # Writing into the bottom-right cell moves the cursor off screen.
            logging.debug("write clipped at window edge: %r", text[:20])

    # ── helpers ──────────────────────────────────────────────────────────────

    def _curs_set(self, visibility: int) -> None:
        try:
            curses.curs_set(visibility)
        except curses.error:
            logging.debug("curs_set(%d) not supported", visibility)

    def _color_index(self, color: str) -> int:
        index = hex_to_xterm(color)
        if not curses.has_colors() or index >= curses.COLORS:
            return -1
        return index

    def _attr(self) -> int:
        if self._fg == -1 and self._bg == -1:
            return curses.A_NORMAL
        key = (self._fg, self._bg)
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return curses.A_NORMAL
            try:
                curses.init_pair(pair, self._fg, self._bg)
            except curses.error as e:
                logging.warning("init_pair failed (%s), falling back to A_REVERSE", e)
                return curses.A_REVERSE
            self._pairs[key] = pair
        return curses.color_pair(pair)
