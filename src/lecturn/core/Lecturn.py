# src/lecturn/core/Lecturn.py
"""The editor session: one document, one cursor, one viewport.

``Lecturn`` owns all mutable state and is driven by a blocking loop: draw a
frame, read one key, apply it. Every terminal effect goes through the
``terminal`` capability object (see :mod:`lecturn.ui.Terminal`), so the
session can be driven by a scripted stub in tests.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from lecturn.utils.logging_config import KEY_LOGGER

from .Commands import CommandRegistry
from .Document import Document
from .Keys import MOVEMENT_KEYS, InteractionMode, Key, KeyEvent, is_printable
from .Navigation import Position, Size, clamp_to_document, move_cursor, scroll
from .Search import JumpDirection, SearchEngine
from .Settings import Settings

logger = logging.getLogger("lecturn")

__all__ = ["Lecturn", "InteractionMode", "StatusMessage"]


@dataclass
class StatusMessage:
    text: str = ""
    created_at: float = field(default_factory=time.time)
    color: Optional[str] = None

    def is_visible(self, timeout: float, now: Optional[float] = None) -> bool:
        """True while the message is non-empty and younger than *timeout* seconds."""
        if not self.text:
            return False
        now = time.time() if now is None else now
        return now - self.created_at < timeout


class Lecturn:
    """A modal editor session.

    Args:
        terminal: Terminal capability object (``size``, ``read_key``,
            ``write``, colors, cursor shape, ...).
        config: Merged configuration dict (see ``lecturn.utils.utils``).
        file_to_open: Optional path. If it can't be read the session starts
            with an empty, unnamed document and an error status.
    """

    def __init__(
        self,
        terminal: Any,
        config: Optional[Dict[str, Any]] = None,
        file_to_open: Optional[str] = None,
    ) -> None:
        # Imported here: the ui modules depend on lecturn.core themselves.
        from lecturn.ui.DrawScreen import DrawScreen
        from lecturn.ui.KeyBinder import KeyBinder

        self.config: Dict[str, Any] = config or {}
        self.settings = Settings.from_config(self.config)
        self.terminal = terminal

        self.commands = CommandRegistry.default()
        self.keybinder = KeyBinder(self.config)
        self.search_engine = SearchEngine(self)
        self.drawer = DrawScreen(self)

        self.mode = InteractionMode.COMMAND
        self.should_quit = False
        self.just_entered = True
        self.cursor_position = Position()
        self.offset = Position()
        self.status = StatusMessage()

        self.document = Document()
        if file_to_open:
            try:
                self.document = Document.open(file_to_open)
            except OSError as e:
                logger.warning("Could not open file '%s': %s", file_to_open, e)
                self.set_error(f"ERR: Could not open file: {file_to_open}")

        self._actions: Dict[str, Callable[[], None]] = {
            "insert_mode": self.enter_insert_mode,
            "command_prompt": self.command_prompt,
            "search_forward": lambda: self.interactive_search(JumpDirection.FORWARD),
            "search_backward": lambda: self.interactive_search(JumpDirection.BACKWARD),
            "move_up": lambda: self.move_cursor(Key.UP),
            "move_down": lambda: self.move_cursor(Key.DOWN),
            "move_left": lambda: self.move_cursor(Key.LEFT),
            "move_right": lambda: self.move_cursor(Key.RIGHT),
            "screen_top": lambda: self.jump_to_screen("top"),
            "screen_middle": lambda: self.jump_to_screen("middle"),
            "screen_bottom": lambda: self.jump_to_screen("bottom"),
        }

    # ── main loop ────────────────────────────────────────────────────────────

    def run(self) -> None:
        """Draw, read a key, apply it; until a command sets ``should_quit``.

        Terminal failures propagate to the caller.
        """
        logger.info("Editor main loop started.")
        while True:
            self.refresh_screen()
            if self.should_quit:
                break
            self.process_keypress()
        logger.info("Editor main loop finished.")

    def refresh_screen(self) -> None:
        """Draws one frame, then clears every highlight tag."""
        terminal = self.terminal
        terminal.cursor_hide()
        if self.should_quit:
            self.drawer.draw_goodbye()
        else:
            self.drawer.draw()
            self.document.reset_highlighting()
            terminal.move_to(self.drawer.screen_cursor())
            if self.mode is InteractionMode.INSERT:
                terminal.cursor_bar()
            else:
                terminal.cursor_block()
            terminal.cursor_show()
        terminal.flush()

    def process_keypress(self) -> None:
        key = self.terminal.read_key()
        KEY_LOGGER.debug("key=%r mode=%s", key, self.mode.value)

        if key == Key.RESIZE:
            self.scroll()
            return
        if key in MOVEMENT_KEYS:
            self.move_cursor(key)
            return

        if self.mode is InteractionMode.INSERT:
            self._process_insert_key(key)
        else:
            self._process_command_key(key)
        self.scroll()

    def _process_command_key(self, key: KeyEvent) -> None:
        action = self.keybinder.lookup(key)
        if action is None:
            logger.debug("No action bound to %r", key)
            return
        handler = self._actions.get(action)
        if handler is None:
            logger.warning("Unknown action '%s' bound to %r", action, key)
            return
        handler()

    def _process_insert_key(self, key: KeyEvent) -> None:
        if key == Key.ESC:
            self.mode = InteractionMode.COMMAND
        elif key == Key.ENTER:
            self.document.insert(self.cursor_position, "\n")
            self.cursor_position = Position(0, self.cursor_position.y + 1)
        elif key == Key.BACKSPACE:
            if self.cursor_position.x > 0 or self.cursor_position.y > 0:
                self.move_cursor(Key.LEFT)
                self.document.delete(self.cursor_position)
        elif key == Key.DELETE:
            self.document.delete(self.cursor_position)
        elif is_printable(key):
            char = key.value if isinstance(key, Key) else key
            self.document.insert(self.cursor_position, char)
            self.move_cursor(Key.RIGHT)

    # ── cursor & viewport ────────────────────────────────────────────────────

    def viewport_size(self) -> Size:
        """Text area size: terminal size minus the line-number gutter."""
        size = self.terminal.size()
        return Size(max(1, size.width - self.drawer.gutter_width()), size.height)

    def move_cursor(self, key: KeyEvent) -> None:
        self.cursor_position = move_cursor(
            self.cursor_position, key, self.document, self.viewport_size().height
        )
        self.scroll()

    def scroll(self) -> None:
        self.offset = scroll(
            self.cursor_position,
            self.viewport_size(),
            self.offset,
            self.document.row(self.cursor_position.y),
            self.settings.tab_size,
        )

    def jump_to_screen(self, where: str) -> None:
        """Moves the cursor to the top, middle or bottom visible row."""
        height = self.viewport_size().height
        visible = max(1, min(height, len(self.document) - self.offset.y))
        if where == "top":
            y = self.offset.y
        elif where == "middle":
            y = self.offset.y + (visible - 1) // 2
        else:
            y = self.offset.y + visible - 1
        self.cursor_position = clamp_to_document(
            Position(self.cursor_position.x, y), self.document
        )

    # ── modes & prompts ──────────────────────────────────────────────────────

    def enter_insert_mode(self) -> None:
        self.mode = InteractionMode.INSERT
        self.just_entered = False

    def prompt(
        self, message: str, callback: Optional[Callable[[str], Any]] = None
    ) -> Optional[str]:
        """Reads a line on the message bar.

        Backspace edits, Enter commits, Esc aborts. *callback* runs with the
        current input after every keystroke. Returns None on abort or when
        the committed input is empty.
        """
        logger.debug("Prompt called. Message: '%s'", message)
        buffer = ""
        self.set_status(message)

        while True:
            self.refresh_screen()
            key = self.terminal.read_key()
            KEY_LOGGER.debug("prompt key=%r", key)

            if key == Key.ENTER:
                break
            if key == Key.ESC:
                self.mode = InteractionMode.COMMAND
                self.set_status("")
                return None
            if key == Key.BACKSPACE:
                buffer = buffer[:-1]
            elif is_printable(key):
                buffer += key.value if isinstance(key, Key) else key
            else:
                continue

            self.set_status(f"{message}{buffer}")
            if callback is not None:
                callback(buffer)

        self.set_status("")
        return buffer or None

    def command_prompt(self) -> None:
        line = self.prompt(":")
        if line is None:
            self.set_error("ERR: Command aborted")
            return
        self.execute_command(line)

    def execute_command(self, line: str) -> None:
        command, params, forced = self.commands.parse(line)
        if command is None:
            logger.info("Invalid command: %r", line)
            self.set_error("ERR: Invalid command")
            return
        logger.info("Running command '%s' params=%s forced=%s", command.name, params, forced)
        command.handler(self, params, forced)

    def interactive_search(self, direction: JumpDirection) -> None:
        """Live search while typing, then modal navigation of the result."""
        saved_cursor, saved_offset = self.cursor_position, self.offset
        label = "/" if direction is JumpDirection.FORWARD else "?"

        query = self.prompt(
            label, lambda text: self.search_engine.live(text, direction, label)
        )
        self.document.reset_highlighting()

        if query is None:
            self.cursor_position, self.offset = saved_cursor, saved_offset
            self.set_error("ERR: Search aborted")
            return
        self.search_engine.modal(query, direction)

    # ── file & status ────────────────────────────────────────────────────────

    def save(self) -> bool:
        """Saves the document, asking for a name first if it has none."""
        if not self.document.file_name:
            name = self.prompt("Save as: ")
            if name is None:
                self.set_status("Save aborted.")
                return False
            self.document.set_file_name(name)

        try:
            self.document.save()
        except UnicodeEncodeError as e:
            logger.error("Could not encode '%s' as %s: %s", self.document.file_name, e.encoding, e)
            self.set_error(f"ERR: text can't be saved as {e.encoding}")
            return False
        except OSError as e:
            logger.error("Could not write '%s': %s", self.document.file_name, e)
            self.set_error("ERR: could not write to file")
            return False

        self.set_status("File saved successfully")
        return True

    def set_status(self, text: str, color: Optional[str] = None) -> None:
        if text != self.status.text:
            logger.debug("Status message set to: '%s'", text)
        self.status = StatusMessage(text, color=color)

    def set_error(self, text: str) -> None:
        self.set_status(text, self.settings.error_color)
