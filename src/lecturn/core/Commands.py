# src/lecturn/core/Commands.py
"""Command-line dispatch for the ``:`` prompt.

A :class:`CommandRegistry` is an ordered, immutable tuple of
:class:`Command` entries. Resolution scans all of them and the **last**
matching entry wins, so a later, more specific pattern shadows an earlier
catch-all (``/q`` is a search, not a quit).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Iterator, List, Optional, Tuple

from .Search import JumpDirection

if TYPE_CHECKING:
    from .Lecturn import Lecturn

CommandHandler = Callable[["Lecturn", List[str], bool], None]

FORCE_MARKER = "!"


@dataclass(frozen=True)
class Command:
    matcher: "re.Pattern[str]"
    name: str
    description: str
    handler: CommandHandler
    forceable: bool = True

    def matches(self, command_line: str) -> bool:
        return self.matcher.search(command_line) is not None


# ── stock handlers ───────────────────────────────────────────────────────────


def exit_editor(editor: "Lecturn", params: List[str], forced: bool) -> None:
    if editor.document.is_dirty() and not forced:
        editor.set_error("There are unsaved changes. Run :q! to force quit")
        return
    editor.should_quit = True


def save_document(editor: "Lecturn", params: List[str], forced: bool) -> None:
    if params:
        editor.document.set_file_name(params[0])
    editor.save()


def save_and_exit(editor: "Lecturn", params: List[str], forced: bool) -> None:
    if editor.save():
        editor.should_quit = True


def search_forward(editor: "Lecturn", params: List[str], forced: bool) -> None:
    editor.search_engine.modal(" ".join(params), JumpDirection.FORWARD)


def search_backward(editor: "Lecturn", params: List[str], forced: bool) -> None:
    editor.search_engine.modal(" ".join(params), JumpDirection.BACKWARD)


STOCK_COMMANDS: Tuple[Command, ...] = (
    Command(re.compile(r"\bq\b"), "exit", "Quit, :q! discards unsaved changes", exit_editor),
    Command(re.compile(r"\bw\b"), "save", "Save, :w <file> saves under a new name", save_document),
    Command(re.compile(r"\bwq\b"), "save exit", "Save and quit", save_and_exit),
    Command(
        re.compile(r"^/"), "search", "Search forward, n/N step through matches", search_forward,
        forceable=False,
    ),
    Command(
        re.compile(r"^\?"), "reverse search", "Search backward", search_backward,
        forceable=False,
    ),
)


class CommandRegistry:
    """Ordered, immutable collection of commands built once at start-up."""

    def __init__(self, commands: Iterable[Command]) -> None:
        self._commands: Tuple[Command, ...] = tuple(commands)

    @classmethod
    def default(cls) -> "CommandRegistry":
        return cls(STOCK_COMMANDS)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def resolve(self, command_line: str) -> Optional[Command]:
        """The last registered command whose pattern matches, or None."""
        found = None
        for command in self._commands:
            if command.matches(command_line):
                found = command
        return found

    def parse(self, raw: str) -> Tuple[Optional[Command], List[str], bool]:
        """Splits a typed line into ``(command, params, forced)``.

        A trailing ``!`` sets *forced* and is dropped before resolution, unless
        the command it resolves to is not forceable: a search keeps the ``!``
        as part of its query. Params are the words left after removing the
        first match of the command's pattern.
        """
        line = raw.strip()
        forced = line.endswith(FORCE_MARKER)
        if forced:
            stripped = line[: -len(FORCE_MARKER)].rstrip()
            command = self.resolve(stripped)
            if command is None or command.forceable:
                line = stripped
            else:
                forced = False
                command = self.resolve(line)
        else:
            command = self.resolve(line)

        if command is None:
            logging.debug("No command matches %r", raw)
            return None, [], forced

        params = command.matcher.sub("", line, count=1).split()
        return command, params, forced
