# tests/conftest.py
"""Pytest configuration with shared fixtures for the Lecturn editor tests.

The editor core never touches curses, so most tests drive a real
``Lecturn`` session through ``StubTerminal`` (see ``tests/stubs.py``) with a
scripted list of keys.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Optional

import pytest

from lecturn.core.Document import Document
from lecturn.core.Keys import KeyEvent
from lecturn.core.Lecturn import Lecturn
from lecturn.utils.utils import DEFAULT_CONFIG
from stubs import StubTerminal


@pytest.fixture
def config() -> dict[str, Any]:
    """A private copy of the embedded default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def make_terminal() -> Callable[..., StubTerminal]:
    """Factory for scripted terminals."""

    def _make(keys: Iterable[KeyEvent] = (), width: int = 80, height: int = 24) -> StubTerminal:
        return StubTerminal(keys, width=width, height=height)

    return _make


@pytest.fixture
def make_editor(config: dict[str, Any]) -> Callable[..., Lecturn]:
    """Factory for editor sessions on a stub terminal.

    Args (of the returned callable):
        lines: Initial rows; an empty document when omitted.
        keys: Scripted key events for the terminal.
        file_to_open: Passed through to ``Lecturn``.
        width, height: Terminal size in cells.
    """

    def _make(
        lines: Optional[list[str]] = None,
        keys: Iterable[KeyEvent] = (),
        file_to_open: Optional[str] = None,
        width: int = 80,
        height: int = 24,
    ) -> Lecturn:
        terminal = StubTerminal(keys, width=width, height=height)
        editor = Lecturn(terminal, config=config, file_to_open=file_to_open)
        if lines is not None:
            editor.document = Document.from_lines(lines)
        return editor

    return _make


@pytest.fixture
def hello_world() -> Document:
    return Document.from_lines(["hello", "world"])
