# tests/ui/test_draw_screen.py
"""Unit and integration tests for the `DrawScreen` UI renderer.
=================================================================

This module validates the width helpers and the frame layout drawn through
the terminal capability object:

- Line number gutter and ``~`` filler rows.
- Welcome banner on an empty, untouched document.
- Status bar composition (name, dirty marker, line/column).
- Message bar (insert indicator, status timeout).
- Highlight colors on search matches.

The editor runs on `StubTerminal`, which records every write together with
the active colors, so no real terminal is needed.
"""

import time

import pytest

from lecturn.core.Keys import InteractionMode, Key
from lecturn.core.Lecturn import StatusMessage
from lecturn.core.Navigation import Position


# --- Helpers -------------------------------------------------------------------
def test_truncate_string_respects_wide_glyphs(make_editor) -> None:
    drawer = make_editor().drawer
    assert drawer.truncate_string("hello", 3) == "hel"
    assert drawer.truncate_string("日本語", 3) == "日"
    assert drawer.truncate_string("日本語", 4) == "日本"
    assert drawer.truncate_string("abc", 0) == ""


def test_get_string_width(make_editor) -> None:
    drawer = make_editor().drawer
    assert drawer.get_string_width("abc") == 3
    assert drawer.get_string_width("日本") == 4


@pytest.mark.parametrize(
    "lines, count",
    [(["x"], 2), ([str(i) for i in range(10)], 3), ([str(i) for i in range(100)], 4)],
)
def test_gutter_width_tracks_line_count(make_editor, lines, count) -> None:
    assert make_editor(lines).drawer.gutter_width() == count


def test_screen_cursor_accounts_for_tabs_and_wide_glyphs(make_editor) -> None:
    editor = make_editor(["\tab", "日本"])

    editor.cursor_position = Position(1, 0)
    assert editor.drawer.screen_cursor() == Position(2 + 4, 0)

    editor.cursor_position = Position(1, 1)
    assert editor.drawer.screen_cursor() == Position(2 + 2, 1)


def test_screen_cursor_is_relative_to_offset(make_editor) -> None:
    editor = make_editor(["abcdef"] * 30)
    editor.cursor_position = Position(5, 25)
    editor.offset = Position(2, 20)
    assert editor.drawer.screen_cursor() == Position(3 + 3, 5)


def test_end_on_tabbed_row_keeps_cursor_on_screen(make_editor) -> None:
    editor = make_editor(["\t\t\tabc"], keys=[Key.END], width=12)  # 10 text cells
    editor.process_keypress()

    assert editor.cursor_position == Position(6, 0)
    assert editor.offset == Position(2, 0)
    assert editor.drawer.screen_cursor() == Position(2 + 7, 0)


# --- Frame ---------------------------------------------------------------------
def test_rows_gutter_and_filler(make_editor) -> None:
    editor = make_editor(["hello", "world"])
    editor.drawer.draw()
    term = editor.terminal

    assert term.line(0) == "1 hello"
    assert term.line(1) == "2 world"
    assert term.line(2) == "~"
    assert term.line(21) == "~"


def test_gutter_uses_line_number_color(make_editor) -> None:
    editor = make_editor(["hello"])
    editor.drawer.draw()
    gutter_writes = [w for w in editor.terminal.writes if w[1] == "1 "]
    assert gutter_writes[0][2] == editor.settings.line_number_fg


def test_horizontal_offset_hides_left_columns(make_editor) -> None:
    editor = make_editor(["abcdef"])
    editor.offset = Position(2, 0)
    editor.drawer.draw()
    assert editor.terminal.line(0) == "1 cdef"


def test_welcome_banner_on_fresh_empty_document(make_editor) -> None:
    editor = make_editor()
    editor.drawer.draw()
    banner_row = editor.terminal.size().height // 3

    assert f"Lecturn v{editor.settings.version}" in editor.terminal.line(banner_row)
    assert editor.terminal.line(banner_row).startswith("~")


def test_welcome_banner_gone_after_insert_mode(make_editor) -> None:
    editor = make_editor()
    editor.enter_insert_mode()
    editor.drawer.draw()
    assert "Lecturn" not in editor.terminal.text()


def test_status_bar(make_editor) -> None:
    editor = make_editor(["hello"])
    editor.document.insert(Position(0, 0), "x")
    editor.drawer.draw()
    bar = editor.terminal.line(22)

    assert bar.startswith("[No Name] [+]")
    assert bar.endswith("1,1")
    assert len(bar) == 80


def test_status_bar_shows_file_name_and_position(make_editor) -> None:
    editor = make_editor(["a", "bcd"])
    editor.document.set_file_name("notes.txt")
    editor.cursor_position = Position(2, 1)
    editor.drawer.draw()
    bar = editor.terminal.line(22)

    assert bar.startswith("notes.txt")
    assert "[+]" not in bar
    assert bar.endswith("2,3")


def test_message_bar_insert_indicator(make_editor) -> None:
    editor = make_editor(["x"])
    editor.mode = InteractionMode.INSERT
    editor.drawer.draw()
    assert editor.terminal.line(23) == "-- INSERT --"


def test_message_bar_status_and_timeout(make_editor) -> None:
    editor = make_editor(["x"])
    editor.set_error("ERR: boom")
    editor.drawer.draw()
    assert editor.terminal.line(23) == "ERR: boom"
    assert any(w[1] == "ERR: boom" and w[2] == editor.settings.error_color for w in editor.terminal.writes)

    editor.status = StatusMessage("stale", created_at=time.time() - 100)
    editor.drawer.draw()
    assert editor.terminal.line(23) == ""


def test_search_highlight_colors(make_editor) -> None:
    editor = make_editor(["hello"])
    editor.document.highlight([Position(4, 0)], 1)
    editor.drawer.draw()

    palette = editor.settings.palette
    match_writes = [w for w in editor.terminal.writes if w[1] == "o"]
    assert match_writes
    _, _, fg, bg = match_writes[0]
    assert (fg, bg) == (palette.search.fg, palette.search.bg)
    assert editor.terminal.line(0) == "1 hello"


def test_goodbye_clears_screen(make_editor) -> None:
    editor = make_editor(["hello"])
    editor.drawer.draw()
    editor.drawer.draw_goodbye()
    assert editor.terminal.text().strip() == "Goodbye."
