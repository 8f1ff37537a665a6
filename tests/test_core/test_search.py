# tests/test_core/test_search.py
"""Tests for `lecturn.core.Search`.

Live search (single pass per keystroke), modal search (blocking n/N loop),
saturating navigation and viewport placement. The editor is a real
`Lecturn` session on a scripted `StubTerminal`.
"""

import random

from lecturn.core.Highlighting import HighlightKind
from lecturn.core.Keys import InteractionMode, Key
from lecturn.core.Navigation import Position
from lecturn.core.Search import JumpDirection, SearchState


def _tags(editor, y):
    return editor.document.row(y).highlight_tags


# --- SearchState ---------------------------------------------------------------
def test_search_state_saturates_at_both_ends() -> None:
    state = SearchState.start([Position(0, 0), Position(0, 1), Position(0, 2)], JumpDirection.FORWARD)
    for _ in range(5):
        state.step_forward()
    assert state.index == 2
    for _ in range(5):
        state.step_backward()
    assert state.index == 0


def test_search_state_index_never_leaves_range() -> None:
    rng = random.Random(1234)
    for count in (1, 2, 7):
        state = SearchState.start([Position(0, y) for y in range(count)], JumpDirection.BACKWARD)
        assert state.index == count - 1
        for _ in range(200):
            if rng.random() < 0.5:
                state.step_forward()
            else:
                state.step_backward()
            assert 0 <= state.index <= count - 1


def test_first_jump_always_uses_forward_placement() -> None:
    state = SearchState.start([Position(0, 0)], JumpDirection.BACKWARD)
    assert state.placement() is JumpDirection.FORWARD
    state.first_jump = False
    assert state.placement() is JumpDirection.BACKWARD


# --- live mode -----------------------------------------------------------------
def test_live_forward_selects_first_match(make_editor) -> None:
    editor = make_editor(["hello", "world", "foo"])
    state = editor.search_engine.live("o", JumpDirection.FORWARD, "/")

    assert state is not None
    assert editor.cursor_position == Position(4, 0)
    assert _tags(editor, 0)[4] is HighlightKind.SEARCH_SELECTED
    assert _tags(editor, 1)[1] is HighlightKind.SEARCH
    assert _tags(editor, 2)[1:] == [HighlightKind.SEARCH, HighlightKind.SEARCH]


def test_live_backward_selects_last_match(make_editor) -> None:
    editor = make_editor(["hello", "world", "foo"])
    editor.search_engine.live("o", JumpDirection.BACKWARD, "?")

    assert editor.cursor_position == Position(2, 2)
    assert _tags(editor, 2)[2] is HighlightKind.SEARCH_SELECTED
    assert _tags(editor, 0)[4] is HighlightKind.SEARCH


def test_live_highlight_covers_whole_query(make_editor) -> None:
    editor = make_editor(["say hello"])
    editor.search_engine.live("hello", JumpDirection.FORWARD, "/")
    assert _tags(editor, 0) == [HighlightKind.NONE] * 4 + [HighlightKind.SEARCH_SELECTED] * 5


def test_live_without_matches_reports_inline(make_editor) -> None:
    editor = make_editor(["hello"])
    assert editor.search_engine.live("zzz", JumpDirection.FORWARD, "/") is None
    assert editor.status.text == "/zzz (no results)"
    assert editor.status.color is None
    assert editor.cursor_position == Position(0, 0)


# --- modal mode ----------------------------------------------------------------
def test_modal_navigation_saturates(make_editor) -> None:
    editor = make_editor(["o1", "o2", "o3"], keys=["N", "N", "N", "N", Key.ENTER])
    editor.search_engine.modal("o", JumpDirection.FORWARD)

    assert editor.cursor_position == Position(0, 2)
    assert editor.search_engine.state.index == 2


def test_modal_n_goes_to_previous_match(make_editor) -> None:
    editor = make_editor(["o1", "o2", "o3"], keys=["n", "n", Key.ESC])
    editor.search_engine.modal("o", JumpDirection.BACKWARD)

    assert editor.cursor_position == Position(0, 0)
    assert editor.search_engine.state.index == 0


def test_modal_ignores_other_keys_and_clears_highlight(make_editor) -> None:
    editor = make_editor(["abc abc"], keys=["x", "N", Key.ENTER])
    editor.mode = InteractionMode.COMMAND
    editor.search_engine.modal("abc", JumpDirection.FORWARD)

    assert editor.cursor_position == Position(4, 0)
    assert editor.mode is InteractionMode.COMMAND
    assert _tags(editor, 0) == [HighlightKind.NONE] * 7


def test_modal_shows_match_counter_while_running(make_editor) -> None:
    editor = make_editor(["ab", "ab"], keys=[Key.ENTER])
    seen = []
    original_refresh = editor.refresh_screen

    def spy() -> None:
        seen.append((editor.status.text, editor.mode))
        original_refresh()

    editor.refresh_screen = spy
    editor.search_engine.modal("ab", JumpDirection.FORWARD)

    assert seen == [("Match 1/2", InteractionMode.SEARCH)]


def test_modal_without_matches_reports_error(make_editor) -> None:
    editor = make_editor(["hello"])
    editor.search_engine.modal("zzz", JumpDirection.FORWARD)

    assert editor.status.text == "ERR: No results for 'zzz'"
    assert editor.status.color == editor.settings.error_color


# --- placement -----------------------------------------------------------------
def _long_document(make_editor, keys, height=10):
    lines = [f"line {i}" for i in range(100)]
    lines[50] = "needle"
    lines[60] = "needle"
    # Two terminal rows go to the bars: height=10 is an 8-row viewport.
    return make_editor(lines, keys=keys, height=height)


def test_first_jump_pushes_offset_down_by_half_a_viewport(make_editor) -> None:
    editor = _long_document(make_editor, [Key.ENTER])
    editor.search_engine.modal("needle", JumpDirection.FORWARD)

    # Match on the bottom edge would be offset 43; pushed down by 8 // 2.
    assert editor.offset.y == 47
    assert editor.cursor_position.y - editor.offset.y == 3


def test_live_jump_on_twenty_row_viewport(make_editor) -> None:
    editor = _long_document(make_editor, [], height=22)
    editor.search_engine.live("needle", JumpDirection.FORWARD, "/")

    assert editor.offset.y == 50 - 19 + 10
    assert editor.cursor_position.y - editor.offset.y == 9


def test_first_jump_of_backward_search_also_pushes_down(make_editor) -> None:
    editor = _long_document(make_editor, [Key.ENTER])
    editor.search_engine.modal("needle", JumpDirection.BACKWARD)

    assert editor.cursor_position.y == 60
    assert editor.offset.y == 57


def test_forward_step_pushes_offset_down(make_editor) -> None:
    editor = _long_document(make_editor, ["N", Key.ENTER])
    editor.search_engine.modal("needle", JumpDirection.FORWARD)
    assert editor.offset.y == 60 - 7 + 4


def test_backward_step_pushes_offset_up(make_editor) -> None:
    editor = _long_document(make_editor, ["N", "n", Key.ENTER])
    editor.search_engine.modal("needle", JumpDirection.FORWARD)

    # Match on the top edge would be offset 50; pushed up by 8 // 2.
    assert editor.offset.y == 46
    assert editor.cursor_position.y - editor.offset.y == 4


def test_placement_offset_clamped_at_top(make_editor) -> None:
    editor = make_editor(["needle", "x"], keys=["n", Key.ENTER], height=10)
    editor.search_engine.modal("needle", JumpDirection.FORWARD)
    assert editor.offset.y == 0


def test_jump_scrolls_horizontally_by_display_cells(make_editor) -> None:
    # Four tabs fill 16 cells; the match starts past a 10-cell viewport.
    editor = make_editor(["\t\t\t\tneedle"], keys=[Key.ENTER], width=12, height=10)
    editor.search_engine.modal("needle", JumpDirection.FORWARD)

    assert editor.cursor_position.x == 4
    assert editor.offset.x > 0
    assert editor.drawer.screen_cursor().x < 12
