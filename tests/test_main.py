# tests/test_main.py
"""Tests for the `lecturn.main` entry point with curses patched out."""

from unittest.mock import MagicMock, patch

import pytest

from lecturn import main


@pytest.fixture
def patched_startup():
    with (
        patch.object(main, "load_config", return_value={"logging": {}}) as load_config,
        patch.object(main, "setup_logging") as setup_logging,
        patch.object(main.curses, "wrapper") as wrapper,
    ):
        yield load_config, setup_logging, wrapper


def test_start_passes_file_argument(patched_startup) -> None:
    load_config, setup_logging, wrapper = patched_startup
    main.start(["lecturn", "notes.txt"])

    setup_logging.assert_called_once_with({"logging": {}})
    wrapper.assert_called_once_with(main.main_app_runner, {"logging": {}}, "notes.txt")


def test_start_without_file(patched_startup) -> None:
    _, _, wrapper = patched_startup
    main.start(["lecturn"])
    assert wrapper.call_args.args[2] is None


def test_unhandled_error_exits_with_status_one(patched_startup) -> None:
    _, _, wrapper = patched_startup
    wrapper.side_effect = RuntimeError("terminal went away")

    with pytest.raises(SystemExit) as excinfo:
        main.start(["lecturn"])
    assert excinfo.value.code == 1


def test_runner_restores_terminal_on_error() -> None:
    terminal = MagicMock()
    with (
        patch.object(main, "Terminal", return_value=terminal),
        patch.object(main, "Lecturn") as editor_cls,
        patch.object(main.signal, "signal"),
    ):
        editor_cls.return_value.run.side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            main.main_app_runner(MagicMock(), {}, None)

    terminal.enter.assert_called_once()
    terminal.exit.assert_called_once()
