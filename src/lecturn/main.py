# lecturn/main.py
"""
Lecturn Main Entry Point
========================

1) Configuration & Logging: loads config and initializes logging first.
2) Curses Wrapper: safely initializes/tears down curses to avoid terminal corruption.
3) Application Run: instantiates Lecturn on a curses-backed Terminal and runs it.

Usage: ``lecturn [FILE]``. A file that can't be opened is not fatal; the
editor starts with an empty document and reports the failure.
"""

from __future__ import annotations

import curses
import locale
import logging
import signal
import sys
from typing import Any, Optional

from lecturn.core.Lecturn import Lecturn
from lecturn.ui.Terminal import Terminal
from lecturn.utils.logging_config import setup_logging
from lecturn.utils.utils import load_config

logger = logging.getLogger("lecturn")


def main_app_runner(stdscr: "curses.window", config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """
    Target for `curses.wrapper`. Sets up the terminal and runs the editor.

    Args:
        stdscr: Curses standard screen window provided by wrapper.
        config: Application configuration dict.
        file_to_open: Optional CLI path.
    """
    terminal = Terminal(stdscr)
    terminal.enter()

    # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
    if hasattr(signal, "SIGTSTP"):
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)

    try:
        Lecturn(terminal, config=config, file_to_open=file_to_open).run()
    finally:
        terminal.exit()


def start(argv: Optional[list[str]] = None) -> None:
    """
    Loads configuration, initializes logging and locale, then runs the
    curses application via wrapper. Terminal failures are logged at CRITICAL
    and end the process with exit status 1.
    """
    argv = sys.argv if argv is None else argv

    try:
        config: dict[str, Any] = load_config()
        setup_logging(config)
    except Exception as e:
        # Logging is not ready; print to stderr and exit.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Lecturn editor starting up...")

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = argv[1] if len(argv) > 1 and argv[1].strip() else None

    try:
        curses.wrapper(main_app_runner, config, file_to_open)
        logger.info("Lecturn editor shut down gracefully.")
    except KeyboardInterrupt:
        logger.info("Interrupted by KeyboardInterrupt.")
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    start()
