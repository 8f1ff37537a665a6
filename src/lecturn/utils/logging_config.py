# lecturn/utils/logging_config.py
"""lecturn.utils.logging_config
==============================

Logging setup for the Lecturn editor.

curses owns the screen while the editor runs, so log records go to rotating
files; a stderr handler is available for debugging outside full-screen mode.

Handlers installed by :func:`setup_logging`:
    - ``lecturn.log`` (rotating) for everything at ``file_level`` and above.
    - stderr at ``console_level`` when ``log_to_console`` is true.
    - ``error.log`` (rotating, ERROR+) when ``separate_error_log`` is true.
    - ``keytrace.log`` on :data:`KEY_LOGGER` when the ``LECTURN_KEYTRACE``
      environment variable is ``1``, ``true`` or ``yes``.

Globals:
    logger: Main application logger ("lecturn").
    KEY_LOGGER: Raw key-press trace ("lecturn.keyevents"); silent by default.
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


logger = logging.getLogger("lecturn")
KEY_LOGGER = logging.getLogger("lecturn.keyevents")

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"
KEYTRACE_FORMAT = "%(asctime)s - %(message)s"
KEYTRACE_ENV = "LECTURN_KEYTRACE"


def _prepare_log_path(log_filename: str) -> str:
    """Creates the parent directory of *log_filename* if needed.

    Falls back to a file of the same name in the system temp directory when
    the directory can't be created.
    """
    path = os.path.expanduser(log_filename)
    parent = os.path.dirname(path)
    if not parent or os.path.isdir(parent):
        return path
    try:
        os.makedirs(parent, exist_ok=True)
    except OSError as e:
        fallback = os.path.join(tempfile.gettempdir(), os.path.basename(path) or "lecturn.log")
        print(f"Cannot create log directory '{parent}' ({e}); logging to '{fallback}'", file=sys.stderr)
        return fallback
    return path


def _rotating_handler(
    filename: str, level: int, max_bytes: int, backups: int, fmt: str
) -> Optional[logging.Handler]:
    """A RotatingFileHandler, or None (reported on stderr) if the file can't be opened."""
    try:
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
        )
    except OSError as e:
        print(f"Log file '{filename}' unavailable: {e}", file=sys.stderr)
        return None
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


def _level(name: Any, default: int) -> int:
    value = getattr(logging, str(name).upper(), default)
    return value if isinstance(value, int) else default


def _configure_key_trace() -> None:
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    for handler in KEY_LOGGER.handlers:
        handler.close()
    KEY_LOGGER.handlers = []

    enabled = os.environ.get(KEYTRACE_ENV, "").lower() in {"1", "true", "yes"}
    handler = None
    if enabled:
        handler = _rotating_handler(
            _prepare_log_path("keytrace.log"), logging.DEBUG, 1024 * 1024, 3, KEYTRACE_FORMAT
        )

    if handler is None:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        if enabled:
            logging.error("Key trace requested via %s but keytrace.log is unavailable.", KEYTRACE_ENV)
        return

    KEY_LOGGER.addHandler(handler)
    KEY_LOGGER.disabled = False
    logging.info("Key event tracing enabled, logging to 'keytrace.log'.")


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures the root logger and the key-trace logger from ``config["logging"]``.

    Recognised keys: ``file_level`` (default DEBUG), ``console_level``
    (default WARNING), ``log_to_console``, ``separate_error_log`` and
    ``log_file`` (default ``lecturn.log``).

    Root handlers are replaced, not appended, so calling this twice does not
    duplicate records. Never raises: file problems are reported on stderr and
    the affected handler is skipped.
    """
    settings = (config or {}).get("logging", {})

    file_level = _level(settings.get("file_level", "DEBUG"), logging.DEBUG)
    log_filename = _prepare_log_path(settings.get("log_file", "lecturn.log"))

    handlers: list[logging.Handler] = []
    file_handler = _rotating_handler(log_filename, file_level, 2 * 1024 * 1024, 5, FILE_FORMAT)
    if file_handler:
        handlers.append(file_handler)

    if settings.get("log_to_console", True):
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console.setLevel(_level(settings.get("console_level", "WARNING"), logging.WARNING))
        handlers.append(console)

    if settings.get("separate_error_log", False):
        error_handler = _rotating_handler(
            _prepare_log_path("error.log"), logging.ERROR, 1024 * 1024, 3, FILE_FORMAT
        )
        if error_handler:
            handlers.append(error_handler)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(file_level)

    _configure_key_trace()

    logging.info(
        "Logging ready: root level %s, %d handler(s), log file '%s'.",
        logging.getLevelName(root.level),
        len(handlers),
        log_filename if file_handler else "-",
    )
