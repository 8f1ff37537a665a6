# lecturn/utils/utils.py
"""
lecturn.utils.utils
===================

Configuration helpers for the Lecturn editor.

- Automatic User Configuration: creates `~/.config/lecturn/config.toml` from
  the template shipped at the project root on first run.
- Robust Configuration Loading: starts from the embedded `DEFAULT_CONFIG`,
  then recursively merges user settings parsed with `toml`.
- Helper Utilities: deep-merging dictionaries and hex → xterm-256 color
  conversion for curses.

The editor is always runnable, even when the user file is missing or broken,
because the embedded defaults are the fallback.
"""

import logging
import shutil
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger("lecturn")

# --- Constants ---
WHITE_FG_IDX = 255

# Direct, hardcoded representation of the shipped `config.toml`.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "tab_size": 4,
        "status_timeout": 5,
    },
    "colors": {
        "search_fg": "#000000",
        "search_bg": "#f9f1a5",
        "search_selected_fg": "#000000",
        "search_selected_bg": "#ffffff",
        "default_fg": "#ffffff",
        "default_bg": "#000000",
        "error": "#c50f1f",
        "status_fg": "#000000",
        "status_bg": "#efefef",
        "message_fg": "#ffffff",
        "line_number": "#f9f1a5",
    },
    "keybindings": {
        "insert_mode": "i",
        "command_prompt": ":",
        "search_forward": "/",
        "search_backward": "?",
        "move_up": ["k"],
        "move_down": ["j"],
        "move_left": ["h"],
        "move_right": ["l"],
        "screen_top": "H",
        "screen_middle": "M",
        "screen_bottom": "L",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
        "log_file": "lecturn.log",
    },
}


# --- Helper Functions ---

def get_user_config_dir() -> Path:
    """Directory holding the user's `config.toml`."""
    return Path.home() / ".config" / "lecturn"


def get_project_root() -> Path:
    """Determines the project's root directory for finding template files."""
    if getattr(sys, 'frozen', False) and hasattr(sys, '_MEIPASS'):
        return Path(sys._MEIPASS)
    return Path(__file__).resolve().parents[3]


def ensure_user_config_exists() -> None:
    """Copies the config template to `~/.config/lecturn` if it is missing."""
    try:
        config_dir = get_user_config_dir()
        user_config_path = config_dir / "config.toml"
        config_dir.mkdir(parents=True, exist_ok=True)

        if not user_config_path.exists():
            source_config_path = get_project_root() / "config.toml"
            if source_config_path.exists():
                shutil.copy(source_config_path, user_config_path)
                logger.info("Created user config template at: %s", user_config_path)

    except OSError as e:
        logger.error("Could not create user configuration files: %s", e, exc_info=True)


def load_config(user_config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads and merges configurations, ensuring the application can always run.

    Args:
        user_config_path: Explicit config file; defaults to
            `~/.config/lecturn/config.toml` (created from the template first).
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    if user_config_path is None:
        ensure_user_config_exists()
        user_config_path = get_user_config_dir() / "config.toml"

    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info("Successfully loaded and merged user config from %s", user_config_path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.error("Could not parse user config '%s': %s. Using defaults.", user_config_path, e)

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
