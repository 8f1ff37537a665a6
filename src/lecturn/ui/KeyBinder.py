# lecturn/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
Translates key presses in command mode into editor action names, and decodes
terminal escape sequences into logical keys.

Key Features:
- Default command-mode bindings (vi-like: ``i``, ``:``, ``/``, ``?``,
  ``h/j/k/l``, ``H/M/L``) merged with the user's ``[keybindings]`` section.
- Bindings may name a single key or a list of keys; named keys such as
  ``"pagedown"`` or ``"esc"`` are decoded to :class:`Key` members.
- ``decode_escape_sequence`` maps CSI/SS3 sequences (arrows, Home/End,
  PageUp/PageDown, Delete) to logical keys for :mod:`lecturn.ui.Terminal`.

Intended Usage:
---------------
Instantiate KeyBinder with the merged config and call :meth:`lookup` with each
key event read in command mode. The editor maps the returned action name to
one of its own methods.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from lecturn.core.Keys import Key, KeyEvent
from lecturn.utils.utils import DEFAULT_CONFIG


# Normalized escape sequences map. Keys do NOT include the leading ESC (0x1B),
# because Terminal.read_key() already strips/reads after ESC.
ESCAPE_SEQUENCE_MAP: Dict[str, Key] = {
    # Arrows (CSI and SS3)
    "[A": Key.UP, "[B": Key.DOWN, "[C": Key.RIGHT, "[D": Key.LEFT,
    "OA": Key.UP, "OB": Key.DOWN, "OC": Key.RIGHT, "OD": Key.LEFT,

    # Home/End (CSI/SS3 and tilde variants)
    "[H": Key.HOME, "[F": Key.END, "OH": Key.HOME, "OF": Key.END,
    "[1~": Key.HOME, "[4~": Key.END, "[7~": Key.HOME, "[8~": Key.END,

    # Delete/PageUp/PageDown (~ style)
    "[3~": Key.DELETE, "[5~": Key.PAGE_UP, "[6~": Key.PAGE_DOWN,
}

# Names accepted in the config for non-printable keys.
NAMED_KEYS: Dict[str, Key] = {
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "pageup": Key.PAGE_UP,
    "page_up": Key.PAGE_UP,
    "pagedown": Key.PAGE_DOWN,
    "page_down": Key.PAGE_DOWN,
    "home": Key.HOME,
    "end": Key.END,
    "del": Key.DELETE,
    "delete": Key.DELETE,
    "backspace": Key.BACKSPACE,
    "esc": Key.ESC,
    "escape": Key.ESC,
    "enter": Key.ENTER,
    "tab": Key.TAB,
}

DEFAULT_KEYBINDINGS: Dict[str, Any] = DEFAULT_CONFIG["keybindings"]


def decode_escape_sequence(seq: str) -> Optional[Key]:
    """Maps the characters that followed an ESC to a logical key, or None."""
    if seq and seq[0] == "\x1b":
        seq = seq[1:]

    mapped = ESCAPE_SEQUENCE_MAP.get(seq)
    if mapped is None:
        # Tolerant cleanup: keep only tokens relevant to term sequences.
        cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
        mapped = ESCAPE_SEQUENCE_MAP.get(cleaned)
        if mapped is not None:
            logging.debug("decode_escape_sequence: cleaned %r -> %r", seq, cleaned)

    if mapped is None:
        logging.warning("Unknown escape sequence: ESC + %r", seq)
    return mapped


class KeyBinder:
    """Command-mode key → action name mapping.

    Attributes:
        keybindings (dict): Action name → list of decoded key events.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or {}
        self.keybindings = self._load_keybindings()
        logging.debug("KeyBinder initialized with %d actions", len(self.keybindings))

    def _load_keybindings(self) -> Dict[str, List[KeyEvent]]:
        """Merges user bindings over the defaults and decodes every key.

        Invalid entries are logged and skipped.
        """
        merged = dict(DEFAULT_KEYBINDINGS)
        merged.update(self.config.get("keybindings", {}))

        keybindings: Dict[str, List[KeyEvent]] = {}
        for action, spec in merged.items():
            specs = spec if isinstance(spec, list) else [spec]
            decoded: List[KeyEvent] = []
            for key_spec in specs:
                try:
                    decoded.append(self._decode_keystring(key_spec))
                except ValueError as e:
                    logging.error("Invalid keybinding for '%s': %s", action, e)
            keybindings[action] = decoded
        return keybindings

    def _decode_keystring(self, key_input: Any) -> KeyEvent:
        """Decodes a binding such as ``"j"``, ``"H"`` or ``"pagedown"``.

        Single characters are kept verbatim (case matters: ``h`` and ``H`` are
        different actions); longer strings must name a key in ``NAMED_KEYS``.

        Raises:
            ValueError: If the spec is empty, not a string or an unknown name.
        """
        if isinstance(key_input, Key):
            return key_input
        if not isinstance(key_input, str):
            raise ValueError(f"Invalid key type: {type(key_input)}. Expected str.")
        if not key_input:
            raise ValueError("Key string cannot be empty.")
        if len(key_input) == 1:
            return key_input

        named = NAMED_KEYS.get(key_input.strip().lower())
        if named is None:
            raise ValueError(f"Unknown key name: {key_input!r}")
        return named

    def lookup(self, key_spec: Any) -> Optional[str]:
        """Finds the action name bound to *key_spec*, or None."""
        try:
            decoded_key = self._decode_keystring(key_spec)
        except ValueError:
            return None

        for action_name, key_list in self.keybindings.items():
            if decoded_key in key_list:
                return action_name
        return None
