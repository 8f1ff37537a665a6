# src/lecturn/core/Settings.py
"""Immutable editor settings folded from the merged configuration dict."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .Highlighting import Palette

VERSION = "0.1.0"


@dataclass(frozen=True)
class Settings:
    version: str = VERSION
    tab_size: int = 4
    status_timeout: float = 5.0
    palette: Palette = field(default_factory=Palette)
    error_color: str = "#c50f1f"
    status_fg: str = "#000000"
    status_bg: str = "#efefef"
    line_number_fg: str = "#f9f1a5"
    message_fg: str = "#ffffff"

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "Settings":
        """Reads the ``[editor]`` and ``[colors]`` sections; missing keys keep defaults."""
        config = config or {}
        editor = config.get("editor", {})
        colors = config.get("colors", {})
        default = cls()

        tab_size = editor.get("tab_size", default.tab_size)
        if not isinstance(tab_size, int) or tab_size < 1:
            tab_size = default.tab_size

        return cls(
            tab_size=tab_size,
            status_timeout=float(editor.get("status_timeout", default.status_timeout)),
            palette=Palette.from_colors(colors),
            error_color=colors.get("error", default.error_color),
            status_fg=colors.get("status_fg", default.status_fg),
            status_bg=colors.get("status_bg", default.status_bg),
            line_number_fg=colors.get("line_number", default.line_number_fg),
            message_fg=colors.get("message_fg", default.message_fg),
        )
