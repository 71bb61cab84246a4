from __future__ import annotations

from ..errors import ConfigError

try:  # Textual is optional at import time for non-TUI usage.
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Label, ListItem, ListView, Static
except Exception as exc:  # pragma: no cover
    raise ConfigError(
        "Textual is required for --tui. Install filedrecipes with TUI dependencies."
    ) from exc

__all__ = [
    "App",
    "ComposeResult",
    "Footer",
    "Header",
    "Horizontal",
    "Label",
    "ListItem",
    "ListView",
    "Static",
]
