from __future__ import annotations

from ..errors import ConfigError

try:  # Textual is optional at import time for non-TUI usage.
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical, VerticalScroll
    from textual.widgets import Button, Footer, Header, Input, Label, ListItem, ListView, Static
except Exception as exc:  # pragma: no cover
    raise ConfigError(
        "Textual is required for the editor. Install minestuck-datagen with its TUI dependencies."
    ) from exc

__all__ = [
    "App",
    "Button",
    "ComposeResult",
    "Footer",
    "Header",
    "Horizontal",
    "Input",
    "Label",
    "ListItem",
    "ListView",
    "Static",
    "Vertical",
    "VerticalScroll",
]
