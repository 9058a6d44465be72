"""Shared rich console and theme for pgwizard output."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "accent": "bright_blue",
        "border": "bright_black",
        "title": "bold bright_blue",
        "subtitle": "dim",
        "step": "bold bright_blue",
        "info": "dim",
        "warning": "dark_orange",
        "success": "green3",
        "error": "bold red3",
        "label": "dim",
        "value": "white",
        "complete": "green3",
        "pending": "dim",
    }
)

_CONSOLE = Console(theme=THEME, highlight=False)
_ERR_CONSOLE = Console(theme=THEME, highlight=False, stderr=True)


def get_console() -> Console:
    return _CONSOLE


def get_error_console() -> Console:
    return _ERR_CONSOLE
