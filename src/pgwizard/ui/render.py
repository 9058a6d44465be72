"""Render helpers for wizard notifications and summaries."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pgwizard.ui.console import get_console, get_error_console


def render_banner(title: str, subtitle: str) -> None:
    console = get_console()
    panel = Panel(
        Group(Text(subtitle, style="subtitle")),
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_info(text: str) -> None:
    get_console().print(text, style="info", markup=False)


def render_success(text: str) -> None:
    get_console().print(text, style="success", markup=False)


def render_warning(text: str) -> None:
    get_error_console().print(text, style="warning", markup=False)


def render_error(text: str) -> None:
    panel = Panel(
        Text(text, style="error"),
        box=box.ROUNDED,
        border_style="error",
        padding=(0, 2),
        expand=True,
    )
    get_error_console().print(panel)


def render_notification(level: str, message: str) -> None:
    """Non-blocking notice for the user; the terminal counterpart of a toast."""
    if level == "error":
        render_error(message)
    elif level == "warning":
        render_warning(message)
    elif level == "success":
        render_success(message)
    else:
        render_info(message)


def render_summary_table(rows: Mapping[str, str] | Sequence[tuple[str, str]], title: str = "Summary") -> None:
    console = get_console()
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="label", no_wrap=True, justify="right")
    table.add_column(style="value")

    items = rows.items() if hasattr(rows, "items") else rows
    for key, value in items:
        table.add_row(Text(str(key), style="label"), Text(str(value), style="value"))

    panel = Panel(
        table,
        title=Text(title, style="step"),
        title_align="left",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_step_table(
    rows: Sequence[tuple[int, str, str, str, bool]],
    *,
    current_index: int | None = None,
    title: str = "Steps",
) -> None:
    console = get_console()
    table = Table(show_header=True, box=None, pad_edge=False)
    table.add_column("#", style="label", justify="right")
    table.add_column("Step", style="value")
    table.add_column("Id", style="label")
    table.add_column("Category", style="label")
    table.add_column("Status")
    for index, name, step_id, category, complete in rows:
        marker = "> " if current_index == index else "  "
        status = Text("complete", style="complete") if complete else Text("pending", style="pending")
        table.add_row(f"{marker}{index + 1}", name, step_id, category, status)
    panel = Panel(
        table,
        title=Text(title, style="step"),
        title_align="left",
        border_style="border",
        box=box.ROUNDED,
        padding=(0, 2),
        expand=True,
    )
    console.print(panel)


def render_validation_panel(title: str, issues: Sequence[str], *, style: str) -> None:
    lines = [Text(f"- {issue}", style=style) for issue in issues]
    panel = Panel(
        Group(*lines),
        title=Text(title, style="step"),
        title_align="left",
        box=box.ROUNDED,
        border_style="border",
        padding=(0, 2),
        expand=True,
    )
    get_console().print(panel)
