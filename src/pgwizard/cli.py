"""CLI entrypoint for pgwizard."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

from rich.logging import RichHandler
import typer

from pgwizard.catalog import PG_CATALOG
from pgwizard.config import WizardSettings, load_settings
from pgwizard.drafts import DraftGateway, create_gateway
from pgwizard.store import flatten_form_data
from pgwizard.ui.console import get_error_console
from pgwizard.ui.progress import status_spinner
from pgwizard.ui.render import (
    render_banner,
    render_error,
    render_step_table,
    render_success,
    render_summary_table,
    render_validation_panel,
    render_warning,
)
from pgwizard.validation import default_registry
from pgwizard.wizard import WizardController

app = typer.Typer(add_completion=False, help="PG/Hostel listing wizard tools.")


@app.callback(invoke_without_command=True)
def root(ctx: typer.Context) -> None:
    """PG/Hostel listing wizard CLI."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=get_error_console(), show_path=False)],
    )
    for note in settings.notes:
        render_warning(note)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


@app.command("steps")
def list_steps(
    data: Optional[Path] = typer.Option(None, "--data", help="FormData JSON used to evaluate visibility."),
) -> None:
    """List the visible steps and whether each is complete."""
    form_data = _load_json_object(data) if data else {}
    visible = PG_CATALOG.visible_steps(flatten_form_data(form_data, PG_CATALOG.step_ids))
    completed = default_registry().completed_indices(visible, form_data)
    rows = [
        (index, step.name, step.step_id, step.category, index in completed)
        for index, step in enumerate(visible)
    ]
    render_step_table(rows)


@app.command("validate")
def validate(path: Path = typer.Argument(..., help="FormData JSON file.")) -> None:
    """Validate every visible step; exit 1 when any is incomplete."""
    form_data = _load_json_object(path)
    visible = PG_CATALOG.visible_steps(flatten_form_data(form_data, PG_CATALOG.step_ids))
    summary = default_registry().validate_all_steps(visible, form_data)
    if summary.all_valid:
        render_success(f"All {len(visible)} steps are complete.")
        raise typer.Exit(code=0)
    for step in summary.invalid_steps:
        issues = [f"{issue.path}: {issue.message}" for issue in step.errors] or ["Invalid step data."]
        render_validation_panel(f"Step {step.index + 1} · {step.name}", issues, style="warning")
    raise typer.Exit(code=1)


@app.command("resume")
def resume(ctx: typer.Context, draft_id: str = typer.Argument(..., help="Draft id to resume.")) -> None:
    """Fetch a draft and show where the wizard would resume."""
    settings: WizardSettings = ctx.obj
    render_banner("pgwizard", "Resume a PG/Hostel listing draft")

    async def _resume() -> WizardController | None:
        gateway = _build_gateway(settings)
        try:
            controller = _build_controller(gateway, settings)
            with status_spinner("Fetching draft"):
                loaded = await controller.initialize(draft_id)
            return controller if loaded else None
        finally:
            await gateway.aclose()

    controller = asyncio.run(_resume())
    if controller is None:
        render_error(f"Draft {draft_id} could not be loaded.")
        raise typer.Exit(code=1)
    _render_session(controller)


@app.command("fill")
def fill(
    ctx: typer.Context,
    step_id: str = typer.Argument(..., help="Step id to save."),
    payload_path: Path = typer.Argument(..., help="Step payload JSON file."),
    draft_id: Optional[str] = typer.Option(None, "--draft-id", help="Existing draft to continue."),
) -> None:
    """Save one step payload and advance, creating a draft when needed."""
    settings: WizardSettings = ctx.obj
    if PG_CATALOG.get(step_id) is None:
        render_error(f"Unknown step id: {step_id}")
        raise typer.Exit(code=1)
    payload = _load_json_object(payload_path)

    async def _fill() -> tuple[WizardController, bool, bool]:
        gateway = _build_gateway(settings)
        try:
            controller = _build_controller(gateway, settings)
            if draft_id:
                with status_spinner("Fetching draft"):
                    await controller.initialize(draft_id)
            index = controller.step_index(step_id)
            if index >= 0:
                controller.go_to_step(index)
            with status_spinner("Saving draft"):
                result = await controller.save_and_continue(step_id, payload)
            return controller, result.success, result.draft_id is not None
        finally:
            await gateway.aclose()

    controller, saved, has_draft = asyncio.run(_fill())
    if not has_draft:
        render_error("The draft could not be created; nothing was saved.")
        raise typer.Exit(code=1)
    if saved:
        render_success(f"Saved {step_id} to draft {controller.draft_id}.")
    _render_session(controller)


def _render_session(controller: WizardController) -> None:
    current = controller.current_step()
    render_summary_table(
        {
            "Draft": controller.draft_id or "(none)",
            "Resume at": current.name if current else "(none)",
            "Completed": f"{len(controller.completed_steps)}/{controller.total_steps()}",
            "Progress": f"{controller.progress()}%",
        },
        title="Session",
    )
    rows = [
        (index, step.name, step.step_id, step.category, controller.is_step_completed(index))
        for index, step in enumerate(controller.visible_steps())
    ]
    render_step_table(rows, current_index=controller.current_step_index)


def _build_gateway(settings: WizardSettings) -> DraftGateway:
    if settings.draft_mode == "memory":
        return create_gateway("memory")
    return create_gateway(
        "http",
        base_url=settings.backend_url,
        timeout_s=settings.timeout_s,
        auth_token=settings.auth_token,
    )


def _build_controller(gateway: DraftGateway, settings: WizardSettings) -> WizardController:
    return WizardController(
        gateway,
        draft_kind=settings.draft_kind,
        timeout_s=settings.timeout_s,
    )


def _load_json_object(path: Path) -> dict[str, Any]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        render_error(f"Invalid JSON file {path}: {exc}")
        raise typer.Exit(code=1) from exc
    if not isinstance(raw, dict):
        render_error(f"{path} must contain a JSON object.")
        raise typer.Exit(code=1)
    return raw


def main() -> None:
    app()


if __name__ == "__main__":
    main()
