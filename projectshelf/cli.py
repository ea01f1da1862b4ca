# projectshelf/cli.py

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from .services.logging import setup_logging
from .services.notifications import Notice, Notifier, Severity
from .config.loader import get_config
from .config.schema import AppConfig
from .backends import create_backend
from .core.errors import StoreError
from .core.folders import ROOT_FOLDER, organize_by_folder
from .core.history import ProjectHistory
from .core.models import Project
from .core.presentation import (
    explorer_tx_url, file_content_preview, format_created_date,
    load_action_label, project_type_label, status_presentation,
)
from .core.session import EditingSession
from .core.store import ProjectStore
from . import __version__

# --- Typer App ---
app = typer.Typer(help="ProjectShelf CLI - Browse, load and delete saved contract projects.")

_ICON_GLYPHS = {
    "check-circle": ("✔", typer.colors.GREEN),
    "clock": ("◷", typer.colors.YELLOW),
    "file-text": ("•", typer.colors.BLUE),
}

_SEVERITY_COLORS = {
    Severity.INFO: typer.colors.WHITE,
    Severity.SUCCESS: typer.colors.GREEN,
    Severity.ERROR: typer.colors.RED,
}

class EchoNotifier(Notifier):
    """Prints notices to stderr so stdout stays machine-readable."""

    def notify(self, notice: Notice) -> None:
        typer.secho(f"{notice.title}: {notice.description}", fg=_SEVERITY_COLORS[notice.severity], err=True)

def version_callback(value: bool):
    if value:
        print(f"ProjectShelf CLI Version: {__version__}")
        raise typer.Exit()

@app.callback()
def main_options(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True, help="Show version and exit."),
    rows_file: Optional[Path] = typer.Option(None, "--rows-file", help="Read projects from a JSON rows file instead of the configured backend.", exists=True, dir_okay=False, resolve_path=True),
):
    """ Main callback to set up logging and pick the backend """
    log_level = "DEBUG" if verbose else "WARNING"
    setup_logging(level=log_level, verbose=verbose)
    ctx.ensure_object(dict)
    config = get_config()
    if rows_file is not None:
        config = config.model_copy(update={"backend": "memory", "rows_file": str(rows_file)})
    ctx.obj["CONFIG"] = config


def _resolve_owner(config: AppConfig, owner: Optional[str]) -> Optional[str]:
    resolved = owner or config.owner_id
    if not resolved:
        typer.secho("No owner id given; pass --owner or set owner_id in the config.", fg=typer.colors.YELLOW, err=True)
    return resolved


async def _with_history(config: AppConfig, owner_id: Optional[str], action):
    """Builds a ProjectHistory for `owner_id`, loads it, runs `action`, then closes the backend."""
    try:
        backend = create_backend(config)
    except StoreError as e:
        typer.secho(f"Backend Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    history = ProjectHistory(ProjectStore(backend), EditingSession(), notifier=EchoNotifier())
    try:
        if not await history.set_owner(owner_id):
            raise typer.Exit(code=1)
        return await action(history)
    finally:
        await backend.close()


def _require_project(history: ProjectHistory, project_id: str) -> Project:
    project = history.find(project_id)
    if project is None:
        typer.secho(f"Project '{project_id}' not found.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return project


def _render_project(project: Project, config: AppConfig, current_id: Optional[str]) -> None:
    look = status_presentation(project.status)
    glyph, color = _ICON_GLYPHS.get(look.icon, ("•", None))
    typer.secho(f"{glyph} ", fg=color, nl=False)
    typer.secho(project.name, bold=True, nl=False)
    typer.echo(f"  [{project.status}]  ({load_action_label(project, current_id)})  id={project.id}")
    typer.echo(f"    {format_created_date(project.created_at)} · {project_type_label(project.type)} · {project.file_count} file(s)")
    if project.contract_address:
        typer.secho(f"    {project.contract_address}", fg=typer.colors.GREEN)
    tx_url = explorer_tx_url(project.tx_hash, config.explorer_base_url)
    if tx_url:
        typer.echo(f"    {tx_url}")


@app.command("list")
def list_projects(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "--owner", "-u", help="Owner (user profile) id. Defaults to owner_id from the config."),
):
    """
    Lists the owner's projects, newest first.
    """
    config: AppConfig = ctx.obj["CONFIG"]
    owner_id = _resolve_owner(config, owner)

    async def action(history: ProjectHistory):
        if not history.projects:
            typer.echo("No Projects Yet")
            return
        for project in history.projects:
            _render_project(project, config, current_id=None)

    asyncio.run(_with_history(config, owner_id, action))


@app.command()
def show(
    ctx: typer.Context,
    project_id: str = typer.Argument(..., help="Id of the project to preview."),
    owner: Optional[str] = typer.Option(None, "--owner", "-u", help="Owner (user profile) id."),
):
    """
    Previews a project's files grouped by top-level folder.
    """
    config: AppConfig = ctx.obj["CONFIG"]
    owner_id = _resolve_owner(config, owner)

    async def action(history: ProjectHistory):
        project = _require_project(history, project_id)
        typer.secho(project.name, bold=True)
        if not project.files:
            typer.echo("No files available for this project.")
            return
        for folder, files in organize_by_folder(project.files).items():
            indent = ""
            if folder != ROOT_FOLDER:
                typer.secho(f"{folder}/", fg=typer.colors.BLUE)
                indent = "  "
            for file in files:
                typer.secho(f"{indent}-- {file.name}", fg=typer.colors.CYAN)
                for line in file_content_preview(file.content).splitlines():
                    typer.echo(f"{indent}   {line}")

    asyncio.run(_with_history(config, owner_id, action))


@app.command()
def load(
    ctx: typer.Context,
    project_id: str = typer.Argument(..., help="Id of the project to open."),
    owner: Optional[str] = typer.Option(None, "--owner", "-u", help="Owner (user profile) id."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the session project JSON here instead of stdout.", writable=True, resolve_path=True),
):
    """
    Loads a project into an editing session and emits the session's project JSON.
    """
    config: AppConfig = ctx.obj["CONFIG"]
    owner_id = _resolve_owner(config, owner)

    async def action(history: ProjectHistory):
        project = _require_project(history, project_id)
        view = history.load_project(project)
        if view is None:
            raise typer.Exit(code=1)
        payload = json.dumps(view.to_dict(), indent=2)
        if output is None:
            typer.echo(payload)
            return
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(payload, encoding='utf-8')
        except OSError as e:
            logger.exception(f"Error writing output file: {e}")
            raise typer.Exit(code=1)
        typer.secho(f"Session project written to: {output}", fg=typer.colors.GREEN, err=True)

    asyncio.run(_with_history(config, owner_id, action))


@app.command()
def delete(
    ctx: typer.Context,
    project_id: str = typer.Argument(..., help="Id of the project to delete."),
    owner: Optional[str] = typer.Option(None, "--owner", "-u", help="Owner (user profile) id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Delete without asking for confirmation."),
):
    """
    Permanently deletes a project. There is no undo.
    """
    config: AppConfig = ctx.obj["CONFIG"]
    owner_id = _resolve_owner(config, owner)

    async def action(history: ProjectHistory):
        project = _require_project(history, project_id)
        if not yes and not typer.confirm(f"Delete '{project.name}'? This cannot be undone."):
            raise typer.Abort()
        if not await history.delete_project(project.id):
            raise typer.Exit(code=1)

    asyncio.run(_with_history(config, owner_id, action))


if __name__ == "__main__":
    app()
