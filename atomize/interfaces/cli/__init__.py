"""CLI interface for Atomize using Typer.

Usage:
    atomize project create "Learn Rust" --generate
    atomize task toggle 2 -p 3f2a
    atomize status          # XP, level and the project to focus on
    atomize focus 2         # Stopwatch on one task

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (project, task)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

import logging
import time
from typing import Optional

import typer

from atomize import __version__
from atomize.application import dashboard_stats, pick_focus_project
from atomize.config import get_ai_config, save_ai_config
from atomize.domain.focus import format_elapsed
from atomize.domain.project import project_percent
from atomize.infrastructure.ai import RoadmapClient
from atomize.interfaces.cli.commands import project, task
from atomize.interfaces.cli.common import (
    format_task_line,
    open_session,
    print_header,
    print_info,
    print_success,
    progress_bar,
    resolve_project,
    resolve_task,
)

app = typer.Typer(
    name="atomize",
    help="Break goals into atomic tasks and level up by finishing them",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"atomize version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Atomize - goal tracking with XP and levels.

    Every task is worth 100 XP per weight point; every 500 XP is a level.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(project.app, name="project")
app.add_typer(task.app, name="task")


# =============================================================================
# Top-Level Commands
# =============================================================================


@app.command("status")
def status() -> None:
    """Show XP, level and the project to focus on."""
    session = open_session()
    stats = dashboard_stats(session.store)
    level = stats.level

    print_header(f"Welcome back, {session.settings.name}")
    typer.echo(
        f"Level {level.level}  {progress_bar(level.percent)} "
        f"{level.xp_into_level}/{level.xp_for_next_level} XP"
    )

    if not session.settings.zen_mode:
        typer.echo(f"Total XP:   {stats.total_xp}")
        typer.echo(f"Projects:   {stats.project_count}")
        typer.echo(f"Tasks done: {stats.tasks_done} ({stats.tasks_open} open)")

    focus = pick_focus_project(session.store)
    if focus is None:
        typer.echo("")
        typer.echo("No projects yet. Create one with: atomize project create <title>")
        return

    percent = project_percent(focus)
    typer.echo("")
    typer.echo(f"Focus: {focus.icon} {focus.title} {progress_bar(percent, 10)} {percent}%")
    next_task = next((t for t in focus.tasks if not t.is_completed), None)
    if next_task is not None:
        typer.echo(f"  Next: {next_task.title} (task {next_task.id})")


@app.command("focus")
def focus(
    task_id: int = typer.Argument(..., help="Task id"),
    project_ref: Optional[str] = typer.Option(
        None,
        "--project",
        "-p",
        help="Project id or prefix (or set ATOMIZE_PROJECT env var)",
        envvar="ATOMIZE_PROJECT",
    ),
) -> None:
    """Run a focus stopwatch on one task.

    Press Enter to stop; you can then mark the task complete.
    """
    session = open_session()
    target = resolve_project(session, project_ref)
    current = resolve_task(target, task_id)

    session.enter_focus(target.id, task_id, time.monotonic())
    print_header(f"FOCUS  {target.icon} {target.title}")
    typer.echo(format_task_line(current))
    if current.tip:
        typer.echo(f"  Tip: {current.tip}")
    typer.echo("")

    typer.prompt("Press Enter to stop", default="", show_default=False)

    complete = False
    if not current.is_completed:
        complete = typer.confirm("Mark task complete?", default=True)

    elapsed = session.exit_focus(time.monotonic(), complete=complete)
    print_info(f"Focused for {format_elapsed(elapsed)}")


@app.command("settings")
def settings(
    name: Optional[str] = typer.Option(None, "--name", help="Your display name"),
    sound: Optional[bool] = typer.Option(None, "--sound/--no-sound", help="Celebration sounds"),
    zen: Optional[bool] = typer.Option(None, "--zen/--no-zen", help="Hide detailed stats"),
    ai_url: Optional[str] = typer.Option(None, "--ai-url", help="Generator base URL"),
    ai_model: Optional[str] = typer.Option(None, "--ai-model", help="Generator model name"),
) -> None:
    """Show or change user settings and the generator endpoint."""
    session = open_session()

    if name is not None or sound is not None or zen is not None:
        session.update_settings(
            name=name.strip() if name and name.strip() else None,
            sound_enabled=sound,
            zen_mode=zen,
        )
        print_success("Settings saved")

    ai_config = get_ai_config()
    if ai_url or ai_model:
        updates = {"base_url": ai_url, "model": ai_model}
        ai_config = ai_config.model_copy(update={k: v for k, v in updates.items() if v})
        save_ai_config(ai_config)
        print_success("Generator settings saved")

    current = session.settings
    typer.echo(f"Name:  {current.name}")
    typer.echo(f"Sound: {'on' if current.sound_enabled else 'off'}")
    typer.echo(f"Zen:   {'on' if current.zen_mode else 'off'}")
    typer.echo(f"Model: {ai_config.model} @ {ai_config.base_url}")


@app.command("briefing")
def briefing() -> None:
    """Get today's briefing from the generator."""
    session = open_session()
    client = RoadmapClient(get_ai_config())

    result = client.generate_daily_briefing(session.settings.name, session.store.projects)
    print_header(result.headline)
    typer.echo(result.content)
    typer.echo("")
    typer.echo(f"Focus: {result.focus_suggestion}")


@app.command("reset")
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete every project and start from zero XP."""
    session = open_session()

    if not yes:
        typer.confirm(
            f"Delete all {session.store.count()} projects? This cannot be undone",
            abort=True,
        )

    event = session.reset()
    print_success(f"Removed {event.projects_removed} projects")


__all__ = ["app"]
