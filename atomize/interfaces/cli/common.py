"""Shared utilities for Atomize CLI commands.

This module provides common utilities used across CLI commands:
- Opening the session against the data directory
- Project resolution by id prefix
- Formatted output helpers (error, success, info)
- Progress bars and task lines for display
- A terminal celebrator for completions and level-ups
"""

from typing import NoReturn

import typer

from atomize.application import Session
from atomize.domain.leveling import LevelUp
from atomize.domain.project import Project
from atomize.domain.task import AtomicTask
from atomize.domain.types import Point
from atomize.infrastructure.storage import SettingsRepository, StoreRepository


# =============================================================================
# Output Helpers
# =============================================================================


def print_error(msg: str) -> None:
    """Print a formatted error message to stderr."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 60) -> None:
    typer.echo(char * width)


def print_header(title: str, width: int = 60) -> None:
    """Print a formatted header with separators.

    Args:
        title: Header title text
        width: Width of the separator lines
    """
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def fail(msg: str) -> NoReturn:
    """Print an error and exit with status 1."""
    print_error(msg)
    raise typer.Exit(1)


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert '#rrggbb' to an RGB tuple for terminal styling."""
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def progress_bar(percent: int, width: int = 20) -> str:
    """Render a percentage as a fixed-width bar, e.g. [#####-----]."""
    filled = max(0, min(width, percent * width // 100))
    return f"[{'#' * filled}{'-' * (width - filled)}]"


def format_task_line(task: AtomicTask) -> str:
    """One line per task: checkbox, id, title and XP."""
    mark = "x" if task.is_completed else " "
    return f"  [{mark}] {task.id:>3}  {task.title}  (+{task.points} XP)"


def format_project_line(project: Project, percent: int) -> str:
    short_id = project.id[:8]
    title = typer.style(project.title, fg=hex_to_rgb(project.theme_color), bold=True)
    return (
        f"{short_id}  {project.icon} {title}  "
        f"{progress_bar(percent, 10)} {percent:>3}%  "
        f"{project.status.value} | {project.priority.value} | {project.category.value}"
    )


# =============================================================================
# Celebrations
# =============================================================================


class TerminalCelebrator:
    """Celebrates in the terminal: colored banners and the bell."""

    def task_completed(self, origin: Point, color: str, sound: bool) -> None:
        typer.echo(typer.style("  * Task complete! *", fg=hex_to_rgb(color), bold=True))
        if sound:
            typer.echo("\a", nl=False)

    def level_up(self, event: LevelUp, sound: bool) -> None:
        banner = f"  LEVEL UP! Level {event.old_level} -> {event.new_level} ({event.total_xp} XP)"
        typer.echo(typer.style(banner, fg=typer.colors.MAGENTA, bold=True))
        if sound:
            typer.echo("\a", nl=False)


# =============================================================================
# Session and Project Resolution
# =============================================================================


def open_session() -> Session:
    """Load the session from the data directory.

    Celebrations fire immediately since a command exits right after
    the change.
    """
    return Session.load(
        StoreRepository(),
        SettingsRepository(),
        celebrator=TerminalCelebrator(),
        level_up_delay=0,
    )


def resolve_project(session: Session, ref: str | None) -> Project:
    """Find a project by id or unique id prefix.

    Resolution order:
    1. Exact id match
    2. Unique prefix match
    3. With no reference given, the only project in the store

    Raises:
        typer.Exit: If no single project matches.
    """
    projects = session.store.projects

    if not ref:
        if len(projects) == 1:
            return projects[0]
        if not projects:
            fail("No projects yet. Create one with: atomize project create <title>")
        print_error("No project specified.")
        typer.echo("")
        typer.echo("Specify a project using one of:")
        typer.echo("  1. Use -p/--project option: atomize task add -p 3f2a \"Title\"")
        typer.echo("  2. Set ATOMIZE_PROJECT env var: export ATOMIZE_PROJECT=3f2a")
        typer.echo("")
        typer.echo("List available projects with: atomize project list")
        raise typer.Exit(1)

    exact = session.find_project(ref)
    if exact is not None:
        return exact

    matches = [p for p in projects if p.id.startswith(ref)]
    if not matches:
        fail(f"Project not found: {ref}")
    if len(matches) > 1:
        fail(f"Ambiguous project id {ref!r} matches {len(matches)} projects")
    return matches[0]


def resolve_task(project: Project, task_id: int) -> AtomicTask:
    """Find a task in a project, exiting if it does not exist."""
    task = project.get_task(task_id)
    if task is None:
        fail(f"Task {task_id} not found in {project.title}")
    return task


__all__ = [
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
    "print_separator",
    "print_header",
    "fail",
    "hex_to_rgb",
    "progress_bar",
    "format_task_line",
    "format_project_line",
    "TerminalCelebrator",
    "open_session",
    "resolve_project",
    "resolve_task",
]
