"""Task management CLI commands.

Commands for the task lifecycle inside one project: adding, editing,
deleting, toggling completion and fetching a how-to-start tip.
"""

import asyncio
from typing import Optional

import typer

from atomize.config import get_ai_config
from atomize.domain.project import project_percent
from atomize.domain.shared import Err
from atomize.domain.types import MAX_WEIGHT, MIN_WEIGHT
from atomize.infrastructure.ai import FALLBACK_INTEL, RoadmapClient
from atomize.interfaces.cli.common import (
    fail,
    open_session,
    print_info,
    print_success,
    print_warning,
    progress_bar,
    resolve_project,
    resolve_task,
)

app = typer.Typer(help="Task management commands")

project_option = typer.Option(
    None,
    "--project",
    "-p",
    help="Project id or prefix (or set ATOMIZE_PROJECT env var)",
    envvar="ATOMIZE_PROJECT",
)


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title"),
    weight: int = typer.Option(
        1, "--weight", "-w", min=MIN_WEIGHT, max=MAX_WEIGHT, help="Point weight (1-5)"
    ),
    description: str = typer.Option("", "--description", "-d"),
    project: Optional[str] = project_option,
) -> None:
    """Add a task to a project.

    Example:
        atomize task add -p 3f2a "Write the intro chapter" --weight 3
    """
    session = open_session()
    target = resolve_project(session, project)

    result = session.add_task(target.id, title, description, weight)
    if isinstance(result, Err):
        fail(result.error)
    if result.value is None:
        fail(f"Project not found: {target.id}")

    print_success(f"Added task {result.value}: {title.strip()} (+{weight * 100} XP)")


@app.command("edit")
def edit(
    task_id: int = typer.Argument(..., help="Task id"),
    title: Optional[str] = typer.Option(None, "--title", "-t"),
    weight: Optional[int] = typer.Option(
        None, "--weight", "-w", min=MIN_WEIGHT, max=MAX_WEIGHT, help="Point weight (1-5)"
    ),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    project: Optional[str] = project_option,
) -> None:
    """Edit a task. Fields that are not given keep their value."""
    session = open_session()
    target = resolve_project(session, project)
    task = resolve_task(target, task_id)

    result = session.edit_task(
        target.id,
        task_id,
        title if title is not None else task.title,
        description if description is not None else task.description,
        weight if weight is not None else task.point_weight,
    )
    if isinstance(result, Err):
        fail(result.error)

    print_success(f"Updated task {task_id}")


@app.command("delete")
def delete(
    task_id: int = typer.Argument(..., help="Task id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    project: Optional[str] = project_option,
) -> None:
    """Delete a task."""
    session = open_session()
    target = resolve_project(session, project)
    task = resolve_task(target, task_id)

    if not yes:
        typer.confirm(f"Delete task {task.title!r}?", abort=True)

    if not session.delete_task(target.id, task_id):
        fail(f"Task {task_id} not found in {target.title}")
    print_success(f"Deleted task: {task.title}")


@app.command("toggle")
def toggle(
    task_id: int = typer.Argument(..., help="Task id"),
    project: Optional[str] = project_option,
) -> None:
    """Mark a task done, or reopen a completed one."""
    session = open_session()
    target = resolve_project(session, project)
    task = resolve_task(target, task_id)

    completed = session.toggle_task(target.id, task_id)
    updated = session.find_project(target.id)

    if completed:
        print_success(f"Completed: {task.title} (+{task.points} XP)")
    else:
        print_info(f"Reopened: {task.title} (-{task.points} XP)")

    if updated is not None and not session.settings.zen_mode:
        percent = project_percent(updated)
        typer.echo(f"{updated.title}: {progress_bar(percent)} {percent}%  [{updated.status.value}]")


@app.command("intel")
def intel(
    task_id: int = typer.Argument(..., help="Task id"),
    project: Optional[str] = project_option,
) -> None:
    """Show a how-to-start tip for a task, generating it on first use."""
    session = open_session()
    target = resolve_project(session, project)
    task = resolve_task(target, task_id)

    if not task.has_intel():
        print_info("Requesting tip...")
        client = RoadmapClient(get_ai_config())
        fetched = asyncio.run(
            session.fetch_task_intel(
                target.id,
                task_id,
                client,
                on_failure=lambda error: print_warning(f"Tip unavailable: {error}"),
            )
        )
        if fetched is None:
            fail(f"Task {task_id} not found in {target.title}")
        task = fetched

    typer.echo(task.title)
    if task.has_intel():
        typer.echo(f"  Tip: {task.tip}")
        typer.echo(f"  Estimated time: ~{task.estimated_minutes} min")
    else:
        typer.echo(f"  Tip: {FALLBACK_INTEL.tip}")
        typer.echo(f"  Estimated time: ~{FALLBACK_INTEL.minutes} min")
