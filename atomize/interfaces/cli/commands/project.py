"""Project management CLI commands.

Commands for creating, listing, inspecting and deleting projects.
"""

import asyncio
from typing import Optional

import typer

from atomize.application import ProjectDraft
from atomize.config import get_ai_config
from atomize.domain.project import ProjectStatus, filter_projects, project_percent
from atomize.domain.shared import Err
from atomize.domain.types import (
    DEFAULT_DURATION_DAYS,
    DEFAULT_ICON,
    THEME_COLORS,
    Category,
    Priority,
)
from atomize.infrastructure.ai import RoadmapClient
from atomize.interfaces.cli.common import (
    fail,
    format_project_line,
    format_task_line,
    open_session,
    print_header,
    print_info,
    print_success,
    print_warning,
    progress_bar,
    resolve_project,
)

app = typer.Typer(help="Project management commands")

COLOR_NAMES = dict(
    zip(("purple", "emerald", "blue", "amber", "pink", "red", "black"), THEME_COLORS)
)


def _parse_color(value: str) -> str:
    """Accept a palette name or one of the palette hex codes."""
    color = COLOR_NAMES.get(value.lower(), value.lower())
    if color not in THEME_COLORS:
        fail(f"Unknown color {value!r} (choose one of {', '.join(COLOR_NAMES)})")
    return color


# =============================================================================
# Commands
# =============================================================================


@app.command("create")
def create(
    title: str = typer.Argument(..., help="What you want to achieve"),
    description: str = typer.Option("", "--description", "-d", help="More detail on the goal"),
    icon: str = typer.Option(DEFAULT_ICON, "--icon", help="Emoji shown next to the title"),
    category: Category = typer.Option(Category.PERSONAL, "--category", "-c"),
    color: str = typer.Option("blue", "--color", help="Theme color name or hex"),
    priority: Priority = typer.Option(Priority.MEDIUM, "--priority"),
    days: int = typer.Option(DEFAULT_DURATION_DAYS, "--days", help="Days until the due date"),
    generate: bool = typer.Option(
        False, "--generate", "-g", help="Let the generator plan the first tasks"
    ),
    fallback: bool = typer.Option(
        False, "--fallback", help="Create an empty project if generation fails"
    ),
) -> None:
    """Create a new project.

    Without --generate the project starts empty. With --generate the
    configured model proposes the first five to seven tasks.

    Example:
        atomize project create "Learn Rust" --category Programming --generate
    """
    draft = ProjectDraft(
        title=title,
        description=description,
        icon=icon,
        category=category,
        theme_color=_parse_color(color),
        priority=priority,
        duration_days=days,
    )
    session = open_session()

    if generate:
        client = RoadmapClient(get_ai_config())
        print_info("Generating roadmap...")
        result = asyncio.run(
            session.generate_project(
                draft,
                client,
                on_failure=lambda error: print_warning(f"Generation failed: {error}"),
                fallback_to_manual=fallback,
            )
        )
    else:
        result = session.create_project(draft)

    if isinstance(result, Err):
        fail(result.error)

    project = session.find_project(result.value)
    if project is None:
        fail("Project disappeared after creation")

    print_success(f"Created project: {project.icon} {project.title} ({project.id[:8]})")
    for task in project.tasks:
        typer.echo(format_task_line(task))
    if not project.tasks:
        typer.echo("")
        typer.echo("Next steps:")
        typer.echo(f'  atomize task add -p {project.id[:8]} "First step"')


@app.command("list")
def list_projects(
    status: Optional[ProjectStatus] = typer.Option(None, "--status", "-s", help="Filter by status"),
    category: Optional[Category] = typer.Option(None, "--category", "-c", help="Filter by category"),
    search: str = typer.Option("", "--search", "-q", help="Search in titles"),
) -> None:
    """List projects, newest first."""
    session = open_session()

    projects = filter_projects(
        session.store,
        status=status,
        category=category.value if category else None,
        query=search,
    )

    if not projects:
        if session.store.count():
            typer.echo("No projects match the filters.")
        else:
            typer.echo("No projects yet. Create one with: atomize project create <title>")
        return

    for project in projects:
        typer.echo(format_project_line(project, project_percent(project)))


@app.command("show")
def show(
    project_ref: str = typer.Argument(..., help="Project id or unique prefix"),
) -> None:
    """Show a project with its tasks."""
    session = open_session()
    project = resolve_project(session, project_ref)
    percent = project_percent(project)

    print_header(f"{project.icon} {project.title}")
    if project.description:
        typer.echo(project.description)
        typer.echo("")
    typer.echo(f"Id:       {project.id}")
    typer.echo(f"Status:   {project.status.value}")
    typer.echo(f"Priority: {project.priority.value}")
    typer.echo(f"Category: {project.category.value}")
    typer.echo(f"Due:      {project.due_date:%Y-%m-%d}")
    typer.echo(
        f"Progress: {progress_bar(percent)} {percent}% "
        f"({project.earned_points}/{project.total_points} XP)"
    )
    typer.echo("")

    if not project.tasks:
        typer.echo("No tasks yet.")
        return

    for task in project.tasks:
        typer.echo(format_task_line(task))
        if task.tip:
            typer.echo(f"        Tip: {task.tip} (~{task.estimated_minutes} min)")


@app.command("delete")
def delete(
    project_ref: str = typer.Argument(..., help="Project id or unique prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project and all its tasks."""
    session = open_session()
    project = resolve_project(session, project_ref)

    if not yes:
        typer.confirm(f"Delete {project.title!r} and its {len(project.tasks)} tasks?", abort=True)

    event = session.remove_project(project.id)
    if event is None:
        fail(f"Project not found: {project_ref}")

    print_success(f"Deleted project: {project.title}")
    if event.points_lost:
        typer.echo(f"  {event.points_lost} XP removed from your total")
