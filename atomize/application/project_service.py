"""Project application service.

Builds new project aggregates from a creation draft and derives
store-wide views. All functions are pure - no I/O, no side effects.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from pydantic import BaseModel

from atomize.domain.leveling import LevelProgress, level_progress
from atomize.domain.project import (
    Project,
    ProjectCreated,
    ProjectStatus,
    ProjectStore,
    ProjectSummary,
    filter_projects,
    summarize,
    with_tasks,
)
from atomize.domain.shared import Err, Ok, Result
from atomize.domain.task import AtomicTask, TaskDraft
from atomize.domain.types import (
    DEFAULT_COLOR,
    DEFAULT_DURATION_DAYS,
    DEFAULT_ICON,
    PLACEHOLDER_TOTAL_POINTS,
    THEME_COLORS,
    Category,
    Priority,
    Weight,
)


class ProjectDraft(BaseModel):
    """Everything the user fills in before a project exists."""

    title: str
    description: str = ""
    icon: str = DEFAULT_ICON
    category: Category = Category.PERSONAL
    theme_color: str = DEFAULT_COLOR
    priority: Priority = Priority.MEDIUM
    duration_days: int = DEFAULT_DURATION_DAYS


class DashboardStats(BaseModel):
    """Store-wide numbers for the home screen."""

    project_count: int
    tasks_done: int
    tasks_open: int
    total_xp: int
    level: LevelProgress
    focus_project_id: str | None = None


def new_project_id() -> str:
    """Collision-resistant project id."""
    return uuid4().hex


def validate_draft(draft: ProjectDraft) -> Result[ProjectDraft, str]:
    """Check a draft before anything is created.

    Returns:
        Ok(draft) with the title and description trimmed, or
        Err(str) describing the first problem found.
    """
    title = draft.title.strip()
    if not title:
        return Err("Project title cannot be empty")

    if draft.duration_days < 1:
        return Err("Duration must be at least one day")

    if draft.theme_color not in THEME_COLORS:
        return Err(
            f"Unknown theme color {draft.theme_color!r} "
            f"(choose one of {', '.join(THEME_COLORS)})"
        )

    if not draft.icon.strip():
        return Err("Icon cannot be empty")

    return Ok(draft.model_copy(update={"title": title, "description": draft.description.strip()}))


def _new_project(draft: ProjectDraft, now: datetime, project_id: str | None) -> Project:
    return Project(
        id=project_id or new_project_id(),
        title=draft.title,
        description=draft.description,
        icon=draft.icon,
        category=draft.category,
        theme_color=draft.theme_color,
        priority=draft.priority,
        created_at=now,
        due_date=now + timedelta(days=draft.duration_days),
        total_points=PLACEHOLDER_TOTAL_POINTS,
    )


def create_project(
    draft: ProjectDraft,
    now: datetime | None = None,
    project_id: str | None = None,
) -> Result[tuple[Project, ProjectCreated], str]:
    """Create an empty project from a draft.

    The project starts with no tasks and a placeholder total until the
    first task is added.

    Args:
        draft: Creation draft.
        now: Creation time (defaults to the current UTC time).
        project_id: Explicit id; a fresh one is generated when omitted.

    Returns:
        Ok((Project, ProjectCreated)) on success, or
        Err(str) with the validation error.
    """
    checked = validate_draft(draft)
    if isinstance(checked, Err):
        return checked

    project = _new_project(checked.value, now or datetime.now(UTC), project_id)

    event = ProjectCreated(project_id=project.id, title=project.title)
    return Ok((project, event))


def create_project_with_tasks(
    draft: ProjectDraft,
    tasks: list[TaskDraft],
    now: datetime | None = None,
    project_id: str | None = None,
    fallback_description: str = "",
) -> Result[tuple[Project, ProjectCreated], str]:
    """Create a project seeded with generated tasks.

    Tasks are numbered 1..n in the order given and the totals are
    computed from them rather than from the placeholder.

    Args:
        draft: Creation draft.
        tasks: Task drafts, typically from the roadmap generator.
        now: Creation time (defaults to the current UTC time).
        project_id: Explicit id; a fresh one is generated when omitted.
        fallback_description: Used when the draft has no description.

    Returns:
        Ok((Project, ProjectCreated)) on success, or
        Err(str) with the validation error.
    """
    checked = validate_draft(draft)
    if isinstance(checked, Err):
        return checked

    valid = checked.value
    if not valid.description and fallback_description:
        valid = valid.model_copy(update={"description": fallback_description.strip()})

    seeded: list[AtomicTask] = []
    for position, task in enumerate(tasks, start=1):
        title = task.title.strip()
        if not title:
            continue
        seeded.append(
            AtomicTask(
                id=position,
                title=title,
                point_weight=Weight.clamp(task.point_weight).value,
                description=task.description.strip(),
            )
        )

    project = _new_project(valid, now or datetime.now(UTC), project_id)
    project = with_tasks(project, seeded)
    project = project.model_copy(update={"next_task_id": len(tasks) + 1})

    event = ProjectCreated(
        project_id=project.id,
        title=project.title,
        task_count=len(seeded),
        generated=True,
    )
    return Ok((project, event))


def build_roadmap_prompt(draft: ProjectDraft) -> str:
    """Describe the goal for the roadmap generator."""
    return (
        f"Goal: {draft.title}. Description: {draft.description}. "
        f"Category: {draft.category.value}. Priority: {draft.priority.value}. "
        f"Duration: {draft.duration_days} days."
    )


def list_summaries(
    store: ProjectStore,
    status: ProjectStatus | None = None,
    category: str | None = None,
    query: str = "",
) -> list[ProjectSummary]:
    """Summaries of the projects that pass the list filters."""
    return [summarize(p) for p in filter_projects(store, status, category, query)]


def pick_focus_project(store: ProjectStore) -> Project | None:
    """The project to put front and centre.

    First unfinished High priority project, else the newest project.
    """
    for project in store.projects:
        if project.priority == Priority.HIGH and project.status != ProjectStatus.DONE:
            return project
    return store.projects[0] if store.projects else None


def dashboard_stats(store: ProjectStore) -> DashboardStats:
    """Calculate the home screen numbers for a store."""
    done = store.total_completed_tasks()
    total_tasks = sum(len(p.tasks) for p in store.projects)
    total_xp = store.total_earned_points()
    focus = pick_focus_project(store)

    return DashboardStats(
        project_count=store.count(),
        tasks_done=done,
        tasks_open=total_tasks - done,
        total_xp=total_xp,
        level=level_progress(total_xp),
        focus_project_id=focus.id if focus else None,
    )
