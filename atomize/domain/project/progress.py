"""Progress derivation for the project aggregate.

All functions in this module are pure - no I/O, no side effects.
Totals and status are a function of the task list alone, so the same
tasks always yield the same numbers regardless of history.
"""

from collections.abc import Iterable

from atomize.domain.task.models import AtomicTask

from .models import Project, ProjectStatus, ProjectSummary


def compute_points(tasks: Iterable[AtomicTask]) -> tuple[int, int]:
    """Sum the total and earned points of a task list.

    Args:
        tasks: Tasks to sum.

    Returns:
        (total_points, earned_points). Earned only counts completed
        tasks, so it can never exceed the total.
    """
    total = 0
    earned = 0
    for task in tasks:
        total += task.points
        earned += task.earned_points
    return total, earned


def derive_status(tasks: list[AtomicTask]) -> ProjectStatus:
    """Derive the status of a project from its tasks.

    Done when there is at least one task and all are completed,
    In Progress when any points are earned, otherwise Not Started.
    """
    if tasks and all(t.is_completed for t in tasks):
        return ProjectStatus.DONE
    _, earned = compute_points(tasks)
    if earned > 0:
        return ProjectStatus.IN_PROGRESS
    return ProjectStatus.NOT_STARTED


def percent_complete(earned_points: int, total_points: int) -> int:
    """Completion percentage, rounded half-up and clamped to 0..100.

    A zero total yields 0 whatever the earned points are.
    """
    if total_points <= 0:
        return 0
    # Integer half-up rounding of 100 * earned / total
    percent = (200 * earned_points + total_points) // (2 * total_points)
    return max(0, min(100, percent))


def with_tasks(project: Project, tasks: list[AtomicTask]) -> Project:
    """Return a copy of the project holding the given tasks with fresh totals.

    Status is left as it was; callers choose whether to re-derive it.
    """
    total, earned = compute_points(tasks)
    return project.model_copy(
        update={"tasks": tasks, "total_points": total, "earned_points": earned}
    )


def recompute(project: Project) -> Project:
    """Return a copy of the project with totals and status re-derived."""
    updated = with_tasks(project, list(project.tasks))
    return updated.model_copy(update={"status": derive_status(updated.tasks)})


def project_percent(project: Project) -> int:
    return percent_complete(project.earned_points, project.total_points)


def summarize(project: Project) -> ProjectSummary:
    """Build the list-display summary of a project."""
    return ProjectSummary(
        id=project.id,
        title=project.title,
        icon=project.icon,
        category=project.category,
        priority=project.priority,
        status=project.status,
        theme_color=project.theme_color,
        total_tasks=len(project.tasks),
        completed_tasks=project.completed_count(),
        earned_points=project.earned_points,
        total_points=project.total_points,
        percent_complete=project_percent(project),
        due_date=project.due_date,
    )
