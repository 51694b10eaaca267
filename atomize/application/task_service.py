"""Task application service.

Task operations on a single project aggregate. Each returns a new
project with totals recomputed; the input is never modified. Operations
that target a missing task are no-ops: they return the project
unchanged and no event. All functions are pure - no I/O, no side effects.
"""

from pydantic import BaseModel

from atomize.domain.project import Project, ProjectStatus, derive_status, with_tasks
from atomize.domain.shared import Err, Ok, Result
from atomize.domain.task import (
    AtomicTask,
    IntelState,
    TaskAdded,
    TaskCompleted,
    TaskEdited,
    TaskIntelReceived,
    TaskRemoved,
    TaskReopened,
)
from atomize.domain.types import MAX_WEIGHT, MIN_WEIGHT


class ToggleOutcome(BaseModel):
    """Result of flipping a task's completion."""

    project: Project
    event: TaskCompleted | TaskReopened | None = None

    @property
    def completed(self) -> bool:
        """True only when this toggle moved the task to completed."""
        return isinstance(self.event, TaskCompleted)


def _validate_task_input(title: str, point_weight: int) -> Result[str, str]:
    clean = title.strip()
    if not clean:
        return Err("Task title cannot be empty")
    if not MIN_WEIGHT <= point_weight <= MAX_WEIGHT:
        return Err(f"Point weight must be between {MIN_WEIGHT} and {MAX_WEIGHT}")
    return Ok(clean)


def _status_after_save(project: Project, tasks: list[AtomicTask]) -> ProjectStatus:
    """Status once a task has been added or edited.

    Not Started is promoted to In Progress. Done only reopens when an
    open task now exists. Any other status is kept.
    """
    if project.status == ProjectStatus.NOT_STARTED:
        return ProjectStatus.IN_PROGRESS
    if project.status == ProjectStatus.DONE and not all(t.is_completed for t in tasks):
        return ProjectStatus.IN_PROGRESS
    return project.status


def add_task(
    project: Project,
    title: str,
    description: str = "",
    point_weight: int = 1,
) -> Result[tuple[Project, TaskAdded], str]:
    """Append a new open task to the project.

    A Not Started project moves straight to In Progress, even though no
    points have been earned yet.

    Args:
        project: The project to extend.
        title: Task title (must not be blank).
        description: Optional free text.
        point_weight: Weight 1..5.

    Returns:
        Ok((updated_project, TaskAdded)), or Err(str) if the input is invalid.
    """
    checked = _validate_task_input(title, point_weight)
    if isinstance(checked, Err):
        return checked

    task = AtomicTask(
        id=project.next_task_id,
        title=checked.value,
        description=description.strip(),
        point_weight=point_weight,
    )
    updated = with_tasks(project, [*project.tasks, task])
    updated = updated.model_copy(
        update={
            "status": _status_after_save(project, updated.tasks),
            "next_task_id": project.next_task_id + 1,
        }
    )

    event = TaskAdded(
        project_id=project.id,
        task_id=task.id,
        title=task.title,
        point_weight=task.point_weight,
    )
    return Ok((updated, event))


def edit_task(
    project: Project,
    task_id: int,
    title: str,
    description: str = "",
    point_weight: int = 1,
) -> Result[tuple[Project, TaskEdited | None], str]:
    """Replace a task's title, description and weight.

    Completion state, position and cached tip are kept. Saving a task
    promotes a Not Started project to In Progress, the same as adding.

    Returns:
        Ok((updated_project, TaskEdited)), Ok((project, None)) when the
        task does not exist, or Err(str) if the input is invalid.
    """
    checked = _validate_task_input(title, point_weight)
    if isinstance(checked, Err):
        return checked

    if project.get_task(task_id) is None:
        return Ok((project, None))

    tasks = [
        t.model_copy(
            update={
                "title": checked.value,
                "description": description.strip(),
                "point_weight": point_weight,
            }
        )
        if t.id == task_id
        else t
        for t in project.tasks
    ]
    updated = with_tasks(project, tasks)
    updated = updated.model_copy(update={"status": _status_after_save(project, tasks)})
    return Ok((updated, TaskEdited(project_id=project.id, task_id=task_id)))


def delete_task(project: Project, task_id: int) -> tuple[Project, TaskRemoved | None]:
    """Remove a task, keeping the order of the rest.

    Returns:
        (updated_project, TaskRemoved), or (project, None) if the task
        does not exist.
    """
    task = project.get_task(task_id)
    if task is None:
        return project, None

    tasks = [t for t in project.tasks if t.id != task_id]
    updated = with_tasks(project, tasks)
    updated = updated.model_copy(update={"status": derive_status(tasks)})

    event = TaskRemoved(
        project_id=project.id,
        task_id=task_id,
        points_lost=task.earned_points,
    )
    return updated, event


def toggle_task(project: Project, task_id: int) -> ToggleOutcome:
    """Flip a task between open and completed.

    Totals and status are fully re-derived from the task list.

    Returns:
        ToggleOutcome whose `completed` flag tells the caller whether a
        celebration is due. A missing task yields the project unchanged
        and no event.
    """
    task = project.get_task(task_id)
    if task is None:
        return ToggleOutcome(project=project)

    flipped = task.model_copy(update={"is_completed": not task.is_completed})
    tasks = [flipped if t.id == task_id else t for t in project.tasks]
    updated = with_tasks(project, tasks)
    updated = updated.model_copy(update={"status": derive_status(tasks)})

    event: TaskCompleted | TaskReopened
    if flipped.is_completed:
        event = TaskCompleted(project_id=project.id, task_id=task_id, points=task.points)
    else:
        event = TaskReopened(project_id=project.id, task_id=task_id, points=task.points)
    return ToggleOutcome(project=updated, event=event)


# =============================================================================
# Generated Tips
# =============================================================================


def _replace_task(project: Project, task: AtomicTask) -> Project:
    return project.model_copy(
        update={"tasks": [task if t.id == task.id else t for t in project.tasks]}
    )


def mark_intel_pending(project: Project, task_id: int) -> tuple[Project, bool]:
    """Flag a task's tip as being fetched.

    Returns:
        (project, started). `started` is False when the task is missing
        or its tip is already pending or present, so no second request
        should be made.
    """
    task = project.get_task(task_id)
    if task is None or task.intel_state != IntelState.UNFETCHED:
        return project, False
    pending = task.model_copy(update={"intel_state": IntelState.PENDING})
    return _replace_task(project, pending), True


def apply_intel(
    project: Project,
    task_id: int,
    tip: str,
    estimated_minutes: int,
) -> tuple[Project, TaskIntelReceived | None]:
    """Cache a generated tip onto a task permanently.

    A tip that is already present is never overwritten.
    """
    task = project.get_task(task_id)
    if task is None or task.intel_state == IntelState.PRESENT:
        return project, None

    enriched = task.model_copy(
        update={
            "intel_state": IntelState.PRESENT,
            "tip": tip.strip(),
            "estimated_minutes": max(1, estimated_minutes),
        }
    )
    event = TaskIntelReceived(
        project_id=project.id,
        task_id=task_id,
        estimated_minutes=enriched.estimated_minutes or 0,
    )
    return _replace_task(project, enriched), event


def reset_intel(project: Project, task_id: int) -> Project:
    """Return a pending tip to unfetched after a failed request."""
    task = project.get_task(task_id)
    if task is None or task.intel_state != IntelState.PENDING:
        return project
    return _replace_task(project, task.model_copy(update={"intel_state": IntelState.UNFETCHED}))
