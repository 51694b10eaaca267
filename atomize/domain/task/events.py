"""Task domain events.

Immutable records of changes to the tasks of one project. All events
are pure data structures - no I/O, no side effects.
"""

from atomize.domain.shared.events import DomainEvent


class TaskAdded(DomainEvent):
    """Event raised when a task is appended to a project."""

    project_id: str
    task_id: int
    title: str
    point_weight: int


class TaskEdited(DomainEvent):
    """Event raised when a task's title, description or weight changes."""

    project_id: str
    task_id: int


class TaskRemoved(DomainEvent):
    """Event raised when a task is deleted from a project.

    `points_lost` is the XP the project's earned total dropped by
    (zero when the task was not completed).
    """

    project_id: str
    task_id: int
    points_lost: int = 0


class TaskCompleted(DomainEvent):
    """Event raised when a toggle moves a task from open to completed.

    This is the only toggle outcome that warrants a celebration.
    """

    project_id: str
    task_id: int
    points: int


class TaskReopened(DomainEvent):
    """Event raised when a toggle moves a completed task back to open."""

    project_id: str
    task_id: int
    points: int


class TaskIntelReceived(DomainEvent):
    """Event raised when a generated tip is cached onto a task."""

    project_id: str
    task_id: int
    estimated_minutes: int
