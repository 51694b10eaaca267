"""Project domain models.

The project aggregate owns an ordered list of atomic tasks and carries
the derived totals and status computed from them. Pure data structures
with no I/O or side effects.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from atomize.domain.task.models import AtomicTask
from atomize.domain.types import (
    DEFAULT_COLOR,
    DEFAULT_ICON,
    PLACEHOLDER_TOTAL_POINTS,
    Category,
    Priority,
)


class ProjectStatus(str, Enum):
    """Coarse progress status derived from a project's tasks."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


class Project(BaseModel):
    """A roadmap: one user goal decomposed into weighted tasks.

    `total_points`, `earned_points` and `status` are derived values that
    are recomputed and stored on every task mutation (see progress.py).
    `due_date` is fixed at creation.
    """

    id: str
    title: str = Field(min_length=1)
    description: str = ""
    icon: str = DEFAULT_ICON
    category: Category = Category.PERSONAL
    theme_color: str = DEFAULT_COLOR
    priority: Priority = Priority.MEDIUM
    tasks: list[AtomicTask] = Field(default_factory=list)
    total_points: int = PLACEHOLDER_TOTAL_POINTS
    earned_points: int = 0
    status: ProjectStatus = ProjectStatus.NOT_STARTED
    created_at: datetime
    due_date: datetime
    next_task_id: int = Field(default=1, description="Next id handed to a new task")

    @model_validator(mode="after")
    def _advance_task_counter(self) -> "Project":
        # Stored data from older versions has no counter
        if self.tasks:
            floor = max(t.id for t in self.tasks) + 1
            if self.next_task_id < floor:
                self.next_task_id = floor
        return self

    def get_task(self, task_id: int) -> AtomicTask | None:
        """Get a task by its id."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.is_completed)


class ProjectSummary(BaseModel):
    """Lightweight view of a project for list display."""

    id: str
    title: str
    icon: str
    category: Category
    priority: Priority
    status: ProjectStatus
    theme_color: str
    total_tasks: int = 0
    completed_tasks: int = 0
    earned_points: int = 0
    total_points: int = 0
    percent_complete: int = 0
    due_date: datetime
