"""Project domain events.

Immutable records of changes to the project store. All events are pure
data structures - no I/O, no side effects.
"""

from atomize.domain.shared.events import DomainEvent


class ProjectCreated(DomainEvent):
    """Event raised when a project is added to the store."""

    project_id: str
    title: str
    task_count: int = 0
    generated: bool = False


class ProjectRemoved(DomainEvent):
    """Event raised when a single project is deleted."""

    project_id: str
    points_lost: int = 0


class StoreCleared(DomainEvent):
    """Event raised when every project is wiped by a full reset."""

    projects_removed: int
