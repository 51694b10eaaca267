"""Task domain - the atomic task ledger.

Key Types:
    AtomicTask - A weighted unit of work inside a project
    TaskDraft - A task awaiting an id
    IntelState - Fetch state of the generated tip

Domain Events:
    TaskAdded, TaskEdited, TaskRemoved, TaskCompleted,
    TaskReopened, TaskIntelReceived
"""

from .events import (
    TaskAdded,
    TaskCompleted,
    TaskEdited,
    TaskIntelReceived,
    TaskRemoved,
    TaskReopened,
)
from .models import AtomicTask, IntelState, TaskDraft

__all__ = [
    # Models
    "AtomicTask",
    "TaskDraft",
    "IntelState",
    # Events
    "TaskAdded",
    "TaskEdited",
    "TaskRemoved",
    "TaskCompleted",
    "TaskReopened",
    "TaskIntelReceived",
]
