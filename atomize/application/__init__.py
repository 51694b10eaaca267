"""Application layer for Atomize.

Services are pure functions that combine domain logic without I/O.
The Session ties them together with persistence, leveling and
celebrations.

Services:
    project_service - Project creation, listing and dashboard numbers
    task_service - Task add/edit/delete/toggle and generated tips
    session - Stateful controller used by the interfaces

Example usage:
    >>> from atomize.application import ProjectDraft, Session
    >>>
    >>> session = Session()
    >>> result = session.create_project(ProjectDraft(title="Learn Rust"))
    >>> session.add_task(result.value, "Install toolchain", point_weight=2)
    Ok(value=1)
"""

from atomize.application.celebration import (
    LEVEL_UP_DELAY,
    CelebrationScheduler,
    Celebrator,
    NullCelebrator,
)
from atomize.application.ports import (
    DailyBriefing,
    ProjectMeta,
    RoadmapDraft,
    TaskIntel,
)
from atomize.application.project_service import (
    DashboardStats,
    ProjectDraft,
    build_roadmap_prompt,
    create_project,
    create_project_with_tasks,
    dashboard_stats,
    list_summaries,
    pick_focus_project,
    validate_draft,
)
from atomize.application.session import Session
from atomize.application.task_service import (
    ToggleOutcome,
    add_task,
    apply_intel,
    delete_task,
    edit_task,
    mark_intel_pending,
    reset_intel,
    toggle_task,
)

__all__ = [
    # Project service
    "ProjectDraft",
    "DashboardStats",
    "validate_draft",
    "create_project",
    "create_project_with_tasks",
    "build_roadmap_prompt",
    "list_summaries",
    "pick_focus_project",
    "dashboard_stats",
    # Task service
    "ToggleOutcome",
    "add_task",
    "edit_task",
    "delete_task",
    "toggle_task",
    "mark_intel_pending",
    "apply_intel",
    "reset_intel",
    # Generator contracts
    "ProjectMeta",
    "RoadmapDraft",
    "TaskIntel",
    "DailyBriefing",
    # Session
    "Session",
    "Celebrator",
    "NullCelebrator",
    "CelebrationScheduler",
    "LEVEL_UP_DELAY",
]
