"""Project domain package.

The project aggregate, its derived progress, and the store holding
all projects.
"""

from atomize.domain.project.events import ProjectCreated, ProjectRemoved, StoreCleared
from atomize.domain.project.models import Project, ProjectStatus, ProjectSummary
from atomize.domain.project.progress import (
    compute_points,
    derive_status,
    percent_complete,
    project_percent,
    recompute,
    summarize,
    with_tasks,
)
from atomize.domain.project.store import ProjectStore, filter_projects

__all__ = [
    # Models
    "Project",
    "ProjectStatus",
    "ProjectSummary",
    "ProjectStore",
    # Progress
    "compute_points",
    "derive_status",
    "percent_complete",
    "project_percent",
    "recompute",
    "summarize",
    "with_tasks",
    "filter_projects",
    # Events
    "ProjectCreated",
    "ProjectRemoved",
    "StoreCleared",
]
