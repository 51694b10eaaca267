"""CLI command groups for Atomize.

Command groups:
- project: Project management (create, list, show, delete)
- task: Task lifecycle inside a project (add, edit, delete, toggle, intel)

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from atomize.interfaces.cli.commands import project, task

__all__ = ["project", "task"]
