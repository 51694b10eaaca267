"""Atomize - goal roadmaps broken into weighted atomic tasks.

Completing tasks earns experience points; every 500 XP is a level.
"""

__version__ = "0.1.0"
