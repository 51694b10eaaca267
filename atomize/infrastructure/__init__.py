"""Infrastructure layer for Atomize.

I/O lives here, wrapped in Result types for explicit error handling.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - StoreRepository: Project store persistence
        - SettingsRepository: User settings persistence

    AI:
        - RoadmapClient: Roadmap, tip and briefing generation
"""

from atomize.infrastructure.ai import RoadmapClient
from atomize.infrastructure.storage import (
    JsonStorage,
    SettingsRepository,
    StoreRepository,
)

__all__ = [
    # Storage
    "JsonStorage",
    "StoreRepository",
    "SettingsRepository",
    # AI
    "RoadmapClient",
]
