"""Storage infrastructure for Atomize.

Persistence for the project store and user settings, using Result
types for explicit error handling.
"""

from atomize.infrastructure.storage.json_storage import JsonStorage
from atomize.infrastructure.storage.repositories import SettingsRepository, StoreRepository

__all__ = [
    "JsonStorage",
    "StoreRepository",
    "SettingsRepository",
]
