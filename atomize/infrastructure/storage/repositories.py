"""Repository implementations for the project store and user settings.

Both documents live in the data directory. A missing file is a fresh
start, not an error; a file that exists but cannot be parsed is an
Err so the caller can decide how loudly to fall back.
"""

import logging
from pathlib import Path

from pydantic import ValidationError

from atomize.config import SETTINGS_FILENAME, STORE_FILENAME, UserSettings, get_data_dir
from atomize.domain.project import ProjectStore
from atomize.domain.shared.result import Err, Ok, Result
from atomize.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)


class StoreRepository:
    """Persistence for the whole project store.

    Wraps roadmaps.json with Result-based error handling.
    """

    def __init__(self, data_dir: Path | None = None, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            data_dir: Directory holding roadmaps.json (defaults to the data dir).
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self.path = (data_dir or get_data_dir()) / STORE_FILENAME
        self._storage = storage or JsonStorage()

    def load(self) -> Result[ProjectStore, str]:
        """Load the project store.

        Returns:
            Ok(ProjectStore); an empty store when the file does not exist.
            Err(str) if the file exists but is unreadable or invalid.
        """
        if not self.path.exists():
            return Ok(ProjectStore())

        result = self._storage.load_json(self.path)
        if isinstance(result, Err):
            return result

        try:
            store = ProjectStore.model_validate(result.value)
        except ValidationError as e:
            return Err(f"Invalid project data in {self.path}: {e}")

        logger.debug(f"Loaded {store.count()} projects from {self.path}")
        return Ok(store)

    def save(self, store: ProjectStore) -> Result[None, str]:
        """Save the entire project store.

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        return self._storage.save_json(self.path, store.model_dump(mode="json"))

    def exists(self) -> bool:
        return self.path.exists()


class SettingsRepository:
    """Persistence for user settings (settings.json)."""

    def __init__(self, data_dir: Path | None = None, storage: JsonStorage | None = None) -> None:
        self.path = (data_dir or get_data_dir()) / SETTINGS_FILENAME
        self._storage = storage or JsonStorage()

    def load(self) -> Result[UserSettings, str]:
        """Load user settings.

        Returns:
            Ok(UserSettings); defaults when the file does not exist.
            Err(str) if the file exists but is unreadable or invalid.
        """
        if not self.path.exists():
            return Ok(UserSettings())

        result = self._storage.load_json(self.path)
        if isinstance(result, Err):
            return result

        try:
            return Ok(UserSettings.model_validate(result.value))
        except ValidationError as e:
            return Err(f"Invalid settings in {self.path}: {e}")

    def save(self, settings: UserSettings) -> Result[None, str]:
        return self._storage.save_json(self.path, settings.model_dump(mode="json"))
