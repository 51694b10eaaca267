"""JSON file storage with Result-based error handling.

A thin wrapper around file I/O for JSON documents, returning Result
types instead of raising exceptions.
"""

import json
import os
from pathlib import Path
from typing import Any

from atomize.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Low-level JSON document I/O.

    No domain logic lives here. Writes go to a sibling temporary file
    which then replaces the target, so a crash mid-write leaves the
    previous document intact.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("roadmaps.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[dict[str, Any], str]:
        """Load a JSON object from a file.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(dict) if successful, Err(str) if the file is missing,
            unreadable or does not hold a JSON object.
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")

            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                return Err(f"Expected a JSON object in {path}, got {type(data).__name__}")
            return Ok(data)

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except UnicodeDecodeError as e:
            return Err(f"Invalid encoding in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, str]:
        """Write a JSON object to a file, replacing it atomically.

        Args:
            path: Destination file.
            data: Dictionary to serialize.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        tmp_path = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            content = json.dumps(data, indent=indent, ensure_ascii=False)
            tmp_path.write_text(content, encoding="utf-8")
            os.replace(tmp_path, path)
            return Ok(None)

        except TypeError as e:
            return Err(f"Data not JSON serializable: {e}")
        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")
