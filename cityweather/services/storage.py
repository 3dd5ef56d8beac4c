"""File-backed key/value store in the spirit of browser local storage."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class LocalStorage:
    """Stores one JSON document per key under a directory."""

    def __init__(self, storage_dir: Path | str = ".cityweather"):
        self.storage_dir = Path(storage_dir)
        self._enabled = True

        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            # Test write permission
            test_file = self.storage_dir / ".test"
            test_file.touch()
            test_file.unlink()
        except (PermissionError, OSError) as e:
            logger.warning(f"Storage disabled - cannot write to {storage_dir}: {e}")
            self._enabled = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _get_path(self, key: str) -> Path:
        """Get file path for a key."""
        safe_key = "".join(c if c.isalnum() else "_" for c in key)
        return self.storage_dir / f"{safe_key}.json"

    def get_item(self, key: str) -> Any | None:
        """Return the stored value for a key, or None if absent or unreadable."""
        if not self._enabled:
            return None

        path = self._get_path(key)
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to read stored {key}: {e}")
            return None

    def set_item(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value, replacing any previous one."""
        if not self._enabled:
            return

        path = self._get_path(key)
        tmp_path = path.with_suffix(".tmp")

        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(value, f)
            tmp_path.replace(path)
            logger.debug(f"Stored {key}")

        except (TypeError, ValueError, OSError) as e:
            tmp_path.unlink(missing_ok=True)
            logger.warning(f"Failed to store {key}: {e}")

    def remove_item(self, key: str) -> None:
        """Remove a specific key."""
        self._get_path(key).unlink(missing_ok=True)

    def clear(self) -> None:
        """Remove all stored keys."""
        for path in self.storage_dir.glob("*.json"):
            path.unlink(missing_ok=True)
