"""
Preference Store Module

Small durable key-value store backed by a JSON file. Used for the
bearer token and the theme flag.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union


logger = logging.getLogger(__name__)


class PreferenceStore:
    """
    JSON-file backed key-value store.

    Writes replace the whole file atomically. Writers inside one process
    are serialized; across processes the last writer wins.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the preference store.

        Args:
            path: Location of the JSON file (created on first write).
        """
        self.path = Path(path)
        self._lock = threading.Lock()
        logger.debug(f"PreferenceStore initialized (path: {self.path})")

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        if not isinstance(data, dict):
            raise ValueError(f"Preference file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=".prefs-", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def get(self, key: str) -> Optional[Any]:
        """
        Read a value.

        Returns:
            The stored value, or None if the key is absent.
        """
        return self._load().get(key)

    def set(self, key: str, value: Any) -> bool:
        """
        Persist a value.

        Returns:
            True if the write succeeded, False otherwise.
        """
        with self._lock:
            try:
                data = self._load()
                data[key] = value
                self._write(data)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to write preference '{key}': {e}")
                return False

        logger.debug(f"Preference '{key}' saved")
        return True

    def remove(self, key: str) -> bool:
        """
        Remove a value. Removing an absent key succeeds.

        Returns:
            True if the removal succeeded, False otherwise.
        """
        with self._lock:
            try:
                data = self._load()
                if key not in data:
                    return True
                del data[key]
                self._write(data)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to remove preference '{key}': {e}")
                return False

        logger.debug(f"Preference '{key}' removed")
        return True
