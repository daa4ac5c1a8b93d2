"""Settings store backed by JSON files in a shared directory."""
import json
import logging
import os
import re
import tempfile
from typing import Any, Optional

from settings_store import SettingsStoreBase, StoreReadError, StoreWriteError


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonFileSettingsStore(SettingsStoreBase):
    """
    Stores each setting in its own JSON file: {directory}/{key}.json.

    A write replaces only its own key's file, through a temporary file and
    os.replace, so readers see either the old or the new value and writing
    one key never touches another.
    """

    def __init__(self, directory: str):
        """
        Args:
            directory: Shared directory holding one file per key (created on first write)
        """
        self.directory = os.path.abspath(directory)

    def _path(self, key: str) -> str:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid setting key: {key!r}")
        return os.path.join(self.directory, f"{key}.json")

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            logging.debug(f"Setting '{key}' not found in {self.directory}")
            return None
        except (OSError, ValueError) as e:
            logging.error(f"Failed to read setting '{key}' from {path}: {e}")
            raise StoreReadError(f"Failed to read '{key}': {e}")

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        try:
            os.makedirs(self.directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(value, handle, indent=2, sort_keys=True)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            logging.error(f"Failed to write setting '{key}' to {path}: {e}")
            raise StoreWriteError(f"Failed to write '{key}': {e}")

        logging.debug(f"Wrote setting '{key}' to {path}")
