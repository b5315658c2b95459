"""Local JSON store: one file per key under a directory."""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

from backoffice_core.exceptions import StorageError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStore:
    """Store each key as ``<directory>/<key>.json``.

    Args:
        directory: Target directory; created on first save.

    Examples:
        >>> store = JsonFileStore(Path("data/store"))
        >>> store.save("partners", [{"id": "1", "name": "Socio 1"}])
        >>> store.load("partners", [])
        [{'id': '1', 'name': 'Socio 1'}]

    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise StorageError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"

    def load(self, key: str, default: Any = None) -> Any:
        """Read a key; a missing or corrupted file yields ``default``."""
        path = self.path_for(key)
        if not path.exists():
            return default

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            # Corrupted file is treated as missing
            logger.warning("Ignoring corrupted store file %s: %s", path, e)
            return default

    def save(self, key: str, value: Any) -> None:
        """Write a key atomically (temp file, then rename).

        Raises:
            StorageError: If the file cannot be written.

        """
        path = self.path_for(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError) as e:
            raise StorageError(f"Could not save {key!r} to {path}: {e}") from e
