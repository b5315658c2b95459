"""Unified configuration for the back-office core.

This module provides a single, simple settings class used by the storage
layer and the orchestration facade.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from backoffice_core.exceptions import ConfigError

DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRIES = 3


@dataclass
class Settings:
    """Filesystem and remote-store settings.

    Attributes:
        data_root: Root directory for local data.
        remote_url: Base URL of the remote key-value store (PostgREST), or None
            to keep everything local.
        remote_key: Public API key for the remote store.
        timeout: Default HTTP timeout in seconds.
        retries: Number of HTTP retry attempts.

    Directory Structure:
        data_root/
        └── store/      # one JSON file per collection key
    """

    data_root: Path
    remote_url: str | None = None
    remote_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES

    @classmethod
    def from_root(
        cls,
        data_root: str | Path,
        remote_url: str | None = None,
        remote_key: str | None = None,
    ) -> Settings:
        """Create Settings from a root directory.

        Args:
            data_root: Root directory for local data.
            remote_url: Optional remote store URL.
            remote_key: Optional remote store API key.

        Returns:
            Settings instance.

        Examples:
            >>> settings = Settings.from_root("data")
            >>> settings.store_dir
            PosixPath('data/store')

        """
        if isinstance(data_root, str):
            data_root = Path(data_root)
        return cls(data_root=data_root, remote_url=remote_url, remote_key=remote_key)

    @classmethod
    def from_env(cls) -> Settings:
        """Create Settings from BO_* environment variables.

        Reads:
            BO_DATA_ROOT: Local data root (default: "data").
            BO_REMOTE_URL: Remote store base URL (optional).
            BO_REMOTE_KEY: Remote store API key (optional).
            BO_TIMEOUT: HTTP timeout in seconds (default: 30).
            BO_RETRIES: HTTP retries (default: 3).

        Raises:
            ConfigError: If a numeric variable cannot be parsed, or only one of
                BO_REMOTE_URL / BO_REMOTE_KEY is set.

        """
        remote_url = os.environ.get("BO_REMOTE_URL") or None
        remote_key = os.environ.get("BO_REMOTE_KEY") or None
        if bool(remote_url) != bool(remote_key):
            raise ConfigError("BO_REMOTE_URL and BO_REMOTE_KEY must be set together")

        try:
            timeout = float(os.environ.get("BO_TIMEOUT", DEFAULT_TIMEOUT))
            retries = int(os.environ.get("BO_RETRIES", DEFAULT_RETRIES))
        except ValueError as e:
            raise ConfigError(f"Invalid BO_TIMEOUT/BO_RETRIES value: {e}") from e

        return cls(
            data_root=Path(os.environ.get("BO_DATA_ROOT", "data")),
            remote_url=remote_url.rstrip("/") if remote_url else None,
            remote_key=remote_key,
            timeout=timeout,
            retries=retries,
        )

    @property
    def store_dir(self) -> Path:
        """Directory holding one JSON file per collection key."""
        return self.data_root / "store"

    @property
    def remote_enabled(self) -> bool:
        return bool(self.remote_url and self.remote_key)

    def ensure_dirs(self) -> None:
        """Create all directories in the data structure."""
        self.store_dir.mkdir(parents=True, exist_ok=True)
