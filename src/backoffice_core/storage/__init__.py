"""Persistence: key-value stores, JSON codec and typed repositories.

Example:
    >>> from backoffice_core.config import Settings
    >>> from backoffice_core.storage import build_store
    >>>
    >>> store = build_store(Settings.from_root("data"))
    >>> store.save("partners", [])
"""

from __future__ import annotations

import logging

from backoffice_core.config import Settings
from backoffice_core.storage.base import KeyValueStore, MemoryStore
from backoffice_core.storage.codec import from_jsonable, to_jsonable
from backoffice_core.storage.json_store import JsonFileStore
from backoffice_core.storage.remote import MirroredStore, RemoteStore, make_session
from backoffice_core.storage.repository import Document, Repository, StoreKey

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> KeyValueStore:
    """Build the store described by ``settings``.

    Returns:
        A ``JsonFileStore`` under ``settings.store_dir``, mirrored to a
        ``RemoteStore`` when a remote URL and key are configured.

    """
    local = JsonFileStore(settings.store_dir)
    if not settings.remote_enabled:
        return local

    logger.info("Using remote store at %s", settings.remote_url)
    remote = RemoteStore(
        settings.remote_url,
        settings.remote_key,
        session=make_session(timeout=settings.timeout, retries=settings.retries),
    )
    return MirroredStore(remote, local)


__all__ = [
    "Document",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "MirroredStore",
    "RemoteStore",
    "Repository",
    "StoreKey",
    "build_store",
    "from_jsonable",
    "make_session",
    "to_jsonable",
]
