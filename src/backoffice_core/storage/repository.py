"""Typed collections over a key-value store.

Each collection lives under one ``StoreKey`` and is saved whole on every
mutation. New records are prepended, so collections read newest first.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any, Generic, TypeVar

from backoffice_core.exceptions import NotFoundError
from backoffice_core.storage.base import KeyValueStore
from backoffice_core.storage.codec import from_jsonable, to_jsonable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreKey(str, Enum):
    EMPLOYEES = "employees"
    RECORDS = "records"
    ABSENCES = "absences"
    SANCTIONS = "sanctions"
    HOLIDAYS = "holidays"
    INVENTORY_ITEMS = "inv_items"
    INVENTORY_SESSIONS = "inv_sessions"
    CASH_SHIFTS = "cash_shifts"
    PRODUCTS = "products"
    WALLET = "wallet_tx"
    FIXED_EXPENSES = "fixed_expenses"
    PARTNERS = "partners"
    PROJECTIONS = "projections"
    ROLE_ACCESS = "role_access"
    USERS = "users"
    TASKS = "tasks"
    CHECKLIST_SNAPSHOTS = "checklist_snapshots"
    ADMIN_TASKS = "admin_tasks"


class Repository(Generic[T]):
    """A list of records of type ``T`` stored under one key.

    Records must have an ``id`` attribute. The collection is loaded on
    first access and kept in memory; every mutation writes the whole list
    back to the store.

    Args:
        store: Backing key-value store.
        key: Collection key.
        model: Record dataclass.
        defaults: Factory for the collection used when the key is absent.

    """

    def __init__(
        self,
        store: KeyValueStore,
        key: StoreKey,
        model: type[T],
        defaults: Callable[[], list[T]] | None = None,
    ) -> None:
        self.store = store
        self.key = StoreKey(key)
        self.model = model
        self.defaults = defaults
        self._items: list[T] | None = None

    def _load(self) -> list[T]:
        if self._items is None:
            raw = self.store.load(self.key.value, None)
            if raw is None:
                self._items = list(self.defaults()) if self.defaults else []
            else:
                self._items = from_jsonable(list[self.model], raw)  # type: ignore[name-defined]
            logger.debug("Loaded %d records from %s", len(self._items), self.key.value)
        return self._items

    def _persist(self) -> None:
        self.store.save(self.key.value, to_jsonable(self._load()))

    def all(self) -> list[T]:
        return list(self._load())

    def get(self, record_id: str) -> T:
        """Return the record with ``record_id``.

        Raises:
            NotFoundError: If no record has that id.

        """
        for item in self._load():
            if item.id == record_id:  # type: ignore[attr-defined]
                return item
        raise NotFoundError(f"No record {record_id!r} in {self.key.value}")

    def find(self, record_id: str | None) -> T | None:
        if record_id is None:
            return None
        try:
            return self.get(record_id)
        except NotFoundError:
            return None

    def add(self, item: T) -> T:
        """Insert a record at the front of the collection and save."""
        self._items = [item, *self._load()]
        self._persist()
        return item

    def update(self, item: T) -> T:
        """Replace the record with the same id and save.

        Raises:
            NotFoundError: If no record has that id.

        """
        items = self._load()
        for i, existing in enumerate(items):
            if existing.id == item.id:  # type: ignore[attr-defined]
                items[i] = item
                self._persist()
                return item
        raise NotFoundError(f"No record {item.id!r} in {self.key.value}")  # type: ignore[attr-defined]

    def update_many(self, items: Iterable[T]) -> None:
        """Replace several records by id in a single save."""
        by_id = {item.id: item for item in items}  # type: ignore[attr-defined]
        current = self._load()
        missing = set(by_id) - {i.id for i in current}  # type: ignore[attr-defined]
        if missing:
            raise NotFoundError(f"No records {sorted(missing)} in {self.key.value}")
        self._items = [by_id.get(i.id, i) for i in current]  # type: ignore[attr-defined]
        self._persist()

    def remove(self, record_id: str) -> T:
        """Delete a record and save.

        Raises:
            NotFoundError: If no record has that id.

        """
        item = self.get(record_id)
        self._items = [i for i in self._load() if i is not item]
        self._persist()
        return item

    def replace_all(self, items: Iterable[T]) -> None:
        self._items = list(items)
        self._persist()

    def __len__(self) -> int:
        return len(self._load())


class Document(Generic[T]):
    """A single value (not a list of records) stored under one key."""

    def __init__(
        self,
        store: KeyValueStore,
        key: StoreKey,
        model: Any,
        default: Callable[[], T],
    ) -> None:
        self.store = store
        self.key = StoreKey(key)
        self.model = model
        self.default = default
        self._value: T | None = None

    def get(self) -> T:
        if self._value is None:
            raw = self.store.load(self.key.value, None)
            self._value = self.default() if raw is None else from_jsonable(self.model, raw)
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self.store.save(self.key.value, to_jsonable(value))
