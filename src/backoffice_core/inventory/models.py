"""Inventory entities: catalog items and count sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from backoffice_core.cash.models import ShiftStatus
from backoffice_core.inventory.config import DEFAULT_ITEMS


@dataclass(frozen=True)
class InventoryItem:
    id: str
    name: str
    unit: str


@dataclass(frozen=True)
class ItemCount:
    """Stock of one item for one session.

    ``final`` and ``consumption`` stay None until the session is closed.
    """

    item_id: str
    initial: Decimal
    final: Decimal | None = None
    consumption: Decimal | None = None


@dataclass
class InventorySession:
    """An opening count followed, at close, by a closing count."""

    id: str
    date: date
    status: ShiftStatus
    opened_by: str
    start_time: str | None = None
    closed_by: str | None = None
    end_time: str | None = None
    counts: list[ItemCount] = field(default_factory=list)

    def count_for(self, item_id: str) -> ItemCount | None:
        for c in self.counts:
            if c.item_id == item_id:
                return c
        return None


def default_items() -> list[InventoryItem]:
    return [InventoryItem(id=i, name=name, unit=unit) for i, name, unit in DEFAULT_ITEMS]
