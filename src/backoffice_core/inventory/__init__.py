"""Kitchen inventory: catalog items, count sessions and consumption."""

from backoffice_core.inventory.models import (
    InventoryItem,
    InventorySession,
    ItemCount,
    default_items,
)
from backoffice_core.inventory.report import consumption_frame
from backoffice_core.inventory.sessions import close_session, find_open_session, open_session

__all__ = [
    "InventoryItem",
    "InventorySession",
    "ItemCount",
    "close_session",
    "consumption_frame",
    "default_items",
    "find_open_session",
    "open_session",
]
