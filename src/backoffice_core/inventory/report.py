"""Consumption report for a closed inventory session."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from backoffice_core.inventory.models import InventoryItem, InventorySession

CONSUMPTION_COLUMNS = ["item_id", "name", "unit", "initial", "final", "consumption", "negative"]


def consumption_frame(
    session: InventorySession, items: Iterable[InventoryItem]
) -> pd.DataFrame:
    """Build one row per counted item.

    Items no longer in the catalog are reported with their id as the name.
    ``negative`` flags rows where stock grew during the session; such rows
    are kept for review, never dropped.

    Returns:
        DataFrame with CONSUMPTION_COLUMNS; counts as floats (NaN while the
        session is OPEN).

    """
    catalog = {item.id: item for item in items}

    rows = []
    for c in session.counts:
        item = catalog.get(c.item_id)
        rows.append(
            {
                "item_id": c.item_id,
                "name": item.name if item else c.item_id,
                "unit": item.unit if item else "",
                "initial": float(c.initial),
                "final": float(c.final) if c.final is not None else float("nan"),
                "consumption": (
                    float(c.consumption) if c.consumption is not None else float("nan")
                ),
            }
        )

    df = pd.DataFrame(rows, columns=CONSUMPTION_COLUMNS[:-1])
    df["negative"] = df["consumption"] < 0
    return df
