"""Inventory session lifecycle.

Consumption per item is ``initial - final`` and is computed once, at close.
A negative consumption (more stock at close than at open) is kept as is;
it points at a counting mistake for someone to review in the report.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from backoffice_core.cash.models import ShiftStatus
from backoffice_core.exceptions import ShiftClosedError, ShiftStateError
from backoffice_core.inventory.models import InventoryItem, InventorySession, ItemCount
from backoffice_core.money import Number, parse_decimal
from backoffice_core.timeutils import clock

logger = logging.getLogger(__name__)


def _count(counts: Mapping[str, Number | None], item_id: str) -> Decimal:
    value = counts.get(item_id)
    if value is None or value == "":
        return Decimal(0)
    return parse_decimal(value)


def open_session(
    items: Iterable[InventoryItem],
    initial_counts: Mapping[str, Number | None],
    opened_by: str,
    now: datetime,
    session_id: str | None = None,
) -> InventorySession:
    """Open a session with the opening stock of every catalog item.

    Args:
        items: Inventory catalog.
        initial_counts: Opening count per item id; missing items count as 0.
        opened_by: Operator name.
        now: Opening time.
        session_id: Optional explicit id.

    Raises:
        AmountParseError: If a count is not a number.

    """
    counts = [ItemCount(item_id=item.id, initial=_count(initial_counts, item.id)) for item in items]
    session = InventorySession(
        id=session_id or str(uuid.uuid4()),
        date=now.date(),
        status=ShiftStatus.OPEN,
        opened_by=opened_by,
        start_time=clock(now),
        counts=counts,
    )
    logger.info("Opened inventory session %s with %d items", session.id, len(counts))
    return session


def close_session(
    session: InventorySession,
    final_counts: Mapping[str, Number | None],
    closed_by: str,
    now: datetime,
) -> InventorySession:
    """Close a session, recording final stock and consumption per item.

    Raises:
        ShiftClosedError: If the session is already CLOSED.
        AmountParseError: If a count is not a number.

    """
    if session.status != ShiftStatus.OPEN:
        raise ShiftClosedError(f"Inventory session {session.id} is already closed")

    counts = []
    negatives = []
    for c in session.counts:
        final = _count(final_counts, c.item_id)
        consumption = c.initial - final
        if consumption < 0:
            negatives.append(c.item_id)
        counts.append(replace(c, final=final, consumption=consumption))

    if negatives:
        logger.warning(
            "Inventory session %s has negative consumption for items: %s",
            session.id,
            ", ".join(negatives),
        )

    logger.info("Closed inventory session %s", session.id)
    return replace(
        session,
        status=ShiftStatus.CLOSED,
        closed_by=closed_by,
        end_time=clock(now),
        counts=counts,
    )


def find_open_session(sessions: Iterable[InventorySession]) -> InventorySession | None:
    """Return the single OPEN session, or None.

    Raises:
        ShiftStateError: If more than one session is OPEN.

    """
    open_sessions = [s for s in sessions if s.status == ShiftStatus.OPEN]
    if len(open_sessions) > 1:
        raise ShiftStateError(
            "More than one inventory session is OPEN: " + ", ".join(s.id for s in open_sessions)
        )
    return open_sessions[0] if open_sessions else None
