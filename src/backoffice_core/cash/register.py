"""Cash shift lifecycle: open, record movements, close.

Functions here never mutate their input; each returns an updated copy of
the shift. Keeping a single OPEN shift across the collection is the
caller's job (see ``find_open_shift`` and ``Backoffice.open_cash_shift``).
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from backoffice_core.cash.models import (
    CashCategory,
    CashShift,
    CashTransaction,
    ShiftStatus,
    TransactionMethod,
    TransactionType,
)
from backoffice_core.cash.reconciliation import reconcile_shift
from backoffice_core.exceptions import (
    InvalidAmountError,
    ShiftClosedError,
    ShiftStateError,
)
from backoffice_core.money import Number, parse_amount, parse_count
from backoffice_core.timeutils import clock

logger = logging.getLogger(__name__)


def _require_open(shift: CashShift) -> None:
    if shift.status != ShiftStatus.OPEN:
        raise ShiftClosedError(f"Cash shift {shift.id} is already closed")


def open_shift(
    initial_amount: Number,
    opened_by: str,
    now: datetime,
    shift_id: str | None = None,
) -> CashShift:
    """Start a new OPEN shift with an opening cash float.

    Raises:
        AmountParseError: If ``initial_amount`` is not a number.
        InvalidAmountError: If ``initial_amount`` is negative.

    """
    amount = parse_amount(initial_amount)
    if amount < 0:
        raise InvalidAmountError(f"Opening float cannot be negative: {amount}")

    shift = CashShift(
        id=shift_id or str(uuid.uuid4()),
        date=now.date(),
        status=ShiftStatus.OPEN,
        opened_by=opened_by,
        open_time=clock(now),
        initial_amount=amount,
    )
    logger.info("Opened cash shift %s with float %s", shift.id, amount)
    return shift


def add_transaction(
    shift: CashShift,
    type: TransactionType,
    method: TransactionMethod,
    category: CashCategory,
    amount: Number,
    created_by: str,
    now: datetime,
    description: str = "",
    transaction_id: str | None = None,
) -> CashShift:
    """Append a movement to an OPEN shift.

    Returns:
        A copy of the shift with the transaction appended last.

    Raises:
        ShiftClosedError: If the shift is CLOSED.
        AmountParseError: If ``amount`` is not a number.
        InvalidAmountError: If ``amount`` is not strictly positive.

    """
    _require_open(shift)
    value = parse_amount(amount)
    if value <= 0:
        raise InvalidAmountError(f"Transaction amount must be > 0, got {value}")

    tx = CashTransaction(
        id=transaction_id or str(uuid.uuid4()),
        type=TransactionType(type),
        method=TransactionMethod(method),
        category=CashCategory(category),
        amount=value,
        description=description,
        time=clock(now),
        created_by=created_by,
    )
    return replace(shift, transactions=[*shift.transactions, tx])


def close_shift(
    shift: CashShift,
    final_cash: Number,
    final_transfer: Number,
    closed_by: str,
    now: datetime,
    orders_fudo: Number = 0,
    orders_pedidos_ya: Number = 0,
) -> CashShift:
    """Close an OPEN shift, recording the counted amounts and order totals.

    An unbalanced close is allowed; it is logged at WARNING so the variance
    gets reviewed.

    Raises:
        ShiftClosedError: If the shift is already CLOSED.
        AmountParseError: If an amount or order count is not valid.

    """
    _require_open(shift)

    closed = replace(
        shift,
        status=ShiftStatus.CLOSED,
        closed_by=closed_by,
        close_time=clock(now),
        final_cash=parse_amount(final_cash),
        final_transfer=parse_amount(final_transfer),
        orders_fudo=parse_count(orders_fudo),
        orders_pedidos_ya=parse_count(orders_pedidos_ya),
    )

    rec = reconcile_shift(closed)
    if rec.is_balanced:
        logger.info("Closed cash shift %s (balanced)", shift.id)
    else:
        logger.warning(
            "Closed cash shift %s with variance %s (expected %s, counted %s)",
            shift.id,
            rec.variance,
            rec.expected_cash,
            rec.final_cash,
        )
    return closed


def find_open_shift(shifts: Iterable[CashShift]) -> CashShift | None:
    """Return the single OPEN shift, or None.

    Raises:
        ShiftStateError: If more than one shift is OPEN.

    """
    open_shifts = [s for s in shifts if s.status == ShiftStatus.OPEN]
    if len(open_shifts) > 1:
        ids = ", ".join(s.id for s in open_shifts)
        raise ShiftStateError(f"More than one cash shift is OPEN: {ids}")
    return open_shifts[0] if open_shifts else None

