"""Drawer balances and end-of-shift variance.

The drawer only ever sees CASH movements; transfers are tracked separately
and start from zero (there is no opening float for transfers).

Example (opening float 5000):
    INCOME/CASH 2000   -> 7000
    EXPENSE/CASH 500   -> 6500
    INCOME/TRANSFER 800 leaves the drawer at 6500, transfers at 800

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from backoffice_core.cash.config import BALANCE_TOLERANCE
from backoffice_core.cash.models import (
    CashCategory,
    CashShift,
    CashTransaction,
    TransactionMethod,
    TransactionType,
)
from backoffice_core.money import ZERO, Number, to_money


def _method_flow(transactions: Iterable[CashTransaction], method: TransactionMethod) -> Decimal:
    return sum((t.signed_amount for t in transactions if t.method == method), ZERO)


def cash_balance(initial_amount: Number, transactions: Iterable[CashTransaction]) -> Decimal:
    """Expected cash in the drawer: initial + cash income - cash expense."""
    return to_money(initial_amount) + _method_flow(transactions, TransactionMethod.CASH)


def transfer_balance(transactions: Iterable[CashTransaction]) -> Decimal:
    """Net transfer movements: transfer income - transfer expense."""
    return _method_flow(transactions, TransactionMethod.TRANSFER)


def running_cash_balances(
    initial_amount: Number, transactions: Sequence[CashTransaction]
) -> list[Decimal]:
    """Cash balance after each transaction, in entry order.

    Element ``i`` equals ``cash_balance(initial_amount, transactions[: i + 1])``.
    """
    balance = to_money(initial_amount)
    balances = []
    for t in transactions:
        if t.method == TransactionMethod.CASH:
            balance += t.signed_amount
        balances.append(balance)
    return balances


def is_balanced(variance: Decimal) -> bool:
    return abs(variance) < BALANCE_TOLERANCE


@dataclass(frozen=True)
class ShiftReconciliation:
    """Close-time comparison of declared versus expected amounts.

    Attributes:
        expected_cash: Running cash balance at close.
        final_cash: Physically counted cash.
        variance: final_cash - expected_cash (negative means a shortfall).
        is_balanced: True when |variance| < 10.
        transfer_balance: Net transfer movements recorded in the shift.
        final_transfer: Declared transfer total, if any.
    """

    expected_cash: Decimal
    final_cash: Decimal
    variance: Decimal
    is_balanced: bool
    transfer_balance: Decimal
    final_transfer: Decimal | None = None

    @property
    def transfer_variance(self) -> Decimal | None:
        if self.final_transfer is None:
            return None
        return self.final_transfer - self.transfer_balance


def reconcile_shift(
    shift: CashShift,
    final_cash: Number | None = None,
    final_transfer: Number | None = None,
) -> ShiftReconciliation:
    """Compare declared closing amounts against the shift's transactions.

    Args:
        shift: The shift, OPEN or CLOSED.
        final_cash: Counted cash; defaults to the shift's recorded value.
        final_transfer: Declared transfers; defaults to the shift's recorded
            value.

    Returns:
        ShiftReconciliation. A shift with no declared cash is compared
        against zero.

    """
    expected = cash_balance(shift.initial_amount, shift.transactions)

    if final_cash is None:
        final_cash = shift.final_cash if shift.final_cash is not None else ZERO
    if final_transfer is None:
        final_transfer = shift.final_transfer

    counted = to_money(final_cash)
    variance = counted - expected

    return ShiftReconciliation(
        expected_cash=expected,
        final_cash=counted,
        variance=variance,
        is_balanced=is_balanced(variance),
        transfer_balance=transfer_balance(shift.transactions),
        final_transfer=to_money(final_transfer) if final_transfer is not None else None,
    )


@dataclass(frozen=True)
class CashDeductions:
    """Costs already paid out of a shift, by profitability bucket."""

    labor: Decimal = ZERO
    material: Decimal = ZERO


def cash_deductions(shift: CashShift | None) -> CashDeductions:
    """Sum shift expenses that the calculator should not pay twice.

    EXPENSE/PERSONAL counts as labor already paid and EXPENSE/INSUMOS as
    material already paid, regardless of method.
    """
    if shift is None:
        return CashDeductions()

    labor = ZERO
    material = ZERO
    for t in shift.transactions:
        if t.type != TransactionType.EXPENSE:
            continue
        if t.category == CashCategory.STAFF:
            labor += t.amount
        elif t.category == CashCategory.SUPPLIES:
            material += t.amount
    return CashDeductions(labor=labor, material=material)
