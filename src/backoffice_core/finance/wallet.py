"""Company wallet: ledger entries, fixed expenses, alerts and purchase checks.

The wallet is a coarser ledger than the cash register: it records sales
committed from the calculator, salaries, royalties and fixed-expense
payments. Entries are never removed; voiding sets ``deleted_at`` and drops
the entry from every balance.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from backoffice_core.cash.models import TransactionType
from backoffice_core.exceptions import InvalidAmountError, ValidationError
from backoffice_core.finance.config import (
    DEFAULT_FIXED_EXPENSE_WALLET_CATEGORY,
    EXPENSE_WARNING_DAYS,
    FIXED_EXPENSE_WALLET_CATEGORIES,
    SAFE_BUFFER,
    SALARY_WARNING_DAYS,
)
from backoffice_core.finance.models import FixedExpense, PaymentMethod, WalletTransaction
from backoffice_core.money import ZERO, Number, parse_amount
from backoffice_core.timeutils import clock, days_until

if TYPE_CHECKING:
    from backoffice_core.payroll.models import Employee

logger = logging.getLogger(__name__)

LEDGER_COLUMNS = [
    "date",
    "time",
    "type",
    "category",
    "description",
    "amount",
    "flow",
    "balance",
    "deleted",
]


def record_transaction(
    type: TransactionType,
    amount: Number,
    category: str,
    description: str,
    created_by: str,
    now: datetime,
    method: PaymentMethod | None = None,
    transaction_id: str | None = None,
) -> WalletTransaction:
    """Create a wallet entry.

    Raises:
        AmountParseError: If ``amount`` is not a number.
        InvalidAmountError: If ``amount`` is not strictly positive.

    """
    value = parse_amount(amount)
    if value <= 0:
        raise InvalidAmountError(f"Wallet amount must be > 0, got {value}")

    return WalletTransaction(
        id=transaction_id or str(uuid.uuid4()),
        date=now,
        amount=value,
        type=TransactionType(type),
        category=category,
        description=description,
        created_by=created_by,
        time=clock(now),
        method=PaymentMethod(method) if method is not None else None,
    )


def void_transaction(tx: WalletTransaction, deleted_by: str, now: datetime) -> WalletTransaction:
    """Soft-delete an entry.

    Raises:
        ValidationError: If the entry is already voided.

    """
    if tx.is_deleted:
        raise ValidationError(f"Wallet transaction {tx.id} is already voided")
    logger.info("Voided wallet transaction %s (%s %s)", tx.id, tx.type.value, tx.amount)
    return replace(tx, deleted_at=now, deleted_by=deleted_by)


def wallet_balance(transactions: Iterable[WalletTransaction]) -> Decimal:
    """Income minus expenses over entries that are not voided."""
    return sum((t.signed_amount for t in transactions if not t.is_deleted), ZERO)


def outstanding(expense: FixedExpense) -> Decimal:
    """Amount still owed on a fixed expense, never below zero."""
    return max(ZERO, expense.amount - expense.paid_amount)


def fixed_expense_wallet_category(expense: FixedExpense) -> str:
    if expense.category is None:
        return DEFAULT_FIXED_EXPENSE_WALLET_CATEGORY
    return FIXED_EXPENSE_WALLET_CATEGORIES.get(
        expense.category.value, DEFAULT_FIXED_EXPENSE_WALLET_CATEGORY
    )


def pay_fixed_expense(
    expense: FixedExpense,
    amount: Number | None,
    created_by: str,
    now: datetime,
) -> tuple[FixedExpense, WalletTransaction]:
    """Pay all or part of a fixed expense.

    Args:
        expense: The expense.
        amount: Installment; None pays the outstanding amount.
        created_by: Operator name.
        now: Payment time.

    Returns:
        (updated expense, wallet EXPENSE entry). The expense becomes paid
        once the accumulated ``paid_amount`` reaches ``amount``.

    Raises:
        InvalidAmountError: If the installment is not strictly positive.

    """
    value = outstanding(expense) if amount is None else parse_amount(amount)
    if value <= 0:
        raise InvalidAmountError(f"Payment for {expense.name!r} must be > 0, got {value}")

    tx = record_transaction(
        TransactionType.EXPENSE,
        value,
        category=fixed_expense_wallet_category(expense),
        description=f"Pago Gasto Fijo: {expense.name}",
        created_by=created_by,
        now=now,
        method=expense.payment_method,
    )

    paid_amount = expense.paid_amount + value
    fully_paid = paid_amount >= expense.amount
    updated = replace(
        expense,
        paid_amount=paid_amount,
        is_paid=fully_paid,
        last_paid_date=now if fully_paid else None,
    )
    return updated, tx


class AlertLevel(str, Enum):
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"


@dataclass(frozen=True)
class PaymentAlert:
    title: str
    date: date
    level: AlertLevel


def _alert(
    title_overdue: str, title_soon: str, due: date, today: date, window: int
) -> PaymentAlert | None:
    remaining = days_until(due, today)
    if remaining < 0:
        return PaymentAlert(title=title_overdue, date=due, level=AlertLevel.CRITICAL)
    if remaining <= window:
        return PaymentAlert(title=title_soon, date=due, level=AlertLevel.WARNING)
    return None


def payment_alerts(
    fixed_expenses: Iterable[FixedExpense],
    employees: Iterable[Employee],
    today: date,
) -> list[PaymentAlert]:
    """Upcoming and overdue obligations, earliest first.

    Unpaid fixed expenses raise a WARNING within 3 days of the due date;
    active employees raise a WARNING within 2 days of their next payment.
    Anything past due is CRITICAL.
    """
    alerts = []
    for exp in fixed_expenses:
        if exp.is_paid:
            continue
        alert = _alert(
            f"Vencido: {exp.name}",
            f"Vence pronto: {exp.name}",
            exp.due_date,
            today,
            EXPENSE_WARNING_DAYS,
        )
        if alert:
            alerts.append(alert)

    for emp in employees:
        if not emp.active or emp.next_payment_date is None:
            continue
        alert = _alert(
            f"Pago atrasado: {emp.name}",
            f"Pago sueldo: {emp.name}",
            emp.next_payment_date,
            today,
            SALARY_WARNING_DAYS,
        )
        if alert:
            alerts.append(alert)

    return sorted(alerts, key=lambda a: a.date)


class PurchaseVerdict(str, Enum):
    SAFE = "SAFE"
    RISKY = "RISKY"
    DANGEROUS = "DANGEROUS"


@dataclass(frozen=True)
class PurchaseSimulation:
    """Outcome of a what-if purchase.

    Attributes:
        cost: Purchase cost.
        obligations: Active payroll plus outstanding fixed expenses.
        available: balance - obligations.
        verdict: SAFE (available >= 1.2 x cost), RISKY (>= cost) or DANGEROUS.
    """

    cost: Decimal
    obligations: Decimal
    available: Decimal
    verdict: PurchaseVerdict


def simulate_purchase(
    cost: Number,
    balance: Decimal,
    employees: Iterable[Employee],
    fixed_expenses: Iterable[FixedExpense],
) -> PurchaseSimulation:
    """Check whether a purchase fits after this month's obligations.

    Raises:
        InvalidAmountError: If ``cost`` is not strictly positive.

    """
    value = parse_amount(cost)
    if value <= 0:
        raise InvalidAmountError(f"Purchase cost must be > 0, got {value}")

    payroll = sum((e.monthly_salary for e in employees if e.active), ZERO)
    pending = sum((outstanding(e) for e in fixed_expenses if not e.is_paid), ZERO)
    obligations = payroll + pending
    available = balance - obligations

    if available >= value * SAFE_BUFFER:
        verdict = PurchaseVerdict.SAFE
    elif available >= value:
        verdict = PurchaseVerdict.RISKY
    else:
        verdict = PurchaseVerdict.DANGEROUS

    return PurchaseSimulation(
        cost=value, obligations=obligations, available=available, verdict=verdict
    )


def wallet_ledger_frame(transactions: Iterable[WalletTransaction]) -> pd.DataFrame:
    """Chronological ledger with a running balance.

    Voided entries stay in the frame (``deleted`` is True) with a zero flow,
    so the final ``balance`` equals ``wallet_balance``.

    Returns:
        DataFrame with LEDGER_COLUMNS, oldest entry first.

    """
    rows = [
        {
            "date": pd.Timestamp(t.date),
            "time": t.time,
            "type": t.type.value,
            "category": t.category,
            "description": t.description,
            "amount": float(t.amount),
            "deleted": t.is_deleted,
        }
        for t in transactions
    ]
    if not rows:
        return pd.DataFrame(columns=LEDGER_COLUMNS)

    df = pd.DataFrame(rows).sort_values("date", kind="stable").reset_index(drop=True)

    sign = np.where(df["type"] == TransactionType.INCOME.value, 1.0, -1.0)
    df["flow"] = np.where(df["deleted"], 0.0, sign * df["amount"].to_numpy())
    df["balance"] = np.round(np.cumsum(df["flow"].to_numpy()), 2)
    return df[LEDGER_COLUMNS]
