"""Period statistics over closed cash shifts.

Closed shifts are the source of truth for daily sales: order counts come
from the close-time declarations and income/expenses from the shift
transactions (all methods).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

import pandas as pd

from backoffice_core.cash.config import PERIOD_OFFSETS
from backoffice_core.cash.models import (
    CashShift,
    ShiftStatus,
    TransactionMethod,
    TransactionType,
)
from backoffice_core.cash.reconciliation import reconcile_shift
from backoffice_core.money import ZERO, to_money

logger = logging.getLogger(__name__)

DAILY_COLUMNS = ["date", "shifts", "orders", "income", "expenses", "net", "variance"]


class StatsPeriod(str, Enum):
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"


def period_cutoff(period: StatsPeriod, now: datetime) -> datetime:
    """Start of the look-back window ending at ``now``.

    Calendar months and years are subtracted with ``pd.DateOffset`` so that
    March 31 minus one month is February 28/29.
    """
    offset = pd.DateOffset(**PERIOD_OFFSETS[StatsPeriod(period).value])
    return (pd.Timestamp(now) - offset).to_pydatetime()


def closed_shifts_since(shifts: Iterable[CashShift], cutoff: datetime) -> list[CashShift]:
    """CLOSED shifts dated on or after the cutoff day, oldest first."""
    selected = [
        s for s in shifts if s.status == ShiftStatus.CLOSED and s.date >= cutoff.date()
    ]
    return sorted(selected, key=lambda s: s.date)


@dataclass(frozen=True)
class ShiftStatistics:
    """KPIs for a set of closed shifts.

    Attributes:
        shifts: Number of shifts included.
        orders_fudo: Orders declared for Fudo.
        orders_pedidos_ya: Orders declared for PedidosYa.
        total_income: Sum of INCOME transactions.
        total_expenses: Sum of EXPENSE transactions.
        income_by_method: INCOME split by CASH / TRANSFER.
    """

    shifts: int
    orders_fudo: int
    orders_pedidos_ya: int
    total_income: Decimal
    total_expenses: Decimal
    income_by_method: dict[TransactionMethod, Decimal] = field(default_factory=dict)

    @property
    def total_orders(self) -> int:
        return self.orders_fudo + self.orders_pedidos_ya

    @property
    def avg_ticket(self) -> Decimal:
        """Income per order; 0 when there were no orders."""
        if self.total_orders == 0:
            return ZERO
        return to_money(self.total_income / self.total_orders)

    @property
    def net(self) -> Decimal:
        return self.total_income - self.total_expenses


def summarize_shifts(shifts: Iterable[CashShift]) -> ShiftStatistics:
    count = 0
    fudo = 0
    pedidos_ya = 0
    income = ZERO
    expenses = ZERO
    by_method = {m: ZERO for m in TransactionMethod}

    for shift in shifts:
        count += 1
        fudo += shift.orders_fudo or 0
        pedidos_ya += shift.orders_pedidos_ya or 0
        for t in shift.transactions:
            if t.type == TransactionType.INCOME:
                income += t.amount
                by_method[t.method] += t.amount
            else:
                expenses += t.amount

    return ShiftStatistics(
        shifts=count,
        orders_fudo=fudo,
        orders_pedidos_ya=pedidos_ya,
        total_income=income,
        total_expenses=expenses,
        income_by_method=by_method,
    )


def shift_statistics(
    shifts: Iterable[CashShift],
    period: StatsPeriod,
    now: datetime,
) -> ShiftStatistics:
    """Aggregate closed shifts within the last week, month or year.

    Args:
        shifts: All cash shifts.
        period: Look-back window.
        now: Reference time.

    Returns:
        ShiftStatistics for closed shifts dated on or after the cutoff.

    """
    selected = closed_shifts_since(shifts, period_cutoff(period, now))
    logger.debug("Computing %s statistics over %d closed shifts", period, len(selected))
    return summarize_shifts(selected)


def daily_cash_frame(shifts: Iterable[CashShift]) -> pd.DataFrame:
    """One row per business day with totals over its closed shifts.

    Returns:
        DataFrame with DAILY_COLUMNS; money columns as floats, sorted by date.
        ``variance`` is the summed close variance of the day's shifts.

    """
    rows = []
    for shift in shifts:
        if shift.status != ShiftStatus.CLOSED:
            continue
        stats = summarize_shifts([shift])
        rows.append(
            {
                "date": pd.Timestamp(shift.date),
                "shifts": 1,
                "orders": stats.total_orders,
                "income": float(stats.total_income),
                "expenses": float(stats.total_expenses),
                "variance": float(reconcile_shift(shift).variance),
            }
        )

    if not rows:
        return pd.DataFrame(columns=DAILY_COLUMNS)

    df = pd.DataFrame(rows)
    daily = df.groupby("date", as_index=False).agg(
        shifts=("shifts", "sum"),
        orders=("orders", "sum"),
        income=("income", "sum"),
        expenses=("expenses", "sum"),
        variance=("variance", "sum"),
    )
    daily["net"] = (daily["income"] - daily["expenses"]).round(2)
    return daily[DAILY_COLUMNS].sort_values("date").reset_index(drop=True)
