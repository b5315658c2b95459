"""Cash-register shifts, transactions, reconciliation and statistics."""

from backoffice_core.cash.models import (
    CashCategory,
    CashShift,
    CashTransaction,
    ShiftStatus,
    TransactionMethod,
    TransactionType,
)
from backoffice_core.cash.reconciliation import (
    CashDeductions,
    ShiftReconciliation,
    cash_balance,
    cash_deductions,
    reconcile_shift,
    running_cash_balances,
    transfer_balance,
)
from backoffice_core.cash.register import (
    add_transaction,
    close_shift,
    find_open_shift,
    open_shift,
)
from backoffice_core.cash.statistics import (
    ShiftStatistics,
    StatsPeriod,
    daily_cash_frame,
    shift_statistics,
)

__all__ = [
    "CashCategory",
    "CashDeductions",
    "CashShift",
    "CashTransaction",
    "ShiftReconciliation",
    "ShiftStatistics",
    "ShiftStatus",
    "StatsPeriod",
    "TransactionMethod",
    "TransactionType",
    "add_transaction",
    "cash_balance",
    "cash_deductions",
    "close_shift",
    "daily_cash_frame",
    "find_open_shift",
    "open_shift",
    "reconcile_shift",
    "running_cash_balances",
    "shift_statistics",
    "transfer_balance",
]
