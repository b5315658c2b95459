"""Example: A full cash-register shift

This example opens a shift, records a few movements, closes it with the
counted amounts and prints the reconciliation and weekly statistics.

Prerequisites:
- Optionally set BO_DATA_ROOT (defaults to ./data)
- Optionally set BO_REMOTE_URL and BO_REMOTE_KEY to mirror data remotely
"""

import logging

from backoffice_core import Backoffice, Settings, format_ars
from backoffice_core.cash import CashCategory, StatsPeriod, TransactionMethod, TransactionType
from backoffice_core.storage import build_store

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

settings = Settings.from_env()
office = Backoffice(build_store(settings))

if office.current_cash_shift() is None:
    office.open_cash_shift(5000, opened_by="Ana")  # MODIFY AS NEEDED

office.add_cash_transaction(
    TransactionType.INCOME, TransactionMethod.CASH, CashCategory.SALE, 2000, "Ana"
)
office.add_cash_transaction(
    TransactionType.INCOME, TransactionMethod.TRANSFER, CashCategory.SALE, 3500, "Ana"
)
office.add_cash_transaction(
    TransactionType.EXPENSE, TransactionMethod.CASH, CashCategory.SUPPLIES, 500, "Ana",
    description="Hielo",
)

shift, rec = office.close_cash_shift(
    final_cash="$ 6.500,00",
    final_transfer="3500",
    closed_by="Ana",
    orders_fudo=12,
    orders_pedidos_ya=4,
)

print(f"Shift {shift.id} closed at {shift.close_time}")
print(f"  Expected cash: {format_ars(rec.expected_cash)}")
print(f"  Counted cash:  {format_ars(rec.final_cash)}")
print(f"  Variance:      {format_ars(rec.variance)} ({'OK' if rec.is_balanced else 'REVIEW'})")

stats = office.cash_statistics(StatsPeriod.WEEK)
print(f"\nLast 7 days: {stats.shifts} shifts, {stats.total_orders} orders")
print(f"  Income:     {format_ars(stats.total_income)}")
print(f"  Avg ticket: {format_ars(stats.avg_ticket, decimals=2)}")
