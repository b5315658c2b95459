"""Back-office core - payroll, cash, inventory and finance rules for a restaurant.

This package provides the business rules behind the back office of a
single restaurant, as pure functions over explicit collections, plus a
facade that persists the collections in a key-value store.

Module Structure:
    backoffice_core.payroll: Employees, attendance/overtime, absences,
        holidays, monthly summaries, salaries, sanctions
    backoffice_core.cash: Cash-register shifts, reconciliation, statistics
    backoffice_core.inventory: Inventory items, count sessions, consumption
    backoffice_core.finance: Products, profitability calculator, partners,
        royalties, wallet, fixed expenses
    backoffice_core.tasks: Daily employee checklists and the admin task board
    backoffice_core.access: Users, permission flags, view access
    backoffice_core.storage: Key-value stores, JSON codec, repositories
    backoffice_core.app: Backoffice facade

Quick Start:
    >>> from datetime import date
    >>> from backoffice_core import Backoffice, Settings
    >>> from backoffice_core.payroll import Employee
    >>> from backoffice_core.storage import build_store
    >>>
    >>> office = Backoffice(build_store(Settings.from_root("data")))
    >>> office.add_employee(Employee("e1", "Ana", "Cocina", 300000, "17:00", "01:00"))
    >>> record = office.record_attendance("e1", "17:00", "02:30", date(2025, 3, 3))
    >>> record.overtime_amount
    Decimal('3375.00')

Money:
    Every amount is a ``Decimal`` rounded to cents (ROUND_HALF_UP). Operator
    input goes through ``backoffice_core.money.parse_amount``, which raises
    ``AmountParseError`` instead of turning bad input into zero.
"""

__version__ = "0.1.0"

from backoffice_core.app import Backoffice
from backoffice_core.config import Settings
from backoffice_core.exceptions import (
    AmountParseError,
    BackofficeError,
    ConfigError,
    InvalidAmountError,
    NoOpenShiftError,
    NotFoundError,
    RemoteStoreError,
    ShiftAlreadyOpenError,
    ShiftClosedError,
    ShiftStateError,
    StorageError,
    TaskStateError,
    ValidationError,
)
from backoffice_core.money import format_ars, parse_amount, parse_count

__all__ = [
    "AmountParseError",
    "Backoffice",
    "BackofficeError",
    "ConfigError",
    "InvalidAmountError",
    "NoOpenShiftError",
    "NotFoundError",
    "RemoteStoreError",
    "Settings",
    "ShiftAlreadyOpenError",
    "ShiftClosedError",
    "ShiftStateError",
    "StorageError",
    "TaskStateError",
    "ValidationError",
    "__version__",
    "format_ars",
    "parse_amount",
    "parse_count",
]
