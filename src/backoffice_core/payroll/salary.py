"""Salary payments, payment scheduling and archiving."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

from backoffice_core.cash.models import TransactionType
from backoffice_core.exceptions import InvalidAmountError
from backoffice_core.finance.models import PaymentMethod, WalletTransaction
from backoffice_core.finance.wallet import record_transaction
from backoffice_core.money import ZERO
from backoffice_core.payroll.config import SALARY_CATEGORY
from backoffice_core.payroll.models import Employee
from backoffice_core.timeutils import as_date, days_until

logger = logging.getLogger(__name__)


def pay_salary(
    employee: Employee, created_by: str, now: datetime
) -> tuple[Employee, WalletTransaction]:
    """Pay an employee's monthly salary out of the wallet.

    Returns:
        (employee with ``last_payment_date`` set to ``now``, wallet EXPENSE
        entry in category "Sueldos"). The method is the employee's
        ``next_payment_method``, or TRANSFERENCIA when unset.

    Raises:
        InvalidAmountError: If the employee has no salary to pay.

    """
    if employee.monthly_salary <= 0:
        raise InvalidAmountError(f"Employee {employee.name} has no salary to pay")

    tx = record_transaction(
        TransactionType.EXPENSE,
        employee.monthly_salary,
        category=SALARY_CATEGORY,
        description=f"Pago Nómina: {employee.name}",
        created_by=created_by,
        now=now,
        method=employee.next_payment_method or PaymentMethod.TRANSFER,
    )
    logger.info("Paid salary %s to %s", employee.monthly_salary, employee.name)
    return replace(employee, last_payment_date=now), tx


def is_paid_recently(employee: Employee, today: date) -> bool:
    """True if the last salary payment fell in the same calendar month."""
    if employee.last_payment_date is None:
        return False
    paid = as_date(employee.last_payment_date)
    return paid.year == today.year and paid.month == today.month


def days_until_payment(employee: Employee, today: date) -> int | None:
    """Days until ``next_payment_date`` (negative when late), or None."""
    if employee.next_payment_date is None:
        return None
    return days_until(employee.next_payment_date, today)


def pending_payroll(employees: Iterable[Employee]) -> Decimal:
    """Sum of the monthly salaries of active employees."""
    return sum((e.monthly_salary for e in employees if e.active), ZERO)


def archive_employee(employee: Employee) -> Employee:
    return replace(employee, active=False)
