"""Monthly overtime summaries per employee.

Summaries are recomputed from the full record lists on every call; the
volumes involved (one restaurant, a few dozen staff) make caching pointless.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

import pandas as pd

from backoffice_core.money import ZERO
from backoffice_core.payroll.models import AbsenceRecord, AttendanceRecord, Employee
from backoffice_core.timeutils import month_window

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "employee_id",
    "name",
    "total_debt",
    "total_paid",
    "total_hours",
    "absences",
    "records",
]


@dataclass(frozen=True)
class MonthlySummary:
    """Overtime totals for one employee and one calendar month.

    Attributes:
        total_debt: Sum of overtime amounts still unpaid.
        total_paid: Sum of overtime amounts already paid.
        total_hours: Overtime hours, paid or not.
        absences: Number of absence records in the month.
        records: Number of attendance records in the month.
    """

    total_debt: Decimal
    total_paid: Decimal
    total_hours: Decimal
    absences: int
    records: int = 0


def _in_window(day: date, start: date, end: date) -> bool:
    return start <= day <= end


def monthly_summary(
    employee_id: str,
    year: int,
    month: int,
    records: Iterable[AttendanceRecord],
    absences: Iterable[AbsenceRecord],
) -> MonthlySummary:
    """Sum an employee's attendance and absences over a calendar month.

    Args:
        employee_id: Employee to summarise.
        year: Year of the month.
        month: Month number (1-12).
        records: All attendance records (any employee, any date).
        absences: All absence records (any employee, any date).

    Returns:
        MonthlySummary for the window [first day, last day] of the month.

    """
    start, end = month_window(year, month)

    month_records = [
        r for r in records if r.employee_id == employee_id and _in_window(r.date, start, end)
    ]
    month_absences = [
        a for a in absences if a.employee_id == employee_id and _in_window(a.date, start, end)
    ]

    return MonthlySummary(
        total_debt=sum((r.overtime_amount for r in month_records if not r.paid), ZERO),
        total_paid=sum((r.overtime_amount for r in month_records if r.paid), ZERO),
        total_hours=sum((r.overtime_hours for r in month_records), ZERO),
        absences=len(month_absences),
        records=len(month_records),
    )


def monthly_payroll_frame(
    employees: Iterable[Employee],
    records: Iterable[AttendanceRecord],
    absences: Iterable[AbsenceRecord],
    year: int,
    month: int,
    include_inactive: bool = False,
) -> pd.DataFrame:
    """Build a one-row-per-employee overtime report for a month.

    Args:
        employees: Employees to report on.
        records: All attendance records.
        absences: All absence records.
        year: Year of the month.
        month: Month number (1-12).
        include_inactive: Whether to keep archived employees (default: False).

    Returns:
        DataFrame with columns SUMMARY_COLUMNS; money columns as floats,
        sorted by total_debt descending.

    """
    records = list(records)
    absences = list(absences)

    rows = []
    for emp in employees:
        if not emp.active and not include_inactive:
            continue
        summary = monthly_summary(emp.id, year, month, records, absences)
        rows.append(
            {
                "employee_id": emp.id,
                "name": emp.name,
                "total_debt": float(summary.total_debt),
                "total_paid": float(summary.total_paid),
                "total_hours": float(summary.total_hours),
                "absences": summary.absences,
                "records": summary.records,
            }
        )

    df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
    logger.debug("Built payroll report for %d-%02d with %d employees", year, month, len(df))
    return df.sort_values("total_debt", ascending=False, kind="stable").reset_index(drop=True)
