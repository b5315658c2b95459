"""Overtime and holiday pay calculation.

Worked time is compared against the employee's scheduled shift; only the
excess is paid, at 1.5x the base hourly rate or 2x on holidays. Leaving
early is never penalised: undertime yields zero overtime.

Example (scheduled 17:00-01:00, worked 17:00-02:30, salary 300000):
    worked 570 min - standard 480 min = 90 min = 1.5 h
    base rate 300000 / 200 = 1500, rate 1500 * 1.5 = 2250
    amount 1.5 * 2250 = 3375
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from backoffice_core.exceptions import ValidationError
from backoffice_core.money import to_money
from backoffice_core.payroll.config import (
    HOLIDAY_MULTIPLIER,
    OVERTIME_MULTIPLIER,
    REASON_OVERTIME,
    REASON_REGULAR,
)
from backoffice_core.payroll.models import (
    AbsenceRecord,
    AttendanceRecord,
    Employee,
    HolidaySet,
)
from backoffice_core.timeutils import duration_minutes

logger = logging.getLogger(__name__)

_HOURS = Decimal("0.01")
_MINUTES_PER_HOUR = Decimal(60)


@dataclass(frozen=True)
class OvertimeCalculation:
    """Preview of an attendance entry before it is committed.

    Attributes:
        worked_minutes: Actual check-in to check-out duration.
        standard_minutes: Scheduled shift duration.
        overtime_minutes: worked - standard; negative means undertime.
        overtime_hours: Paid overtime hours (0 when not overtime), unrounded.
        base_rate: monthly_salary / 200.
        multiplier: 1.5, or 2.0 on holidays.
        rate: base_rate * multiplier.
        amount: overtime_hours * rate, rounded to cents.
        is_holiday: Whether the date is in the holiday set.
    """

    worked_minutes: int
    standard_minutes: int
    overtime_minutes: int
    overtime_hours: Decimal
    base_rate: Decimal
    multiplier: Decimal
    rate: Decimal
    amount: Decimal
    is_holiday: bool

    @property
    def worked_hours(self) -> Decimal:
        return (Decimal(self.worked_minutes) / _MINUTES_PER_HOUR).quantize(_HOURS)

    @property
    def standard_hours(self) -> Decimal:
        return (Decimal(self.standard_minutes) / _MINUTES_PER_HOUR).quantize(_HOURS)

    @property
    def is_overtime(self) -> bool:
        return self.overtime_hours > 0

    @property
    def is_undertime(self) -> bool:
        return self.overtime_minutes < 0


def overtime_multiplier(day: date, holidays: HolidaySet) -> Decimal:
    return HOLIDAY_MULTIPLIER if holidays.is_holiday(day) else OVERTIME_MULTIPLIER


def calculate_overtime(
    employee: Employee | None,
    check_in: str,
    check_out: str,
    day: date,
    holidays: HolidaySet,
) -> OvertimeCalculation | None:
    """Compute overtime for one attendance entry.

    Args:
        employee: The employee, or None if the id did not resolve.
        check_in: Actual arrival, ``"HH:MM"``.
        check_out: Actual departure, ``"HH:MM"`` (earlier than check-in
            means after midnight).
        day: Date of the shift, looked up in ``holidays``.
        holidays: Holiday set at the time of entry.

    Returns:
        The calculation, or None when the employee is missing or either
        time is empty or malformed.

    """
    if employee is None or not check_in or not check_out:
        return None

    try:
        standard = duration_minutes(employee.schedule_start, employee.schedule_end)
        worked = duration_minutes(check_in, check_out)
    except ValueError as e:
        logger.debug("Skipping overtime for employee %s: %s", employee.id, e)
        return None

    overtime_min = worked - standard
    hours = Decimal(overtime_min) / _MINUTES_PER_HOUR if overtime_min > 0 else Decimal(0)

    base_rate = employee.hourly_rate
    is_holiday = holidays.is_holiday(day)
    multiplier = overtime_multiplier(day, holidays)
    rate = base_rate * multiplier

    return OvertimeCalculation(
        worked_minutes=worked,
        standard_minutes=standard,
        overtime_minutes=overtime_min,
        overtime_hours=hours,
        base_rate=base_rate,
        multiplier=multiplier,
        rate=rate,
        amount=to_money(hours * rate),
        is_holiday=is_holiday,
    )


def create_attendance_record(
    employee: Employee | None,
    check_in: str,
    check_out: str,
    day: date,
    holidays: HolidaySet,
    reason: str = "",
    record_id: str | None = None,
) -> AttendanceRecord | None:
    """Commit an overtime calculation into an AttendanceRecord.

    Returns:
        A new unpaid record, or None when ``calculate_overtime`` skips.

    """
    calc = calculate_overtime(employee, check_in, check_out, day, holidays)
    if calc is None:
        return None

    return AttendanceRecord(
        id=record_id or str(uuid.uuid4()),
        employee_id=employee.id,
        date=day,
        check_in=check_in,
        check_out=check_out,
        overtime_hours=calc.overtime_hours.quantize(_HOURS, rounding=ROUND_HALF_UP),
        overtime_amount=calc.amount,
        reason=reason or (REASON_OVERTIME if calc.is_overtime else REASON_REGULAR),
        paid=False,
        is_holiday=calc.is_holiday,
    )


def toggle_paid(record: AttendanceRecord) -> AttendanceRecord:
    return replace(record, paid=not record.paid)


def create_absence_record(
    employee_id: str,
    day: date,
    reason: str,
    record_id: str | None = None,
) -> AbsenceRecord:
    """Record an absence. A day may also have an attendance row.

    Raises:
        ValidationError: If ``reason`` is empty.

    """
    if not reason or not reason.strip():
        raise ValidationError("An absence needs a reason")
    return AbsenceRecord(
        id=record_id or str(uuid.uuid4()),
        employee_id=employee_id,
        date=day,
        reason=reason.strip(),
    )
