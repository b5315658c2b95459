"""Tests for the overtime calculator and attendance records."""

from datetime import date
from decimal import Decimal

import pytest

from backoffice_core.exceptions import ValidationError
from backoffice_core.payroll import (
    Employee,
    HolidaySet,
    calculate_overtime,
    create_absence_record,
    create_attendance_record,
    toggle_paid,
)

DAY = date(2025, 3, 3)


@pytest.fixture
def employee() -> Employee:
    """Night-shift employee, 17:00-01:00, salary 300000."""
    return Employee(
        id="e1",
        name="Ana",
        position="Cocina",
        monthly_salary=Decimal("300000"),
        schedule_start="17:00",
        schedule_end="01:00",
    )


def test_overnight_overtime(employee: Employee) -> None:
    """Test 17:00-02:30 against a 17:00-01:00 schedule on a regular day."""
    calc = calculate_overtime(employee, "17:00", "02:30", DAY, HolidaySet())

    assert calc is not None
    assert calc.worked_minutes == 570
    assert calc.standard_minutes == 480
    assert calc.overtime_minutes == 90
    assert calc.overtime_hours == Decimal("1.5")
    assert calc.base_rate == Decimal("1500")
    assert calc.rate == Decimal("2250")
    assert calc.amount == Decimal("3375.00")
    assert calc.is_overtime
    assert not calc.is_undertime
    assert not calc.is_holiday
    assert calc.worked_hours == Decimal("9.50")
    assert calc.standard_hours == Decimal("8.00")


def test_holiday_doubles_rate(employee: Employee) -> None:
    """Test that a holiday applies the 2.0 multiplier."""
    calc = calculate_overtime(employee, "17:00", "02:30", DAY, HolidaySet.of([DAY]))

    assert calc.is_holiday
    assert calc.multiplier == Decimal("2.0")
    assert calc.rate == Decimal("3000")
    assert calc.amount == Decimal("4500.00")


def test_regular_day_multiplier(employee: Employee) -> None:
    """Test that non-holiday overtime uses 1.5."""
    calc = calculate_overtime(employee, "17:00", "02:00", DAY, HolidaySet.of([date(2025, 3, 4)]))
    assert calc.multiplier == Decimal("1.5")


@pytest.mark.parametrize("check_out", ["01:00", "00:30", "23:00"])
def test_undertime_is_never_negative(employee: Employee, check_out: str) -> None:
    """Test that working the schedule or less yields zero overtime."""
    calc = calculate_overtime(employee, "17:00", check_out, DAY, HolidaySet())

    assert calc.overtime_hours == 0
    assert calc.amount == 0
    assert not calc.is_overtime
    assert calc.is_undertime == (calc.overtime_minutes < 0)


def test_missing_employee_or_time_is_skipped(employee: Employee) -> None:
    """Test the skipped (None) result for unusable input."""
    holidays = HolidaySet()
    assert calculate_overtime(None, "17:00", "02:00", DAY, holidays) is None
    assert calculate_overtime(employee, "", "02:00", DAY, holidays) is None
    assert calculate_overtime(employee, "17:00", "", DAY, holidays) is None
    assert calculate_overtime(employee, "17:00", "late", DAY, holidays) is None


def test_create_attendance_record(employee: Employee) -> None:
    """Test committing a calculation into an unpaid record."""
    record = create_attendance_record(employee, "17:00", "02:30", DAY, HolidaySet())

    assert record.employee_id == "e1"
    assert record.date == DAY
    assert record.overtime_hours == Decimal("1.50")
    assert record.overtime_amount == Decimal("3375.00")
    assert record.reason == "Horas Extras"
    assert record.paid is False
    assert record.is_holiday is False
    assert record.id


def test_attendance_hours_rounded_amount_exact(employee: Employee) -> None:
    """Test that stored hours are rounded but the amount uses exact hours."""
    # 20 minutes of overtime = 0.3333... h
    record = create_attendance_record(employee, "17:00", "01:20", DAY, HolidaySet())

    assert record.overtime_hours == Decimal("0.33")
    assert record.overtime_amount == Decimal("750.00")


def test_regular_shift_reason(employee: Employee) -> None:
    """Test default and explicit reasons."""
    regular = create_attendance_record(employee, "17:00", "01:00", DAY, HolidaySet())
    custom = create_attendance_record(
        employee, "17:00", "02:00", DAY, HolidaySet(), reason="Evento privado"
    )

    assert regular.reason == "Turno Regular"
    assert regular.overtime_amount == 0
    assert custom.reason == "Evento privado"


def test_holiday_flag_is_fixed_at_creation(employee: Employee) -> None:
    """Test that toggling a holiday later does not change an existing record."""
    holidays = HolidaySet()
    record = create_attendance_record(employee, "17:00", "02:30", DAY, holidays)
    holidays.toggle(DAY)

    assert record.is_holiday is False
    assert record.overtime_amount == Decimal("3375.00")


def test_toggle_paid(employee: Employee) -> None:
    """Test that toggling paid flips only the paid flag."""
    record = create_attendance_record(employee, "17:00", "02:30", DAY, HolidaySet())
    paid = toggle_paid(record)

    assert paid.paid is True
    assert paid.overtime_amount == record.overtime_amount
    assert toggle_paid(paid).paid is False
    assert record.paid is False


def test_absence_requires_reason() -> None:
    """Test absence creation and validation."""
    absence = create_absence_record("e1", DAY, "  Enfermedad ")
    assert absence.reason == "Enfermedad"

    with pytest.raises(ValidationError):
        create_absence_record("e1", DAY, "   ")


def test_employee_rejects_negative_salary() -> None:
    """Test the non-negative salary invariant."""
    with pytest.raises(ValueError):
        Employee("e2", "Luis", "Mostrador", -1, "09:00", "17:00")


def test_hourly_rate_is_derived(employee: Employee) -> None:
    """Test hourly rate = monthly salary / 200."""
    assert employee.hourly_rate == Decimal("1500")
    employee.monthly_salary = Decimal("200000")
    assert employee.hourly_rate == Decimal("1000")
