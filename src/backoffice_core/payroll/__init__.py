"""Payroll: employees, attendance and overtime, absences, salaries, sanctions.

Example:
    >>> from datetime import date
    >>> from backoffice_core.payroll import Employee, HolidaySet, calculate_overtime
    >>> emp = Employee("e1", "Ana", "Cocina", 300000, "17:00", "01:00")
    >>> calc = calculate_overtime(emp, "17:00", "02:30", date(2025, 3, 3), HolidaySet())
    >>> calc.amount
    Decimal('3375.00')
"""

from backoffice_core.payroll.models import (
    AbsenceRecord,
    AttendanceRecord,
    Employee,
    HolidaySet,
    PaymentMethod,
    PaymentModality,
    SanctionRecord,
    SanctionType,
)
from backoffice_core.payroll.overtime import (
    OvertimeCalculation,
    calculate_overtime,
    create_absence_record,
    create_attendance_record,
    toggle_paid,
)
from backoffice_core.payroll.summary import (
    MonthlySummary,
    monthly_payroll_frame,
    monthly_summary,
)
from backoffice_core.payroll.salary import (
    archive_employee,
    days_until_payment,
    is_paid_recently,
    pay_salary,
    pending_payroll,
)
from backoffice_core.payroll.sanctions import (
    SanctionStats,
    create_sanction,
    sanction_stats,
    void_sanction,
)

__all__ = [
    "AbsenceRecord",
    "AttendanceRecord",
    "Employee",
    "HolidaySet",
    "MonthlySummary",
    "OvertimeCalculation",
    "PaymentMethod",
    "PaymentModality",
    "SanctionRecord",
    "SanctionStats",
    "SanctionType",
    "archive_employee",
    "calculate_overtime",
    "create_absence_record",
    "create_attendance_record",
    "create_sanction",
    "days_until_payment",
    "is_paid_recently",
    "monthly_payroll_frame",
    "monthly_summary",
    "pay_salary",
    "pending_payroll",
    "sanction_stats",
    "toggle_paid",
    "void_sanction",
]
