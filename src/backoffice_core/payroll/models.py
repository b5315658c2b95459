"""Payroll entities: employees, attendance, absences, holidays, sanctions."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from backoffice_core.finance.models import PaymentMethod
from backoffice_core.money import to_money
from backoffice_core.payroll.config import HOURS_PER_MONTH


class PaymentModality(str, Enum):
    MONTHLY = "MENSUAL"
    BIWEEKLY = "QUINCENAL"
    WEEKLY = "SEMANAL"
    DAILY = "DIARIO"


class SanctionType(str, Enum):
    WARNING = "APERCIBIMIENTO"
    SUSPENSION = "SUSPENSION"
    DISCOUNT = "DESCUENTO"
    STRIKE = "STRIKE"
    OTHER = "OTRO"


@dataclass
class Employee:
    """A staff member.

    Attributes:
        id: Employee identifier.
        name: Display name.
        position: Free-text job title.
        monthly_salary: Monthly salary in ARS (>= 0).
        schedule_start: Scheduled start, ``"HH:MM"``.
        schedule_end: Scheduled end, ``"HH:MM"``; earlier than the start
            means the shift crosses midnight.
        active: False once the employee is archived.
        role: Employee role key used for member view access (e.g. "COCINA").
        payment_modality: Salary payment cadence.
        next_payment_date: Scheduled date of the next salary payment.
        next_payment_method: Method for the next salary payment.
        last_payment_date: Timestamp of the last salary payment.
    """

    id: str
    name: str
    position: str
    monthly_salary: Decimal
    schedule_start: str
    schedule_end: str
    active: bool = True
    role: str | None = None
    payment_modality: PaymentModality | None = None
    next_payment_date: date | None = None
    next_payment_method: PaymentMethod | None = None
    last_payment_date: datetime | None = None

    def __post_init__(self) -> None:
        self.monthly_salary = to_money(self.monthly_salary)
        if self.monthly_salary < 0:
            raise ValueError(f"monthly_salary must be >= 0, got {self.monthly_salary}")

    @property
    def hourly_rate(self) -> Decimal:
        """Base hourly rate, derived and never stored."""
        return self.monthly_salary / HOURS_PER_MONTH


@dataclass(frozen=True)
class AttendanceRecord:
    """One day of attendance, with the overtime computed when it was entered.

    Records are never recomputed; editing means deleting and re-entering.
    Only ``paid`` changes, through ``toggle_paid``.
    """

    id: str
    employee_id: str
    date: date
    check_in: str
    check_out: str
    overtime_hours: Decimal
    overtime_amount: Decimal
    reason: str
    paid: bool = False
    is_holiday: bool = False


@dataclass(frozen=True)
class AbsenceRecord:
    id: str
    employee_id: str
    date: date
    reason: str


@dataclass
class HolidaySet:
    """Official holidays, consulted when an attendance record is created."""

    dates: set[date] = field(default_factory=set)

    @classmethod
    def of(cls, dates: Iterable[date]) -> HolidaySet:
        return cls(dates=set(dates))

    def is_holiday(self, day: date) -> bool:
        return day in self.dates

    def toggle(self, day: date) -> bool:
        """Flip a date in or out of the set; returns True if now a holiday."""
        if day in self.dates:
            self.dates.discard(day)
            return False
        self.dates.add(day)
        return True

    def __contains__(self, day: object) -> bool:
        return day in self.dates

    def __iter__(self) -> Iterator[date]:
        return iter(sorted(self.dates))

    def __len__(self) -> int:
        return len(self.dates)


@dataclass(frozen=True)
class SanctionRecord:
    """A disciplinary record. Voided sanctions stay for audit."""

    id: str
    employee_id: str
    date: date
    type: SanctionType
    description: str
    amount: Decimal | None = None
    created_by: str | None = None
    deleted_at: datetime | None = None
    deleted_by: str | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
