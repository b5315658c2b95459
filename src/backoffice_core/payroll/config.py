"""Configuration constants for payroll rules."""

from decimal import Decimal

# Assumed monthly working hours; hourly rate = monthly salary / HOURS_PER_MONTH
HOURS_PER_MONTH = Decimal("200")

# Overtime pay multipliers over the base hourly rate
OVERTIME_MULTIPLIER = Decimal("1.5")
HOLIDAY_MULTIPLIER = Decimal("2.0")

# Default reasons written on attendance records
REASON_OVERTIME = "Horas Extras"
REASON_REGULAR = "Turno Regular"

# Wallet category and default method for salary payments
SALARY_CATEGORY = "Sueldos"
