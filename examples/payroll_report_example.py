"""Example: Monthly overtime report

This example records attendance for an employee, marks a holiday, and
prints the monthly payroll report as a DataFrame together with the
upcoming payment alerts.

Prerequisites:
- Optionally set BO_DATA_ROOT (defaults to ./data)
"""

import logging
from datetime import date

from backoffice_core import Backoffice, Settings
from backoffice_core.payroll import Employee
from backoffice_core.storage import build_store

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

office = Backoffice(build_store(Settings.from_env()))

year, month = 2025, 3  # MODIFY AS NEEDED

if office.employees.find("e1") is None:
    office.add_employee(
        Employee(
            "e1",
            "Ana",
            "Cocina",
            300000,
            "17:00",
            "01:00",
            next_payment_date=date(year, month, 31),
        )
    )

if not office.holidays.get().is_holiday(date(year, month, 24)):
    office.toggle_holiday(date(year, month, 24))

office.record_attendance("e1", "17:00", "02:30", date(year, month, 3))
office.record_attendance("e1", "16:30", "03:00", date(year, month, 24))
office.record_absence("e1", date(year, month, 10), "Enfermedad")

df = office.payroll_report(year, month)
print(f"Payroll report {year}-{month:02d}: {len(df)} employees")
print(df.to_string(index=False))

print("\nPayment alerts:")
for alert in office.payment_alerts():
    print(f"  [{alert.level.value}] {alert.date} {alert.title}")
