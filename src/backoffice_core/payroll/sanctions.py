"""Disciplinary records.

Only discounts and suspensions carry an amount. Voiding a sanction keeps
the record with who voided it and when; voided sanctions do not count in
the statistics.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal

from backoffice_core.exceptions import ValidationError
from backoffice_core.money import ZERO, Number, parse_amount
from backoffice_core.payroll.models import SanctionRecord, SanctionType

AMOUNT_TYPES = frozenset({SanctionType.DISCOUNT, SanctionType.SUSPENSION})


def create_sanction(
    employee_id: str,
    day: date,
    type: SanctionType,
    description: str,
    amount: Number | None = None,
    created_by: str | None = None,
    sanction_id: str | None = None,
) -> SanctionRecord:
    """Create a sanction; ``amount`` is dropped unless it is a discount or suspension.

    Raises:
        ValidationError: If the description is empty.
        AmountParseError: If a kept amount is not a number.

    """
    if not description or not description.strip():
        raise ValidationError("A sanction needs a description")

    kind = SanctionType(type)
    value = None
    if kind in AMOUNT_TYPES and amount not in (None, ""):
        value = parse_amount(amount)

    return SanctionRecord(
        id=sanction_id or str(uuid.uuid4()),
        employee_id=employee_id,
        date=day,
        type=kind,
        description=description.strip(),
        amount=value,
        created_by=created_by,
    )


def void_sanction(sanction: SanctionRecord, deleted_by: str, now: datetime) -> SanctionRecord:
    if sanction.is_deleted:
        raise ValidationError(f"Sanction {sanction.id} is already voided")
    return replace(sanction, deleted_at=now, deleted_by=deleted_by)


@dataclass(frozen=True)
class SanctionStats:
    total: int
    strikes: int
    discounts: Decimal


def sanction_stats(sanctions: Iterable[SanctionRecord], employee_id: str) -> SanctionStats:
    """Count an employee's active sanctions, strikes and summed discounts."""
    active = [s for s in sanctions if s.employee_id == employee_id and not s.is_deleted]
    return SanctionStats(
        total=len(active),
        strikes=sum(1 for s in active if s.type == SanctionType.STRIKE),
        discounts=sum(
            (s.amount for s in active if s.type == SanctionType.DISCOUNT and s.amount),
            ZERO,
        ),
    )
