"""Partner profit distribution and royalty payments."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from decimal import Decimal

from backoffice_core.cash.models import TransactionType
from backoffice_core.exceptions import InvalidAmountError
from backoffice_core.finance.config import ROYALTY_CATEGORY
from backoffice_core.finance.models import Partner, PaymentMethod, WalletTransaction
from backoffice_core.finance.wallet import record_transaction
from backoffice_core.money import ZERO, Number, parse_amount, to_money

logger = logging.getLogger(__name__)

_HUNDRED = Decimal(100)


def partner_share(partner: Partner, amount: Decimal) -> Decimal:
    return to_money(amount * partner.share_percentage / _HUNDRED)


def distribute_profit(partners: Iterable[Partner], amount: Number) -> list[Partner]:
    """Add each partner's share of ``amount`` to their balance.

    A negative amount (real sales well below theory) reduces balances.
    Shares are rounded to cents per partner, so the sum of the increments
    can differ from ``amount`` by a few cents.
    """
    value = to_money(amount)
    return [replace(p, balance=p.balance + partner_share(p, value)) for p in partners]


def pay_royalty(
    partner: Partner,
    amount: Number | None,
    created_by: str,
    now: datetime,
    method: PaymentMethod = PaymentMethod.TRANSFER,
) -> tuple[Partner, WalletTransaction]:
    """Pay a partner out of their accrued balance.

    Args:
        partner: The partner being paid.
        amount: Amount to pay; None pays the full balance.
        created_by: Operator name.
        now: Payment time.
        method: Payment method (default: TRANSFERENCIA).

    Returns:
        (partner with reduced balance, wallet EXPENSE entry). The balance
        never goes below zero, even when ``amount`` exceeds it.

    Raises:
        InvalidAmountError: If the amount is not strictly positive.

    """
    value = partner.balance if amount is None else parse_amount(amount)
    if value <= 0:
        raise InvalidAmountError(f"Royalty payment must be > 0, got {value}")
    if value > partner.balance:
        logger.warning(
            "Royalty payment %s exceeds balance %s of %s; clamping balance to 0",
            value,
            partner.balance,
            partner.name,
        )

    tx = record_transaction(
        TransactionType.EXPENSE,
        value,
        category=ROYALTY_CATEGORY,
        description=f"Pago regalías a {partner.name}",
        created_by=created_by,
        now=now,
        method=method,
    )
    updated = replace(partner, balance=max(ZERO, partner.balance - value))
    logger.info("Paid royalty %s to %s", value, partner.name)
    return updated, tx


def royalty_pool(partners: Iterable[Partner]) -> Decimal:
    """Sum of all partners' undistributed balances."""
    return sum((p.balance for p in partners), ZERO)


def partner_history(
    partner: Partner, transactions: Iterable[WalletTransaction]
) -> list[WalletTransaction]:
    """Royalty payments whose description names the partner (case-insensitive)."""
    name = partner.name.lower()
    return [
        t
        for t in transactions
        if t.type == TransactionType.EXPENSE
        and t.category == ROYALTY_CATEGORY
        and name in t.description.lower()
    ]
