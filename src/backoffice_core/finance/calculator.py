"""Profitability calculator and projection commit.

Quantities per product are multiplied by each product's unit economics into
four buckets. When the operator commits the calculation with the real sales
figure, the whole difference between real and theoretical sales goes to
the partner-profit bucket; labor, material and net profit are kept at their
theoretical values.

Example:
    labor 2000, material 3000, royalties 1000, profit 4000 -> total 10000
    real sales 12000 -> diff 2000 -> adjusted partner profit 6000
    a partner with a 25% share accrues 1500
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from backoffice_core.cash.models import TransactionType
from backoffice_core.cash.reconciliation import CashDeductions
from backoffice_core.finance.config import DISPLAY_LABELS, SALES_CATEGORY, SALES_DESCRIPTION
from backoffice_core.finance.models import (
    CalculatorProjection,
    Partner,
    Product,
    ProjectionItem,
    WalletTransaction,
)
from backoffice_core.finance.royalties import distribute_profit
from backoffice_core.finance.wallet import record_transaction
from backoffice_core.money import ZERO, Number, parse_amount, parse_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfitTotals:
    """Calculator buckets. See DISPLAY_LABELS for how each one is shown."""

    labor: Decimal = ZERO
    material: Decimal = ZERO
    royalties: Decimal = ZERO
    profit: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.labor + self.material + self.royalties + self.profit

    def labeled(self) -> dict[str, Decimal]:
        """Buckets keyed by their display label."""
        return {
            DISPLAY_LABELS["labor"]: self.labor,
            DISPLAY_LABELS["material"]: self.material,
            DISPLAY_LABELS["royalties"]: self.royalties,
            DISPLAY_LABELS["profit"]: self.profit,
            DISPLAY_LABELS["total"]: self.total,
        }


def _quantities(quantities: Mapping[str, Number | None]) -> dict[str, int]:
    parsed = {}
    for product_id, qty in quantities.items():
        if qty is None or qty == "":
            continue
        parsed[product_id] = parse_count(qty)
    return parsed


def calculate_totals(
    quantities: Mapping[str, Number | None], products: Iterable[Product]
) -> ProfitTotals:
    """Sum unit economics times quantity over the catalog.

    Args:
        quantities: Requested quantity per product id. Unknown ids and
            quantities of 0 are ignored; empty values count as 0.
        products: Product catalog.

    Raises:
        AmountParseError: If a quantity is not a whole non-negative number.

    """
    catalog = {p.id: p for p in products}
    labor = material = royalties = profit = ZERO

    for product_id, qty in _quantities(quantities).items():
        product = catalog.get(product_id)
        if product is None or qty <= 0:
            continue
        labor += product.labor_cost * qty
        material += product.material_cost * qty
        royalties += product.royalties * qty
        profit += product.profit * qty

    return ProfitTotals(labor=labor, material=material, royalties=royalties, profit=profit)


@dataclass(frozen=True)
class PayableCosts:
    labor: Decimal
    material: Decimal


def payable_costs(totals: ProfitTotals, deductions: CashDeductions) -> PayableCosts:
    """Labor and material still to pay after what the open shift already paid."""
    return PayableCosts(
        labor=max(ZERO, totals.labor - deductions.labor),
        material=max(ZERO, totals.material - deductions.material),
    )


@dataclass(frozen=True)
class ProjectionCommit:
    """Everything produced by committing a calculation.

    Attributes:
        income: Wallet INCOME entry for the real sales.
        partners: Partners with their balances increased.
        projection: Archived snapshot.
        adjusted_partner_profit: profit + (real sales - theoretical total).
    """

    income: WalletTransaction
    partners: list[Partner]
    projection: CalculatorProjection
    adjusted_partner_profit: Decimal


def commit_projection(
    quantities: Mapping[str, Number | None],
    products: Iterable[Product],
    partners: Iterable[Partner],
    created_by: str,
    now: datetime,
    real_sales: Number | None = None,
) -> ProjectionCommit:
    """Close a calculation against the real sales figure.

    Args:
        quantities: Requested quantity per product id.
        products: Product catalog.
        partners: Partners receiving the adjusted profit.
        created_by: Operator name.
        now: Commit time.
        real_sales: Operator-confirmed sales; defaults to the theoretical
            total.

    Returns:
        ProjectionCommit with the wallet entry, updated partners and the
        projection snapshot.

    Raises:
        AmountParseError: If ``real_sales`` or a quantity is invalid.
        InvalidAmountError: If the real sales figure is not strictly positive.

    """
    products = list(products)
    totals = calculate_totals(quantities, products)
    real = totals.total if real_sales is None else parse_amount(real_sales)

    diff = real - totals.total
    adjusted = totals.profit + diff

    income = record_transaction(
        TransactionType.INCOME,
        real,
        category=SALES_CATEGORY,
        description=SALES_DESCRIPTION,
        created_by=created_by,
        now=now,
    )

    names = {p.id: p.name for p in products}
    items = [
        ProjectionItem(name=names.get(pid, "Unknown"), qty=qty)
        for pid, qty in _quantities(quantities).items()
        if qty > 0
    ]

    projection = CalculatorProjection(
        id=str(uuid.uuid4()),
        date=now,
        total_sales=totals.total,
        real_sales=real,
        net_profit=totals.royalties,
        royalties=adjusted,
        items=items,
        created_by=created_by,
    )

    updated = distribute_profit(partners, adjusted)
    logger.info(
        "Committed projection %s: theoretical %s, real %s, partner profit %s",
        projection.id,
        totals.total,
        real,
        adjusted,
    )
    return ProjectionCommit(
        income=income,
        partners=updated,
        projection=projection,
        adjusted_partner_profit=adjusted,
    )
