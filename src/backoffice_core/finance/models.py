"""Finance entities: products, projections, partners, wallet, fixed expenses."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from backoffice_core.cash.models import TransactionType
from backoffice_core.finance.config import DEFAULT_PARTNERS, DEFAULT_PRODUCTS
from backoffice_core.money import ZERO, to_decimal, to_money


class PaymentMethod(str, Enum):
    """How a salary, royalty or fixed expense is paid out."""

    CASH = "EFECTIVO"
    TRANSFER = "TRANSFERENCIA"


class FixedExpenseCategory(str, Enum):
    INFRASTRUCTURE = "INFRAESTRUCTURA"
    RAW_MATERIAL = "MATERIA_PRIMA"
    SALARIES = "SUELDOS"
    OTHER = "OTROS"


@dataclass(frozen=True)
class Product:
    """Unit economics of a sellable product (all per unit, ARS).

    Attributes:
        labor_cost: Labor ("Mano de obra").
        material_cost: Raw material ("Materia prima").
        royalties: Bucket displayed as net profit.
        profit: Bucket distributed to partners, displayed as royalties.
    """

    id: str
    name: str
    labor_cost: Decimal
    material_cost: Decimal
    royalties: Decimal
    profit: Decimal

    def __post_init__(self) -> None:
        for name in ("labor_cost", "material_cost", "royalties", "profit"):
            object.__setattr__(self, name, to_money(getattr(self, name)))

    @property
    def unit_price(self) -> Decimal:
        return self.labor_cost + self.material_cost + self.royalties + self.profit


@dataclass(frozen=True)
class ProjectionItem:
    name: str
    qty: int


@dataclass(frozen=True)
class CalculatorProjection:
    """Archived snapshot of a committed calculation.

    Attributes:
        total_sales: Theoretical total.
        real_sales: Operator-confirmed sales.
        net_profit: The ``royalties`` bucket of the calculation.
        royalties: Partner profit adjusted by real - theoretical sales.
        items: Products with quantity > 0.
    """

    id: str
    date: datetime
    total_sales: Decimal
    real_sales: Decimal
    net_profit: Decimal
    royalties: Decimal
    items: list[ProjectionItem] = field(default_factory=list)
    created_by: str = ""


@dataclass(frozen=True)
class Partner:
    """A partner entitled to a share of the partner-profit bucket.

    Shares across partners are not required to add up to 100.
    """

    id: str
    name: str
    share_percentage: Decimal
    balance: Decimal = ZERO
    cbu: str | None = None
    alias: str | None = None
    bank: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "share_percentage", to_decimal(self.share_percentage))
        object.__setattr__(self, "balance", to_money(self.balance))


@dataclass(frozen=True)
class WalletTransaction:
    """Entry of the company-wide ledger.

    Soft-deleted entries keep ``deleted_at``/``deleted_by`` for audit and are
    excluded from every balance.
    """

    id: str
    date: datetime
    amount: Decimal
    type: TransactionType
    category: str
    description: str
    created_by: str
    time: str = ""
    method: PaymentMethod | None = None
    deleted_at: datetime | None = None
    deleted_by: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_money(self.amount))

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TransactionType.INCOME else -self.amount


@dataclass(frozen=True)
class FixedExpense:
    """A recurring obligation that may be paid in several installments."""

    id: str
    name: str
    amount: Decimal
    due_date: date
    paid_amount: Decimal = ZERO
    is_paid: bool = False
    last_paid_date: datetime | None = None
    category: FixedExpenseCategory | None = None
    payment_method: PaymentMethod | None = None
    cbu: str | None = None
    alias: str | None = None
    bank: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_money(self.amount))
        object.__setattr__(self, "paid_amount", to_money(self.paid_amount))


def default_products() -> list[Product]:
    return [
        Product(
            id=pid,
            name=name,
            labor_cost=to_money(labor),
            material_cost=to_money(material),
            royalties=to_money(royalties),
            profit=to_money(profit),
        )
        for pid, name, labor, material, royalties, profit in DEFAULT_PRODUCTS
    ]


def default_partners() -> list[Partner]:
    return [
        Partner(id=pid, name=name, share_percentage=to_decimal(share))
        for pid, name, share in DEFAULT_PARTNERS
    ]
