"""Cash-register entities: shifts and their transactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

from backoffice_core.money import to_money


class ShiftStatus(str, Enum):
    """Lifecycle of a cash shift or inventory session: OPEN, then CLOSED once."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class TransactionMethod(str, Enum):
    CASH = "CASH"
    TRANSFER = "TRANSFER"


class CashCategory(str, Enum):
    SALE = "VENTA"
    SUPPLIES = "INSUMOS"
    STAFF = "PERSONAL"
    SUNDRY = "GASTOS_VARIOS"
    WITHDRAWAL = "RETIRO"
    OTHER = "OTROS"


@dataclass(frozen=True)
class CashTransaction:
    """A single movement in the drawer or by transfer during a shift.

    Attributes:
        id: Transaction identifier.
        type: INCOME or EXPENSE.
        method: CASH (affects the drawer) or TRANSFER.
        category: Cash category.
        amount: Positive amount in ARS.
        description: Free-text note.
        time: Wall-clock time ``"HH:MM"`` the movement was entered.
        created_by: Name of the operator.
    """

    id: str
    type: TransactionType
    method: TransactionMethod
    category: CashCategory
    amount: Decimal
    description: str = ""
    time: str = ""
    created_by: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_money(self.amount))

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TransactionType.INCOME else -self.amount


@dataclass
class CashShift:
    """A cash-register shift.

    Transactions are kept in the order they were entered, so every prefix of
    ``transactions`` is the state of the drawer at that moment.

    Attributes:
        id: Shift identifier.
        date: Business date of the shift.
        status: OPEN until closed, then CLOSED for good.
        opened_by: Operator who opened it.
        open_time: ``"HH:MM"`` at opening.
        initial_amount: Opening cash float.
        closed_by: Operator who closed it.
        close_time: ``"HH:MM"`` at closing.
        final_cash: Physically counted cash at close.
        final_transfer: Declared transfer total at close.
        orders_fudo: Orders taken through the Fudo POS.
        orders_pedidos_ya: Orders taken through PedidosYa.
        transactions: Movements in entry order.
    """

    id: str
    date: date
    status: ShiftStatus
    opened_by: str
    open_time: str
    initial_amount: Decimal
    closed_by: str | None = None
    close_time: str | None = None
    final_cash: Decimal | None = None
    final_transfer: Decimal | None = None
    orders_fudo: int | None = None
    orders_pedidos_ya: int | None = None
    transactions: list[CashTransaction] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.initial_amount = to_money(self.initial_amount)
        if self.final_cash is not None:
            self.final_cash = to_money(self.final_cash)
        if self.final_transfer is not None:
            self.final_transfer = to_money(self.final_transfer)

    @property
    def is_open(self) -> bool:
        return self.status == ShiftStatus.OPEN

    @property
    def total_orders(self) -> int:
        return (self.orders_fudo or 0) + (self.orders_pedidos_ya or 0)
