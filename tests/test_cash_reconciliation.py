"""Tests for cash shift balances, lifecycle and reconciliation."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from backoffice_core.cash import (
    CashCategory,
    CashShift,
    CashTransaction,
    ShiftStatus,
    TransactionMethod,
    TransactionType,
    add_transaction,
    cash_balance,
    cash_deductions,
    close_shift,
    find_open_shift,
    open_shift,
    reconcile_shift,
    running_cash_balances,
    transfer_balance,
)
from backoffice_core.exceptions import (
    AmountParseError,
    InvalidAmountError,
    ShiftClosedError,
    ShiftStateError,
)

NOW = datetime(2025, 3, 10, 18, 0)

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE
CASH = TransactionMethod.CASH
TRANSFER = TransactionMethod.TRANSFER


def _tx(type: TransactionType, method: TransactionMethod, amount: str,
        category: CashCategory = CashCategory.OTHER) -> CashTransaction:
    return CashTransaction(
        id=f"{type.value}-{method.value}-{amount}",
        type=type,
        method=method,
        category=category,
        amount=Decimal(amount),
    )


@pytest.fixture
def shift() -> CashShift:
    """OPEN shift with a 5000 float."""
    return open_shift(5000, "Ana", NOW, shift_id="s1")


def test_open_shift(shift: CashShift) -> None:
    """Test the opening state."""
    assert shift.status == ShiftStatus.OPEN
    assert shift.initial_amount == Decimal("5000.00")
    assert shift.open_time == "18:00"
    assert shift.date == date(2025, 3, 10)
    assert shift.transactions == []


def test_shift_models_accept_plain_floats() -> None:
    """Test that float amounts on shifts and movements become cents."""
    shift = CashShift("s9", date(2025, 3, 10), ShiftStatus.OPEN, "Ana", "18:00", 5000.0)
    shift.transactions.append(CashTransaction("t1", INCOME, CASH, CashCategory.SALE, 1500.25))

    assert shift.initial_amount == Decimal("5000.00")
    assert shift.final_cash is None
    assert cash_balance(shift.initial_amount, shift.transactions) == Decimal("6500.25")


def test_cash_balance_scenario(shift: CashShift) -> None:
    """Test 5000 + 2000 cash income - 500 cash expense = 6500."""
    shift = add_transaction(shift, INCOME, CASH, CashCategory.SALE, 2000, "Ana", NOW)
    shift = add_transaction(shift, EXPENSE, CASH, CashCategory.SUPPLIES, "500", "Ana", NOW)

    assert cash_balance(shift.initial_amount, shift.transactions) == Decimal("6500.00")
    assert [t.amount for t in shift.transactions] == [Decimal("2000.00"), Decimal("500.00")]


def test_transfers_do_not_touch_the_drawer() -> None:
    """Test that transfers have their own balance with no opening float."""
    txs = [
        _tx(INCOME, TRANSFER, "800"),
        _tx(EXPENSE, TRANSFER, "300"),
        _tx(INCOME, CASH, "100"),
    ]
    assert cash_balance(Decimal("1000"), txs) == Decimal("1100.00")
    assert transfer_balance(txs) == Decimal("500")


def test_running_balance_matches_every_prefix() -> None:
    """Test running balance == initial + cash income - cash expense at each prefix."""
    txs = [
        _tx(INCOME, CASH, "2000"),
        _tx(EXPENSE, CASH, "500"),
        _tx(INCOME, TRANSFER, "1200"),
        _tx(EXPENSE, CASH, "750.50"),
        _tx(INCOME, CASH, "0.50"),
    ]
    running = running_cash_balances(5000, txs)

    assert len(running) == len(txs)
    for i in range(len(txs)):
        assert running[i] == cash_balance(5000, txs[: i + 1])
    assert running == [
        Decimal("7000.00"),
        Decimal("6500.00"),
        Decimal("6500.00"),
        Decimal("5749.50"),
        Decimal("5750.00"),
    ]


def test_transaction_amount_must_be_positive(shift: CashShift) -> None:
    """Test that zero, negative and unparseable amounts are rejected."""
    with pytest.raises(InvalidAmountError):
        add_transaction(shift, INCOME, CASH, CashCategory.SALE, 0, "Ana", NOW)
    with pytest.raises(InvalidAmountError):
        add_transaction(shift, INCOME, CASH, CashCategory.SALE, "-10", "Ana", NOW)
    with pytest.raises(AmountParseError):
        add_transaction(shift, INCOME, CASH, CashCategory.SALE, "mil", "Ana", NOW)


@pytest.mark.parametrize(
    "final_cash,balanced",
    [("6500", True), ("6509.99", True), ("6490.01", True), ("6510", False), ("6490", False)],
)
def test_balance_tolerance(shift: CashShift, final_cash: str, balanced: bool) -> None:
    """Test that a shift is balanced iff |variance| < 10."""
    shift = add_transaction(shift, INCOME, CASH, CashCategory.SALE, 2000, "Ana", NOW)
    shift = add_transaction(shift, EXPENSE, CASH, CashCategory.SUPPLIES, 500, "Ana", NOW)

    rec = reconcile_shift(shift, final_cash=final_cash)

    assert rec.expected_cash == Decimal("6500.00")
    assert rec.variance == Decimal(final_cash) - Decimal("6500")
    assert rec.is_balanced is balanced


def test_close_shift(shift: CashShift) -> None:
    """Test closing records counts and order totals exactly once."""
    shift = add_transaction(shift, INCOME, TRANSFER, CashCategory.SALE, 3000, "Ana", NOW)
    closed = close_shift(
        shift, "4990", "3000", "Luis", datetime(2025, 3, 11, 1, 30),
        orders_fudo=12, orders_pedidos_ya="8",
    )

    assert closed.status == ShiftStatus.CLOSED
    assert closed.closed_by == "Luis"
    assert closed.close_time == "01:30"
    assert closed.total_orders == 20
    assert shift.status == ShiftStatus.OPEN

    rec = reconcile_shift(closed)
    assert rec.variance == Decimal("-10.00")
    assert not rec.is_balanced
    assert rec.transfer_variance == Decimal("0.00")

    with pytest.raises(ShiftClosedError):
        close_shift(closed, "1", "1", "Luis", NOW)
    with pytest.raises(ShiftClosedError):
        add_transaction(closed, INCOME, CASH, CashCategory.SALE, 1, "Luis", NOW)


def test_find_open_shift(shift: CashShift) -> None:
    """Test single-open lookup and the duplicate OPEN guard."""
    closed = close_shift(open_shift(0, "Ana", NOW, shift_id="s0"), 0, 0, "Ana", NOW)

    assert find_open_shift([]) is None
    assert find_open_shift([closed]) is None
    assert find_open_shift([closed, shift]) is shift

    with pytest.raises(ShiftStateError):
        find_open_shift([shift, open_shift(0, "Luis", NOW, shift_id="s2")])


def test_cash_deductions(shift: CashShift) -> None:
    """Test staff and supplies expenses feed labor and material deductions."""
    for type, category, amount in [
        (EXPENSE, CashCategory.STAFF, 1000),
        (EXPENSE, CashCategory.STAFF, 500),
        (EXPENSE, CashCategory.SUPPLIES, 700),
        (EXPENSE, CashCategory.SUNDRY, 999),
        (INCOME, CashCategory.STAFF, 5000),
    ]:
        shift = add_transaction(shift, type, CASH, category, amount, "Ana", NOW)

    deductions = cash_deductions(shift)
    assert deductions.labor == Decimal("1500.00")
    assert deductions.material == Decimal("700.00")
    assert cash_deductions(None).labor == 0
