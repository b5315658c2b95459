"""Tests for the wallet ledger, fixed expenses, alerts and purchase checks."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from backoffice_core.cash import TransactionType
from backoffice_core.exceptions import InvalidAmountError, ValidationError
from backoffice_core.finance import (
    AlertLevel,
    FixedExpense,
    FixedExpenseCategory,
    PaymentMethod,
    PurchaseVerdict,
    outstanding,
    pay_fixed_expense,
    payment_alerts,
    record_transaction,
    simulate_purchase,
    void_transaction,
    wallet_balance,
    wallet_ledger_frame,
)
from backoffice_core.payroll import Employee

NOW = datetime(2025, 3, 10, 12, 0)
TODAY = NOW.date()

INCOME = TransactionType.INCOME
EXPENSE = TransactionType.EXPENSE


def _expense(name: str, due: date, amount: str = "10000", **kwargs: object) -> FixedExpense:
    return FixedExpense(id=name, name=name, amount=Decimal(amount), due_date=due, **kwargs)


def test_record_transaction() -> None:
    """Test a new entry gets its time and parsed amount."""
    tx = record_transaction(INCOME, "$ 1.500,50", "Ventas", "venta", "Ana", NOW)

    assert tx.amount == Decimal("1500.50")
    assert tx.time == "12:00"
    assert tx.method is None
    assert not tx.is_deleted

    with pytest.raises(InvalidAmountError):
        record_transaction(EXPENSE, 0, "Otros", "", "Ana", NOW)


def test_balance_excludes_voided_entries() -> None:
    """Test voided entries stay stored but drop out of the balance."""
    sale = record_transaction(INCOME, 10000, "Ventas", "", "Ana", NOW)
    rent = record_transaction(EXPENSE, 4000, "Servicios", "", "Ana", NOW)
    typo = record_transaction(EXPENSE, 9999, "Servicios", "", "Ana", NOW)

    assert wallet_balance([sale, rent, typo]) == Decimal("-3999.00")

    voided = void_transaction(typo, "Luis", NOW)
    assert voided.is_deleted
    assert voided.deleted_by == "Luis"
    assert wallet_balance([sale, rent, voided]) == Decimal("6000.00")

    with pytest.raises(ValidationError):
        void_transaction(voided, "Luis", NOW)


def test_partial_fixed_expense_payments() -> None:
    """Test installments accumulate until the expense is paid."""
    expense = _expense("Alquiler", date(2025, 3, 15), payment_method=PaymentMethod.TRANSFER)

    expense, first = pay_fixed_expense(expense, "4000", "Ana", NOW)
    assert expense.paid_amount == Decimal("4000.00")
    assert not expense.is_paid
    assert expense.last_paid_date is None
    assert outstanding(expense) == Decimal("6000.00")
    assert first.description == "Pago Gasto Fijo: Alquiler"
    assert first.method == PaymentMethod.TRANSFER

    expense, second = pay_fixed_expense(expense, None, "Ana", NOW)
    assert second.amount == Decimal("6000.00")
    assert expense.is_paid
    assert expense.last_paid_date == NOW
    assert outstanding(expense) == 0

    with pytest.raises(InvalidAmountError):
        pay_fixed_expense(expense, None, "Ana", NOW)


def test_fixed_expense_accepts_plain_floats() -> None:
    """Test that float amounts on fixed expenses become cents."""
    expense = FixedExpense(id="luz", name="Luz", amount=8000.5, due_date=TODAY, paid_amount=500.0)
    assert expense.amount == Decimal("8000.50")
    assert outstanding(expense) == Decimal("7500.50")


@pytest.mark.parametrize(
    "category,wallet_category",
    [
        (FixedExpenseCategory.RAW_MATERIAL, "Proveedores"),
        (FixedExpenseCategory.INFRASTRUCTURE, "Mantenimiento"),
        (FixedExpenseCategory.SALARIES, "Servicios"),
        (None, "Servicios"),
    ],
)
def test_fixed_expense_wallet_category(
    category: FixedExpenseCategory | None, wallet_category: str
) -> None:
    """Test the wallet category used for each fixed-expense category."""
    expense = _expense("Gasto", TODAY, category=category)
    _, tx = pay_fixed_expense(expense, 100, "Ana", NOW)
    assert tx.category == wallet_category


def test_payment_alerts() -> None:
    """Test overdue and upcoming obligations."""
    expenses = [
        _expense("Luz", date(2025, 3, 9)),
        _expense("Gas", date(2025, 3, 13)),
        _expense("Agua", date(2025, 3, 14)),
        _expense("Internet", date(2025, 3, 1), is_paid=True),
    ]
    employees = [
        Employee("e1", "Ana", "Cocina", 300000, "17:00", "01:00",
                 next_payment_date=date(2025, 3, 12)),
        Employee("e2", "Luis", "Caja", 300000, "17:00", "01:00",
                 next_payment_date=date(2025, 3, 13)),
        Employee("e3", "Eva", "Caja", 300000, "17:00", "01:00", active=False,
                 next_payment_date=date(2025, 3, 1)),
        Employee("e4", "Juan", "Caja", 300000, "17:00", "01:00",
                 next_payment_date=date(2025, 3, 5)),
    ]

    alerts = payment_alerts(expenses, employees, TODAY)

    assert [(a.title, a.level) for a in alerts] == [
        ("Pago atrasado: Juan", AlertLevel.CRITICAL),
        ("Vencido: Luz", AlertLevel.CRITICAL),
        ("Pago sueldo: Ana", AlertLevel.WARNING),
        ("Vence pronto: Gas", AlertLevel.WARNING),
    ]


@pytest.mark.parametrize(
    "cost,verdict",
    [
        ("50000", PurchaseVerdict.SAFE),
        ("60000", PurchaseVerdict.RISKY),
        ("64000", PurchaseVerdict.RISKY),
        ("70000", PurchaseVerdict.DANGEROUS),
    ],
)
def test_simulate_purchase(cost: str, verdict: PurchaseVerdict) -> None:
    """Test verdicts against what is left after payroll and pending expenses."""
    employees = [
        Employee("e1", "Ana", "Cocina", 30000, "17:00", "01:00"),
        Employee("e2", "Luis", "Caja", 50000, "17:00", "01:00", active=False),
    ]
    expenses = [
        _expense("Alquiler", TODAY, paid_amount=Decimal("4000")),
        _expense("Luz", TODAY, is_paid=True),
    ]

    result = simulate_purchase(cost, Decimal("100000"), employees, expenses)

    assert result.obligations == Decimal("36000")
    assert result.available == Decimal("64000")
    assert result.verdict == verdict


def test_simulate_purchase_rejects_zero_cost() -> None:
    with pytest.raises(InvalidAmountError):
        simulate_purchase(0, Decimal("100"), [], [])


def test_wallet_ledger_frame() -> None:
    """Test the running balance ends at the wallet balance."""
    sale = record_transaction(INCOME, 10000, "Ventas", "", "Ana", datetime(2025, 3, 1, 22, 0))
    rent = record_transaction(EXPENSE, 4000, "Servicios", "", "Ana", datetime(2025, 3, 5, 9, 0))
    typo = void_transaction(
        record_transaction(EXPENSE, 999, "Otros", "", "Ana", datetime(2025, 3, 3, 9, 0)),
        "Ana",
        NOW,
    )

    df = wallet_ledger_frame([rent, typo, sale])

    assert list(df["flow"]) == [10000.0, 0.0, -4000.0]
    assert list(df["balance"]) == [10000.0, 10000.0, 6000.0]
    assert list(df["deleted"]) == [False, True, False]
    assert df["balance"].iloc[-1] == float(wallet_balance([sale, rent, typo]))
    assert wallet_ledger_frame([]).empty
