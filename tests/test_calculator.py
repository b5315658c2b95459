"""Tests for the profitability calculator and projection commits."""

from datetime import datetime
from decimal import Decimal

import pytest

from backoffice_core.cash import CashDeductions, TransactionType
from backoffice_core.exceptions import AmountParseError
from backoffice_core.finance import (
    DISPLAY_LABELS,
    Partner,
    Product,
    calculate_totals,
    commit_projection,
    default_partners,
    default_products,
    payable_costs,
)

NOW = datetime(2025, 3, 10, 23, 0)


@pytest.fixture
def product() -> Product:
    """Product whose unit economics add up to 10000."""
    return Product(
        id="p1",
        name="Combo",
        labor_cost=Decimal("2000"),
        material_cost=Decimal("3000"),
        royalties=Decimal("1000"),
        profit=Decimal("4000"),
    )


def test_default_product_totals() -> None:
    """Test the seeded product."""
    totals = calculate_totals({"1": 2}, default_products())

    assert totals.labor == Decimal("4400")
    assert totals.material == Decimal("2704")
    assert totals.royalties == Decimal("1828")
    assert totals.profit == Decimal("4268")
    assert totals.total == Decimal("13200.00")


def test_calculate_totals_ignores_unknown_and_empty(product: Product) -> None:
    """Test that unknown ids, zero and empty quantities add nothing."""
    totals = calculate_totals({"p1": "3", "zzz": 5, "p2": "", "p3": None}, [product])
    assert totals.total == Decimal("30000")
    assert calculate_totals({"p1": 0}, [product]).total == 0


def test_calculate_totals_rejects_bad_quantities(product: Product) -> None:
    """Test that quantities must be whole non-negative numbers."""
    with pytest.raises(AmountParseError):
        calculate_totals({"p1": "dos"}, [product])
    with pytest.raises(AmountParseError):
        calculate_totals({"p1": "1.5"}, [product])
    with pytest.raises(AmountParseError):
        calculate_totals({"p1": -1}, [product])


def test_products_accept_plain_floats() -> None:
    """Test that float unit economics are stored as cents."""
    product = Product("p", "P", 2000.0, 3000.0, 1000.0, 4000.0)
    assert product.labor_cost == Decimal("2000.00")
    assert isinstance(product.profit, Decimal)

    totals = calculate_totals({"p": 1}, [product])
    assert totals.total == Decimal("10000.00")
    assert Product("q", "Q", 0.1, 0.2, 0, "1.005").unit_price == Decimal("1.31")


def test_display_labels_keep_field_mapping(product: Product) -> None:
    """Test that the royalties bucket is shown as net profit and vice versa."""
    labeled = calculate_totals({"p1": 1}, [product]).labeled()

    assert labeled[DISPLAY_LABELS["royalties"]] == Decimal("1000")
    assert labeled["Ganancia Neta"] == Decimal("1000")
    assert labeled["Regalías"] == Decimal("4000")
    assert labeled["Total"] == Decimal("10000")


def test_payable_costs(product: Product) -> None:
    """Test that shift expenses are subtracted and floored at zero."""
    totals = calculate_totals({"p1": 1}, [product])
    costs = payable_costs(totals, CashDeductions(labor=Decimal("1500"), material=Decimal("4000")))

    assert costs.labor == Decimal("500")
    assert costs.material == 0


def test_commit_projection_with_real_sales(product: Product) -> None:
    """Test 10000 theoretical, 12000 real -> 6000 partner profit, 1500 per 25%."""
    commit = commit_projection(
        {"p1": 1}, [product], default_partners(), "Ana", NOW, real_sales="12000"
    )

    assert commit.adjusted_partner_profit == Decimal("6000")
    assert [p.balance for p in commit.partners] == [Decimal("1500.00")] * 4

    assert commit.income.type == TransactionType.INCOME
    assert commit.income.amount == Decimal("12000.00")
    assert commit.income.category == "Ventas"
    assert commit.income.description == "Cierre Calculadora (Venta Real)"

    projection = commit.projection
    assert projection.total_sales == Decimal("10000")
    assert projection.real_sales == Decimal("12000")
    assert projection.net_profit == Decimal("1000")
    assert projection.royalties == Decimal("6000")
    assert [(i.name, i.qty) for i in projection.items] == [("Combo", 1)]


def test_commit_projection_defaults_to_theoretical(product: Product) -> None:
    """Test that without real sales the profit bucket is distributed unchanged."""
    partner = Partner("x", "Socio", Decimal("50"), balance=Decimal("100"))
    commit = commit_projection({"p1": 2, "p2": 0}, [product], [partner], "Ana", NOW)

    assert commit.income.amount == Decimal("20000")
    assert commit.adjusted_partner_profit == Decimal("8000")
    assert commit.partners[0].balance == Decimal("4100.00")


def test_commit_projection_low_sales_reduce_balances(product: Product) -> None:
    """Test that real sales far below theory can push the partner profit negative."""
    partner = Partner("x", "Socio", Decimal("25"))
    commit = commit_projection({"p1": 1}, [product], [partner], "Ana", NOW, real_sales=5000)

    assert commit.adjusted_partner_profit == Decimal("-1000")
    assert commit.partners[0].balance == Decimal("-250.00")
