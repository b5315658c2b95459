"""Finance: products, profitability calculator, partners, wallet.

Example:
    >>> from backoffice_core.finance import calculate_totals, default_products
    >>> totals = calculate_totals({"1": 2}, default_products())
    >>> totals.total
    Decimal('13200.00')
"""

from backoffice_core.finance.models import (
    CalculatorProjection,
    FixedExpense,
    FixedExpenseCategory,
    Partner,
    PaymentMethod,
    Product,
    ProjectionItem,
    WalletTransaction,
    default_partners,
    default_products,
)
from backoffice_core.finance.wallet import (
    AlertLevel,
    PaymentAlert,
    PurchaseSimulation,
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
from backoffice_core.finance.royalties import (
    distribute_profit,
    partner_history,
    pay_royalty,
    royalty_pool,
)
from backoffice_core.finance.calculator import (
    PayableCosts,
    ProfitTotals,
    ProjectionCommit,
    calculate_totals,
    commit_projection,
    payable_costs,
)
from backoffice_core.finance.config import DISPLAY_LABELS

__all__ = [
    "DISPLAY_LABELS",
    "AlertLevel",
    "CalculatorProjection",
    "FixedExpense",
    "FixedExpenseCategory",
    "Partner",
    "PayableCosts",
    "PaymentAlert",
    "PaymentMethod",
    "Product",
    "ProfitTotals",
    "ProjectionCommit",
    "ProjectionItem",
    "PurchaseSimulation",
    "PurchaseVerdict",
    "WalletTransaction",
    "calculate_totals",
    "commit_projection",
    "default_partners",
    "default_products",
    "distribute_profit",
    "outstanding",
    "partner_history",
    "pay_fixed_expense",
    "pay_royalty",
    "payable_costs",
    "payment_alerts",
    "record_transaction",
    "royalty_pool",
    "simulate_purchase",
    "void_transaction",
    "wallet_balance",
    "wallet_ledger_frame",
]
