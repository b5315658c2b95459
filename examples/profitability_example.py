"""Example: Profitability calculator and partner payouts

This example computes the theoretical totals for a day's sales, commits
them against the real sales figure, and pays one partner's royalties.

Prerequisites:
- Optionally set BO_DATA_ROOT (defaults to ./data)
"""

import logging

from backoffice_core import Backoffice, Settings, format_ars
from backoffice_core.storage import build_store

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

office = Backoffice(build_store(Settings.from_env()))

quantities = {"1": 40}  # product id -> units sold, MODIFY AS NEEDED
real_sales = "$ 270.000,00"  # MODIFY AS NEEDED

totals = office.calculator_totals(quantities)
print("Theoretical totals:")
for label, amount in totals.labeled().items():
    print(f"  {label:<15} {format_ars(amount)}")

costs = office.payable_costs(quantities)
print(f"\nStill to pay: labor {format_ars(costs.labor)}, material {format_ars(costs.material)}")

commit = office.commit_projection(quantities, created_by="Admin", real_sales=real_sales)
print(f"\nPartner profit after real sales: {format_ars(commit.adjusted_partner_profit)}")
for partner in commit.partners:
    print(f"  {partner.name}: {format_ars(partner.balance, decimals=2)}")

tx = office.pay_royalty(commit.partners[0].id, created_by="Admin")
print(f"\nPaid {format_ars(tx.amount, decimals=2)} ({tx.description})")
print(f"Royalty pool left: {format_ars(office.royalty_pool(), decimals=2)}")
print(f"Wallet balance:    {format_ars(office.wallet_balance(), decimals=2)}")
