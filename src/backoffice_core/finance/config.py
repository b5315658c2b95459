"""Configuration constants for products, partners and the wallet."""

from decimal import Decimal

# Product seeded when no catalog has been saved yet:
# (id, name, labor_cost, material_cost, royalties, profit)
DEFAULT_PRODUCTS = [
    ("1", "Avocado - X4 U", "2200", "1352", "914", "2134"),
]

# Partners seeded when none have been saved yet: (id, name, share_percentage)
DEFAULT_PARTNERS = [
    ("1", "Socio 1", "25"),
    ("2", "Socio 2", "25"),
    ("3", "Socio 3", "25"),
    ("4", "Socio 4", "25"),
]

# Labels shown for each calculator bucket. The ``royalties`` bucket is shown
# as net profit and the ``profit`` bucket (distributed to partners) as
# royalties; partner payouts depend on this mapping.
DISPLAY_LABELS = {
    "labor": "Mano de Obra",
    "material": "Materia Prima",
    "royalties": "Ganancia Neta",
    "profit": "Regalías",
    "total": "Total",
}

# Wallet categories written by automated flows
SALES_CATEGORY = "Ventas"
ROYALTY_CATEGORY = "Regalías"
SALES_DESCRIPTION = "Cierre Calculadora (Venta Real)"

# Wallet category for each fixed-expense category; anything else is "Servicios"
FIXED_EXPENSE_WALLET_CATEGORIES = {
    "MATERIA_PRIMA": "Proveedores",
    "INFRAESTRUCTURA": "Mantenimiento",
}
DEFAULT_FIXED_EXPENSE_WALLET_CATEGORY = "Servicios"

# Days ahead of a due date at which a WARNING alert is raised
EXPENSE_WARNING_DAYS = 3
SALARY_WARNING_DAYS = 2

# Purchase simulator: SAFE needs this multiple of the cost left after obligations
SAFE_BUFFER = Decimal("1.2")
