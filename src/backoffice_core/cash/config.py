"""Configuration constants for cash-register shifts."""

from decimal import Decimal

# A closed shift is balanced when |final cash - expected cash| < BALANCE_TOLERANCE (ARS)
BALANCE_TOLERANCE = Decimal("10")

# Look-back windows for shift statistics, as pandas DateOffset keyword arguments
PERIOD_OFFSETS = {
    "WEEK": {"days": 7},
    "MONTH": {"months": 1},
    "YEAR": {"years": 1},
}
