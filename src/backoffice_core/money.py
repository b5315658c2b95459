"""Money and quantity helpers.

All monetary values in the package are ``Decimal`` quantized to cents, so
repeated additions (partner balances, running cash totals) never drift the
way binary floats do. Operator input goes through ``parse_amount`` /
``parse_count``, which report invalid input instead of coercing it to zero.

Examples:
    >>> parse_amount("$ 1.234,50")
    Decimal('1234.50')
    >>> to_money(1500 * 1.5)
    Decimal('2250.00')
    >>> format_ars(Decimal("3375"))
    '$ 3.375'

"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from backoffice_core.exceptions import AmountParseError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

_NUMBER_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")
_CURRENCY_TOKENS = ("ARS", "$")


def to_decimal(value: Number) -> Decimal:
    """Convert a trusted numeric value to Decimal without rounding.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal('0.1')``.

    Raises:
        AmountParseError: If the value is a bool, NaN or infinite.

    """
    if isinstance(value, bool):
        raise AmountParseError(f"Boolean is not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, int):
        result = Decimal(value)
    else:
        return parse_decimal(value)

    if not result.is_finite():
        raise AmountParseError(f"Not a finite number: {value!r}")
    return result


def to_money(value: Number) -> Decimal:
    """Quantize a value to cents using ROUND_HALF_UP."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _normalize_separators(text: str) -> str:
    """Turn es-AR / en-US formatted numbers into a plain ``1234.56`` string.

    - Both separators present: the right-most one is the decimal mark.
    - Only commas: one comma is a decimal comma, several are thousands.
    - Only dots: one dot is a decimal point, several are thousands.
    """
    has_dot = "." in text
    has_comma = "," in text

    if has_dot and has_comma:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if has_comma:
        if text.count(",") == 1:
            return text.replace(",", ".")
        return text.replace(",", "")
    if has_dot and text.count(".") > 1:
        return text.replace(".", "")
    return text


def parse_decimal(value: Number | None) -> Decimal:
    """Parse operator input into a Decimal, without rounding.

    Args:
        value: A number, or a string such as ``"1500"``, ``"$ 2.000,50"``,
            ``"12.5"`` or ``"-300"``.

    Returns:
        The parsed Decimal.

    Raises:
        AmountParseError: If the input is empty, not numeric, NaN or infinite.

    """
    if value is None:
        raise AmountParseError("Empty amount")
    if not isinstance(value, str):
        return to_decimal(value)

    text = value.strip()
    for token in _CURRENCY_TOKENS:
        text = text.replace(token, "")
    text = text.replace(" ", "").replace("\u00a0", "")
    if not text:
        raise AmountParseError(f"Empty amount: {value!r}")

    text = _normalize_separators(text)
    if not _NUMBER_RE.match(text):
        raise AmountParseError(f"Invalid amount: {value!r}")

    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise AmountParseError(f"Invalid amount: {value!r}") from e


def parse_amount(value: Number | None) -> Decimal:
    """Parse a monetary input and quantize it to cents.

    Raises:
        AmountParseError: See ``parse_decimal``.

    Examples:
        >>> parse_amount("2000")
        Decimal('2000.00')
        >>> parse_amount("abc")
        Traceback (most recent call last):
        ...
        backoffice_core.exceptions.AmountParseError: Invalid amount: 'abc'

    """
    return parse_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_count(value: Number | None) -> int:
    """Parse a whole, non-negative count such as an order count.

    Raises:
        AmountParseError: If the input is not a whole non-negative number.

    """
    number = parse_decimal(value)
    if number != number.to_integral_value() or number < 0:
        raise AmountParseError(f"Not a whole non-negative count: {value!r}")
    return int(number)


def format_ars(amount: Number, decimals: int = 0) -> str:
    """Format an amount the way es-AR displays pesos.

    Args:
        amount: Amount to format.
        decimals: Number of fraction digits (default: 0).

    Returns:
        A string like ``'$ 1.234'`` or ``'-$ 1.234,56'``.

    """
    value = to_decimal(amount)
    quantum = Decimal(1).scaleb(-decimals)
    value = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.{decimals}f}"
    # en-US grouping -> es-AR grouping
    body = body.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}$ {body}"
