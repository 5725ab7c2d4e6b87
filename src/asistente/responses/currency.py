"""Chilean peso formatting.

Amounts are shown the way es-CL renders CLP: "$" prefix, "." thousands
grouping and no decimals.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_GROUPED_NUMBER = re.compile(r"^-?\d{1,3}(?:\.\d{3})+(?:,\d+)?$")


def parse_amount(value: Any) -> float | None:
    """Parse a numeric value, returning None if it is not a number.

    Accepts ints and floats (bools excluded) and numeric strings. Strings
    grouped with "." and an optional "," decimal part ("12.345,5") are read
    the Chilean way; anything else goes through float().
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None

    text = value.strip().replace("$", "").replace(" ", "")
    if not text:
        return None
    if _GROUPED_NUMBER.match(text):
        text = text.replace(".", "").replace(",", ".")
    try:
        number = float(text)
    except ValueError:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def format_clp(value: Any) -> str:
    """Format an amount as CLP currency text without decimals.

    Args:
        value: Number or numeric string

    Returns:
        Text such as "$12.345.678"; unparsable input comes back as str(value)
    """
    amount = parse_amount(value)
    if amount is None:
        return str(value)

    try:
        rounded = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return str(value)

    grouped = f"{abs(rounded):,}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}${grouped}"
