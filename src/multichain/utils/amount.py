"""
Conversion between minor-unit integers and canonical decimal amounts
"""

from decimal import Context, Decimal, InvalidOperation
from typing import Any

from multichain.exceptions import DecodingError

# Wide enough to scale any uint256 minor-unit value without rounding
_EXACT = Context(prec=100)


def to_decimal(value: Any) -> Decimal:
    """Parse a node-supplied numeric value without going through binary floats"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise DecodingError(f"Invalid numeric value: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise DecodingError(f"Invalid numeric value: {value!r}") from e


def from_minor_units(value: int, subunits: int) -> Decimal:
    """Convert a minor-unit integer (satoshi, wei, sun) to a canonical amount.

    Args:
        value: Amount in minor units
        subunits: Decimal exponent of the currency

    Returns:
        Exact decimal amount
    """
    return Decimal(int(value)).scaleb(-subunits, context=_EXACT)


def to_minor_units(amount: Decimal, subunits: int) -> int:
    """Convert a canonical amount to a minor-unit integer.

    Raises:
        DecodingError: If the amount has more precision than the currency allows
    """
    scaled = to_decimal(amount).scaleb(subunits, context=_EXACT)
    if scaled != scaled.to_integral_value():
        raise DecodingError(f"Amount {amount} exceeds {subunits} decimal places")
    return int(scaled)


def parse_hex_quantity(value: Any) -> int:
    """Parse a hex quantity ('0x1a', '1a', '0x') into an integer"""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str):
        raise DecodingError(f"Invalid hex quantity: {value!r}")
    digits = value[2:] if value[:2].lower() == "0x" else value
    if not digits:
        return 0
    try:
        return int(digits, 16)
    except ValueError as e:
        raise DecodingError(f"Invalid hex quantity: {value!r}") from e
