"""
Shared helpers: amount conversion, option resolution, address encoding
"""

from multichain.utils.amount import (
    from_minor_units,
    parse_hex_quantity,
    to_decimal,
    to_minor_units,
)
from multichain.utils.options import resolve_options

__all__ = [
    "from_minor_units",
    "parse_hex_quantity",
    "resolve_options",
    "to_decimal",
    "to_minor_units",
]
