"""
Address converter module
"""

from multichain.address.converter import (
    AddressConverter,
    EvmAddressConverter,
    TronAddressConverter,
)

__all__ = [
    "AddressConverter",
    "EvmAddressConverter",
    "TronAddressConverter",
]
