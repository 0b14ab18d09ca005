"""
Address utility functions for TRON and EVM address conversion
"""

import logging

import base58
from tronpy.keys import to_base58check_address
from web3 import Web3

from multichain.config import ChainConfig
from multichain.exceptions import DecodingError

logger = logging.getLogger(__name__)

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def _is_hex(value: str) -> bool:
    return bool(value) and all(c in _HEX_DIGITS for c in value)


def tron_hex_to_base58(hex_addr: str) -> str:
    """Convert a TRON hex address to Base58Check.

    Accepts the prefixed 21-byte form (41...), a bare 20-byte body, or an
    EVM-style 0x body.
    """
    prefix = ChainConfig.TRON_ADDRESS_PREFIX
    body = hex_addr[2:] if hex_addr[:2].lower() == "0x" else hex_addr
    if len(body) == 40:
        body = prefix + body
    if len(body) != 42 or not _is_hex(body) or not body.startswith(prefix):
        raise DecodingError(f"Invalid TRON hex address: {hex_addr!r}")
    try:
        return to_base58check_address(body.lower())
    except ValueError as e:
        raise DecodingError(f"Invalid TRON hex address: {hex_addr!r}") from e


def tron_base58_to_hex(address: str) -> str:
    """Convert a TRON Base58Check address to the 41-prefixed hex form used by the HTTP API"""
    prefix = ChainConfig.TRON_ADDRESS_PREFIX
    if len(address) == 42 and address.startswith(prefix) and _is_hex(address):
        return address.lower()
    try:
        decoded = base58.b58decode_check(address)
    except ValueError as e:
        raise DecodingError(f"Invalid TRON address: {address!r}") from e
    # 1-byte network prefix + 20-byte account id
    hex_addr = decoded.hex()
    if len(decoded) != 21 or not hex_addr.startswith(prefix):
        raise DecodingError(f"Invalid TRON address prefix: {address!r}")
    return hex_addr


def word_to_address_body(word: str) -> str:
    """Take the low 20 bytes of a 32-byte ABI word (event topic) as 40 hex chars"""
    digits = word[2:] if word[:2].lower() == "0x" else word
    if len(digits) != 64 or not _is_hex(digits):
        raise DecodingError(f"Invalid 32-byte word: {word!r}")
    return digits[24:].lower()


def to_evm_checksum(address: str) -> str:
    """Normalize an EVM address to its EIP-55 checksum form"""
    if not isinstance(address, str) or not Web3.is_address(address.lower()):
        raise DecodingError(f"Invalid EVM address: {address!r}")
    return Web3.to_checksum_address(address)
