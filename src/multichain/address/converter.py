"""
Address converter interface and implementations
"""

from abc import ABC, abstractmethod

from multichain.utils.address import (
    to_evm_checksum,
    tron_base58_to_hex,
    tron_hex_to_base58,
    word_to_address_body,
)


class AddressConverter(ABC):
    """Converts addresses between their user-facing and RPC wire encodings"""

    @abstractmethod
    def to_canonical(self, address: str) -> str:
        """Convert any accepted encoding to the user-facing form"""
        pass

    @abstractmethod
    def to_rpc(self, address: str) -> str:
        """Convert to the encoding node RPC payloads expect"""
        pass

    @abstractmethod
    def from_word(self, word: str) -> str:
        """Decode an address right-aligned in a 32-byte ABI word"""
        pass

    @abstractmethod
    def to_word(self, address: str) -> str:
        """Encode an address as a 32-byte ABI word (64 hex chars, no prefix)"""
        pass


class EvmAddressConverter(AddressConverter):
    """EVM address converter"""

    def to_canonical(self, address: str) -> str:
        return to_evm_checksum(address)

    def to_rpc(self, address: str) -> str:
        return to_evm_checksum(address).lower()

    def from_word(self, word: str) -> str:
        return to_evm_checksum("0x" + word_to_address_body(word))

    def to_word(self, address: str) -> str:
        return self.to_rpc(address)[2:].rjust(64, "0")


class TronAddressConverter(AddressConverter):
    """TRON address converter: Base58Check for users, 41-prefixed hex on the wire"""

    def to_canonical(self, address: str) -> str:
        if address.startswith("T"):
            return tron_hex_to_base58(tron_base58_to_hex(address))
        return tron_hex_to_base58(address)

    def to_rpc(self, address: str) -> str:
        if address.startswith("T"):
            return tron_base58_to_hex(address)
        return tron_base58_to_hex(tron_hex_to_base58(address))

    def from_word(self, word: str) -> str:
        return tron_hex_to_base58(word_to_address_body(word))

    def to_word(self, address: str) -> str:
        # Drop the network prefix byte
        return self.to_rpc(address)[2:].rjust(64, "0")
