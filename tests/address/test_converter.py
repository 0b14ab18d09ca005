"""
Tests for chain address converters
"""

import pytest

from multichain.address import EvmAddressConverter, TronAddressConverter
from multichain.exceptions import DecodingError

USDT_BASE58 = "TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"
USDT_HEX = "41a614f803b6fd780986a42c78ec9c7f77e6ded13c"
EVM_CHECKSUM = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
TRON_ZERO = "T9yD14Nj9j7xAB4dbGeiX9h8unkKHxuWwb"


class TestEvmAddressConverter:
    def setup_method(self):
        self.converter = EvmAddressConverter()

    def test_canonical_and_rpc(self):
        assert self.converter.to_canonical(EVM_CHECKSUM.lower()) == EVM_CHECKSUM
        assert self.converter.to_rpc(EVM_CHECKSUM) == EVM_CHECKSUM.lower()

    def test_word_round_trip(self):
        word = self.converter.to_word(EVM_CHECKSUM)
        assert len(word) == 64
        assert word.startswith("0" * 24)
        assert self.converter.from_word(word) == EVM_CHECKSUM
        assert self.converter.from_word("0x" + word) == EVM_CHECKSUM

    def test_invalid(self):
        with pytest.raises(DecodingError):
            self.converter.to_canonical("0xnope")


class TestTronAddressConverter:
    def setup_method(self):
        self.converter = TronAddressConverter()

    def test_canonical_from_any_encoding(self):
        assert self.converter.to_canonical(USDT_BASE58) == USDT_BASE58
        assert self.converter.to_canonical(USDT_HEX) == USDT_BASE58
        assert self.converter.to_canonical(USDT_HEX[2:]) == USDT_BASE58
        assert self.converter.to_canonical("0x" + USDT_HEX[2:]) == USDT_BASE58

    def test_rpc_is_prefixed_hex(self):
        assert self.converter.to_rpc(USDT_BASE58) == USDT_HEX
        assert self.converter.to_rpc(USDT_HEX.upper()) == USDT_HEX
        assert self.converter.to_rpc("0x" + USDT_HEX[2:]) == USDT_HEX

    def test_word_drops_prefix_byte(self):
        word = self.converter.to_word(USDT_BASE58)
        assert word == "0" * 24 + USDT_HEX[2:]
        assert self.converter.from_word(word) == USDT_BASE58

    def test_zero_address(self):
        assert self.converter.to_rpc(TRON_ZERO) == "41" + "00" * 20
        assert self.converter.to_canonical("41" + "00" * 20) == TRON_ZERO

    def test_encodings_agree(self):
        assert self.converter.to_canonical(USDT_HEX) == self.converter.to_canonical(USDT_BASE58)
        assert self.converter.to_canonical(USDT_HEX) != TRON_ZERO
