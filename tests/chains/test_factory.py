"""
Tests for the chain family factory
"""

import pytest

import multichain
from multichain.chains import (
    BitcoinBlockchain,
    BitcoinWallet,
    EvmBlockchain,
    EvmWallet,
    TronBlockchain,
    TronWallet,
    new_blockchain,
    new_wallet,
)
from multichain.exceptions import ConfigurationError
from multichain.types import ChainFamily


class TestFactory:
    @pytest.mark.parametrize(
        "family,blockchain_type,wallet_type",
        [
            (ChainFamily.BITCOIN, BitcoinBlockchain, BitcoinWallet),
            (ChainFamily.EVM, EvmBlockchain, EvmWallet),
            (ChainFamily.TRON, TronBlockchain, TronWallet),
            ("tron", TronBlockchain, TronWallet),
        ],
    )
    def test_selects_adapter(self, family, blockchain_type, wallet_type):
        assert isinstance(new_blockchain(family), blockchain_type)
        assert isinstance(new_wallet(family), wallet_type)

    def test_unknown_family(self):
        with pytest.raises(ConfigurationError):
            new_blockchain("solana")
        with pytest.raises(ConfigurationError):
            new_wallet("solana")

    def test_instances_are_independent(self):
        assert new_blockchain("evm") is not new_blockchain("evm")

    def test_package_exports(self):
        assert multichain.new_blockchain is new_blockchain
        assert issubclass(multichain.TransactionNotFoundError, multichain.MultichainError)
