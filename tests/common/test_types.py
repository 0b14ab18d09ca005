"""
Tests for multichain data models
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from multichain.types import (
    AssetKind,
    Block,
    Currency,
    CurrencyOptions,
    Transaction,
    TransactionStatus,
)


class TestCurrencyOptions:
    def test_kinds(self):
        assert CurrencyOptions().kind is AssetKind.NATIVE
        assert CurrencyOptions(erc20_contract_address="0xabc").kind is AssetKind.CONTRACT
        assert CurrencyOptions(trc20_contract_address="Tabc").kind is AssetKind.CONTRACT
        assert CurrencyOptions(trc10_asset_id="1002000").kind is AssetKind.ASSET_ID

    def test_single_identifier(self):
        with pytest.raises(ValidationError):
            CurrencyOptions(trc20_contract_address="Tabc", trc10_asset_id="1002000")

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            CurrencyOptions(contract="0xabc")

    def test_fee_options_only_set_keys(self):
        options = CurrencyOptions(erc20_contract_address="0xabc", gas_limit=60000, gas_rate="fast")
        assert options.fee_options() == {"gas_limit": 60000, "gas_rate": "fast"}

    def test_negative_fee_rejected(self):
        with pytest.raises(ValidationError):
            CurrencyOptions(fee_limit=-1)


class TestCurrency:
    def test_native(self):
        currency = Currency(id="eth", subunits=18)
        assert currency.is_native
        assert currency.kind is AssetKind.NATIVE

    def test_frozen(self):
        currency = Currency(id="eth", subunits=18)
        with pytest.raises(ValidationError):
            currency.subunits = 6

    def test_subunits_range(self):
        with pytest.raises(ValidationError):
            Currency(id="x", subunits=-1)


class TestTransaction:
    def test_defaults(self):
        tx = Transaction(currency="btc")
        assert tx.status is TransactionStatus.PENDING
        assert tx.amount == Decimal(0)
        assert tx.fee is None
        assert tx.from_address is None

    def test_from_address_is_first_source(self):
        tx = Transaction(currency="btc", from_addresses=["a", "b"])
        assert tx.from_address == "a"

    def test_annotated_copy_leaves_original(self):
        tx = Transaction(currency="eth", to_address="0xabc", amount=Decimal("1"))
        sent = tx.model_copy(update={"tx_hash": "0x01"})
        assert tx.tx_hash is None
        assert sent.tx_hash == "0x01"

    def test_negative_block_number_rejected(self):
        with pytest.raises(ValidationError):
            Block(number=-1)

    def test_terminal_decisions(self):
        assert TransactionStatus.SKIPPED.is_terminal_decision
        assert TransactionStatus.REJECTED.is_terminal_decision
        assert not TransactionStatus.FAILED.is_terminal_decision
