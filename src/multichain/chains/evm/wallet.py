"""
EvmWallet - wallet adapter signing through the node's personal namespace
"""

import logging
from decimal import Decimal
from typing import Any

from multichain.abi import TRANSFER_SELECTOR, encode_call, encode_transfer_arguments
from multichain.address.converter import EvmAddressConverter
from multichain.chains.base import Wallet, ensure_submittable
from multichain.chains.evm.api import (
    NATIVE_FEE_DEFAULTS,
    TOKEN_FEE_DEFAULTS,
    EvmFeeOptions,
    effective_gas_price,
    fetch_balance,
)
from multichain.exceptions import ConfigurationError, TransactionRejectedError
from multichain.rpc import JsonRpcClient
from multichain.types import (
    Currency,
    Transaction,
    TransactionStatus,
    WalletAccount,
    WalletSettings,
)
from multichain.utils.amount import from_minor_units, to_minor_units
from multichain.utils.options import resolve_options
from multichain.utils.secret import random_secret

logger = logging.getLogger(__name__)


class EvmWallet(Wallet):
    """Wallet adapter for one EVM currency (native or ERC20)"""

    def __init__(self, client: JsonRpcClient | None = None) -> None:
        self._client = client
        self._converter = EvmAddressConverter()
        self._currency: Currency | None = None
        self._account: WalletAccount | None = None

    def configure(self, settings: WalletSettings) -> None:
        if settings.wallet is not None:
            self._account = settings.wallet
            if self._client is None:
                self._client = JsonRpcClient(settings.wallet.uri)
        if settings.currency is not None:
            self._currency = settings.currency

    @property
    def _rpc(self) -> JsonRpcClient:
        if self._client is None:
            raise ConfigurationError("EvmWallet has no wallet endpoint configured")
        return self._client

    @property
    def _wallet(self) -> WalletAccount:
        if self._account is None:
            raise ConfigurationError("EvmWallet has no wallet account configured")
        return self._account

    @property
    def _wallet_currency(self) -> Currency:
        if self._currency is None:
            raise ConfigurationError("EvmWallet has no currency configured")
        return self._currency

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def create_address(self) -> tuple[str, str]:
        """Create a node-managed account locked with a fresh passphrase"""
        secret = random_secret()
        address = await self._rpc.call("personal_newAccount", secret)
        return self._converter.to_canonical(address), secret

    def _fee_options(self, currency: Currency, *overrides: dict[str, Any] | None) -> EvmFeeOptions:
        defaults = NATIVE_FEE_DEFAULTS if currency.is_native else TOKEN_FEE_DEFAULTS
        return EvmFeeOptions(
            **resolve_options(defaults, currency.options.fee_options(), *overrides)
        )

    async def create_transaction(
        self,
        transaction: Transaction,
        options: dict[str, Any] | None = None,
    ) -> Transaction:
        """
        Submit a native or ERC20 transfer with `personal_sendTransaction`.

        Fee options resolve as engine defaults, then currency options, then the
        transaction options, then the per-call overrides. Without an explicit
        gas_price the node price is scaled by the gas_rate multiplier.
        """
        ensure_submittable(transaction)
        currency = self._wallet_currency
        fee_options = self._fee_options(currency, transaction.options, options)
        gas_price = await effective_gas_price(self._rpc, fee_options)

        amount = to_minor_units(transaction.amount, currency.subunits)
        sender = self._converter.to_rpc(self._wallet.address)
        recipient = self._converter.to_rpc(str(transaction.to_address))
        request: dict[str, Any] = {
            "from": sender,
            "gas": hex(fee_options.gas_limit),
            "gasPrice": hex(gas_price),
        }
        if currency.is_native:
            request.update({"to": recipient, "value": hex(amount)})
        else:
            arguments = encode_transfer_arguments(
                self._converter.to_word(str(transaction.to_address)), amount
            )
            request.update(
                {
                    "to": self._converter.to_rpc(str(currency.options.contract_address)),
                    "value": "0x0",
                    "data": encode_call(TRANSFER_SELECTOR, arguments),
                }
            )

        tx_hash = await self._rpc.call("personal_sendTransaction", request, self._wallet.secret)
        if not tx_hash:
            raise TransactionRejectedError("Node returned no transaction hash")

        logger.info(
            "Submitted %s %s to %s: %s",
            transaction.amount,
            currency.id,
            transaction.to_address,
            tx_hash,
        )
        return transaction.model_copy(
            update={
                "tx_hash": tx_hash,
                "status": TransactionStatus.PENDING,
                "from_addresses": [self._converter.to_canonical(self._wallet.address)],
                "options": {
                    **transaction.options,
                    "gas_limit": fee_options.gas_limit,
                    "gas_price": gas_price,
                },
            }
        )

    async def load_balance(self) -> Decimal:
        return await fetch_balance(self._rpc, self._wallet.address, self._wallet_currency)

    async def prepare_deposit_collection(
        self,
        funding_transaction: Transaction,
        spreads: list[Transaction],
        deposit_currency: Currency,
    ) -> Transaction | None:
        """
        Native amount the collector needs to move token deposits out.

        Every spread costs one token transfer of gas_limit * gas_price wei;
        the wallet currency must be the chain's native asset.
        """
        if deposit_currency.is_native or not spreads:
            return None

        native = self._wallet_currency
        if not native.is_native:
            raise ConfigurationError(
                f"Deposit funding needs a native wallet currency, got {native.id}"
            )

        fee_options = self._fee_options(deposit_currency, funding_transaction.options)
        gas_price = await effective_gas_price(self._rpc, fee_options)
        total = fee_options.gas_limit * gas_price * len(spreads)

        logger.debug(
            "Funding %d %s deposit(s) with %s gas at %s wei",
            len(spreads),
            deposit_currency.id,
            fee_options.gas_limit,
            gas_price,
        )
        return funding_transaction.model_copy(
            update={
                "currency": native.id,
                "amount": from_minor_units(total, native.subunits),
                "options": {
                    **funding_transaction.options,
                    "gas_limit": fee_options.gas_limit,
                    "gas_price": gas_price,
                },
            }
        )
