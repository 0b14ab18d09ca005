"""
TronWallet - wallet adapter building, signing and broadcasting through a full node
"""

import logging
from decimal import Decimal
from typing import Any

from tronpy.keys import PrivateKey

from multichain.abi import TRANSFER_SELECTOR, encode_transfer_arguments
from multichain.address.converter import TronAddressConverter
from multichain.chains.base import Wallet, ensure_submittable
from multichain.chains.tron.api import (
    FEE_DEFAULTS,
    TronFeeOptions,
    decode_message,
    fetch_balance,
)
from multichain.exceptions import ConfigurationError, TransactionRejectedError
from multichain.rpc import TronHttpClient
from multichain.types import (
    AssetKind,
    Currency,
    Transaction,
    TransactionStatus,
    WalletAccount,
    WalletSettings,
)
from multichain.utils.amount import from_minor_units, to_minor_units
from multichain.utils.options import resolve_options

logger = logging.getLogger(__name__)


class TronWallet(Wallet):
    """Wallet adapter for one TRON currency (TRX, TRC10 or TRC20)"""

    def __init__(self, client: TronHttpClient | None = None) -> None:
        self._client = client
        self._converter = TronAddressConverter()
        self._currency: Currency | None = None
        self._account: WalletAccount | None = None

    def configure(self, settings: WalletSettings) -> None:
        if settings.wallet is not None:
            self._account = settings.wallet
            if self._client is None:
                self._client = TronHttpClient(settings.wallet.uri)
        if settings.currency is not None:
            self._currency = settings.currency

    @property
    def _api(self) -> TronHttpClient:
        if self._client is None:
            raise ConfigurationError("TronWallet has no wallet endpoint configured")
        return self._client

    @property
    def _wallet(self) -> WalletAccount:
        if self._account is None:
            raise ConfigurationError("TronWallet has no wallet account configured")
        return self._account

    @property
    def _wallet_currency(self) -> Currency:
        if self._currency is None:
            raise ConfigurationError("TronWallet has no currency configured")
        return self._currency

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def create_address(self) -> tuple[str, str]:
        """Generate a key pair locally; the secret is the hex private key"""
        private_key = PrivateKey.random()
        return private_key.public_key.to_base58check_address(), private_key.hex()

    def _fee_options(self, currency: Currency, *overrides: dict[str, Any] | None) -> TronFeeOptions:
        return TronFeeOptions(
            **resolve_options(FEE_DEFAULTS, currency.options.fee_options(), *overrides)
        )

    async def create_transaction(
        self,
        transaction: Transaction,
        options: dict[str, Any] | None = None,
    ) -> Transaction:
        """
        Build, sign and broadcast a TRX, TRC10 or TRC20 transfer.

        Raises:
            TransactionRejectedError: The node refused to build or broadcast it
        """
        ensure_submittable(transaction)
        currency = self._wallet_currency
        amount = to_minor_units(transaction.amount, currency.subunits)
        owner = self._converter.to_rpc(self._wallet.address)
        recipient = self._converter.to_rpc(str(transaction.to_address))
        extra_options: dict[str, Any] = {}

        if currency.kind is AssetKind.NATIVE:
            unsigned = await self._api.post(
                "wallet/createtransaction",
                {"owner_address": owner, "to_address": recipient, "amount": amount},
            )
        elif currency.kind is AssetKind.ASSET_ID:
            asset_name = str(currency.options.trc10_asset_id).encode().hex()
            unsigned = await self._api.post(
                "wallet/transferasset",
                {
                    "owner_address": owner,
                    "to_address": recipient,
                    "asset_name": asset_name,
                    "amount": amount,
                },
            )
        else:
            fee_options = self._fee_options(currency, transaction.options, options)
            unsigned = await self._trigger_transfer(
                owner, str(transaction.to_address), amount, currency, fee_options
            )
            extra_options["fee_limit"] = fee_options.fee_limit

        tx_hash = await self._sign_and_broadcast(unsigned)
        logger.info(
            "Broadcast %s %s to %s: %s",
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
                "options": {**transaction.options, **extra_options},
            }
        )

    async def _trigger_transfer(
        self,
        owner: str,
        to_address: str,
        amount: int,
        currency: Currency,
        fee_options: TronFeeOptions,
    ) -> dict[str, Any]:
        """Build an unsigned TRC20 transfer(address,uint256) call"""
        response = await self._api.post(
            "wallet/triggersmartcontract",
            {
                "owner_address": owner,
                "contract_address": self._converter.to_rpc(str(currency.options.contract_address)),
                "function_selector": TRANSFER_SELECTOR,
                "parameter": encode_transfer_arguments(self._converter.to_word(to_address), amount),
                "fee_limit": fee_options.fee_limit,
                "call_value": 0,
            },
        )
        result = response.get("result") or {}
        if not result.get("result") or not response.get("transaction"):
            raise TransactionRejectedError(
                decode_message(result.get("message")) or "triggersmartcontract failed",
                result.get("code"),
            )
        return response["transaction"]

    async def _sign_and_broadcast(self, unsigned: dict[str, Any]) -> str:
        if not unsigned.get("txID"):
            raise TransactionRejectedError("Node did not build a transaction")

        signed = await self._api.post(
            "wallet/gettransactionsign",
            {"transaction": unsigned, "privateKey": self._wallet.secret},
        )
        response = await self._api.post("wallet/broadcasttransaction", signed)
        # Accepted for broadcast only; inclusion is observed through the chain adapter
        if not response.get("result"):
            raise TransactionRejectedError(
                decode_message(response.get("message")) or "broadcast rejected",
                response.get("code"),
            )
        return signed.get("txID") or unsigned["txID"]

    async def load_balance(self) -> Decimal:
        return await fetch_balance(self._api, self._wallet.address, self._wallet_currency)

    async def prepare_deposit_collection(
        self,
        funding_transaction: Transaction,
        spreads: list[Transaction],
        deposit_currency: Currency,
    ) -> Transaction | None:
        """TRX needed to collect token deposits: fee_limit sun per spread"""
        if deposit_currency.is_native or not spreads:
            return None

        native = self._wallet_currency
        if not native.is_native:
            raise ConfigurationError(
                f"Deposit funding needs a native wallet currency, got {native.id}"
            )

        fee_options = self._fee_options(deposit_currency, funding_transaction.options)
        total = fee_options.fee_limit * len(spreads)
        logger.debug(
            "Funding %d %s deposit(s) with fee limit %s",
            len(spreads),
            deposit_currency.id,
            fee_options.fee_limit,
        )
        return funding_transaction.model_copy(
            update={
                "currency": native.id,
                "amount": from_minor_units(total, native.subunits),
                "options": {**funding_transaction.options, "fee_limit": fee_options.fee_limit},
            }
        )
