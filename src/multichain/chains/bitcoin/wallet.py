"""
BitcoinWallet - UTXO wallet adapter over bitcoind JSON-RPC
"""

import logging
from decimal import Decimal
from typing import Any

from multichain.chains.base import Wallet, ensure_submittable
from multichain.exceptions import ConfigurationError
from multichain.rpc import JsonRpcClient
from multichain.types import (
    Currency,
    Transaction,
    TransactionStatus,
    WalletAccount,
    WalletSettings,
)
from multichain.utils.amount import to_decimal
from multichain.utils.secret import random_secret

logger = logging.getLogger(__name__)


class BitcoinWallet(Wallet):
    """Wallet adapter backed by the node's built-in wallet"""

    def __init__(self, client: JsonRpcClient | None = None) -> None:
        self._client = client
        self._currency: Currency | None = None
        self._account: WalletAccount | None = None

    def configure(self, settings: WalletSettings) -> None:
        if settings.wallet is not None:
            self._account = settings.wallet
            if self._client is None:
                self._client = JsonRpcClient(settings.wallet.uri)
        if settings.currency is not None:
            if not settings.currency.is_native:
                raise ConfigurationError(
                    f"Bitcoin wallets serve native currencies only, got {settings.currency.id}"
                )
            self._currency = settings.currency

    @property
    def _rpc(self) -> JsonRpcClient:
        if self._client is None:
            raise ConfigurationError("BitcoinWallet has no wallet endpoint configured")
        return self._client

    @property
    def _wallet(self) -> WalletAccount:
        if self._account is None:
            raise ConfigurationError("BitcoinWallet has no wallet account configured")
        return self._account

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def create_address(self) -> tuple[str, str]:
        """Create a node-wallet address labelled with a fresh secret"""
        secret = random_secret()
        address = await self._rpc.call("getnewaddress", secret)
        return address, secret

    async def create_transaction(
        self,
        transaction: Transaction,
        options: dict[str, Any] | None = None,
    ) -> Transaction:
        """Send from the node wallet with `sendtoaddress`; the node picks the fee"""
        ensure_submittable(transaction)

        txid = await self._rpc.call(
            "sendtoaddress",
            transaction.to_address,
            f"{transaction.amount:f}",
            "",
            "",
            False,
        )
        logger.info(
            "Submitted %s %s to %s: %s",
            transaction.amount,
            transaction.currency,
            transaction.to_address,
            txid,
        )
        return transaction.model_copy(
            update={
                "tx_hash": txid,
                "status": TransactionStatus.PENDING,
                "from_addresses": transaction.from_addresses or [self._wallet.address],
            }
        )

    async def load_balance(self) -> Decimal:
        """Sum of the wallet address entries in `listaddressgroupings`"""
        address = self._wallet.address.lower()
        balance = Decimal(0)

        groupings = await self._rpc.call("listaddressgroupings")
        for group in groupings or []:
            for entry in group:
                if len(entry) >= 2 and str(entry[0]).lower() == address:
                    balance = balance + to_decimal(entry[1])

        return balance

    async def prepare_deposit_collection(
        self,
        funding_transaction: Transaction,
        spreads: list[Transaction],
        deposit_currency: Currency,
    ) -> Transaction | None:
        """UTXO deposits carry their own fee, so collection never needs funding"""
        logger.debug("No funding step for %s deposit collection", deposit_currency.id)
        return None
