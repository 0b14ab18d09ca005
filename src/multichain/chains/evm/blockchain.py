"""
EvmBlockchain - account-based chain adapter over Ethereum JSON-RPC
"""

import logging
from decimal import Decimal
from typing import Any

from eth_account import Account

from multichain.abi import unpack_transfer_log
from multichain.address.converter import EvmAddressConverter
from multichain.chains.base import Blockchain
from multichain.chains.evm.api import fetch_balance
from multichain.currencies import CurrencyRegistry
from multichain.exceptions import (
    BlockNotFoundError,
    ConfigurationError,
    TransactionNotFoundError,
)
from multichain.rpc import JsonRpcClient
from multichain.types import (
    Block,
    BlockchainSettings,
    ChainFamily,
    Transaction,
    TransactionStatus,
)
from multichain.utils.amount import from_minor_units, parse_hex_quantity

logger = logging.getLogger(__name__)


def receipt_status(receipt: dict[str, Any] | None) -> TransactionStatus:
    """Map a receipt status field; no receipt means the transaction is not mined yet"""
    if not receipt or receipt.get("status") is None:
        return TransactionStatus.PENDING
    status = parse_hex_quantity(receipt["status"])
    if status == 1:
        return TransactionStatus.SUCCEED
    if status == 0:
        return TransactionStatus.FAILED
    return TransactionStatus.PENDING


class EvmBlockchain(Blockchain):
    """EVM chain adapter serving the native asset and ERC20 tokens"""

    def __init__(self, client: JsonRpcClient | None = None) -> None:
        self._client = client
        self._converter = EvmAddressConverter()
        self._registry: CurrencyRegistry | None = None

    def configure(self, settings: BlockchainSettings) -> None:
        self._registry = CurrencyRegistry(ChainFamily.EVM, settings.currencies, self._converter)
        if self._client is None:
            self._client = JsonRpcClient(settings.uri)

    @property
    def _rpc(self) -> JsonRpcClient:
        if self._client is None:
            raise ConfigurationError("EvmBlockchain used before configure()")
        return self._client

    @property
    def _currencies(self) -> CurrencyRegistry:
        if self._registry is None:
            raise ConfigurationError("EvmBlockchain used before configure()")
        return self._registry

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def get_latest_block_number(self) -> int:
        return parse_hex_quantity(await self._rpc.call("eth_blockNumber"))

    async def get_block_by_number(self, block_number: int) -> Block:
        block = await self._rpc.call("eth_getBlockByNumber", hex(block_number), True)
        if not block:
            raise BlockNotFoundError(f"Block {block_number} not found")
        return await self._build_block(block)

    async def get_block_by_hash(self, block_hash: str) -> Block:
        block = await self._rpc.call("eth_getBlockByHash", block_hash, True)
        if not block:
            raise BlockNotFoundError(f"Block {block_hash} not found")
        return await self._build_block(block)

    async def _build_block(self, block: dict[str, Any]) -> Block:
        transactions: list[Transaction] = []
        for tx in block.get("transactions", []):
            transactions.extend(await self.build_transactions(tx))
        return Block(
            hash=block.get("hash"),
            number=parse_hex_quantity(block["number"]),
            transactions=transactions,
        )

    async def get_transaction(self, tx_hash: str) -> Transaction:
        tx = await self._rpc.call("eth_getTransactionByHash", tx_hash)
        if not tx:
            raise TransactionNotFoundError(f"Transaction {tx_hash} not found")

        transactions = await self.build_transactions(tx)
        if not transactions:
            raise TransactionNotFoundError(
                f"Transaction {tx_hash} moves no configured currency"
            )
        return transactions[0]

    async def build_transactions(self, tx: dict[str, Any]) -> list[Transaction]:
        """
        Normalize a node transaction object using its receipt.

        A receipt with logs is a token transfer: one record per configured
        Transfer event. Without logs it is a native transfer, except a failed
        call into a configured token contract, which yields a zero-amount
        failed record for that token.
        """
        receipt = await self._rpc.call("eth_getTransactionReceipt", tx["hash"])
        status = receipt_status(receipt)
        logs = (receipt or {}).get("logs") or []

        if logs:
            return self._build_token_transactions(tx, receipt, logs, status)

        if status is TransactionStatus.FAILED:
            token = self._currencies.find_by_contract(tx.get("to"))
            if token is not None:
                return await self._build_failed_token_transaction(tx, receipt, token.id)

        return await self._build_native_transaction(tx, receipt, status)

    async def _sender(self, tx: dict[str, Any]) -> str:
        if tx.get("from"):
            return self._converter.to_canonical(tx["from"])

        # Sender recovered from the signed payload
        raw = await self._rpc.call("eth_getRawTransactionByHash", tx["hash"])
        if not raw:
            raise TransactionNotFoundError(f"Raw transaction {tx['hash']} not found")
        return self._converter.to_canonical(Account.recover_transaction(raw))

    def _block_number(self, tx: dict[str, Any], receipt: dict[str, Any] | None) -> int:
        value = (receipt or {}).get("blockNumber") or tx.get("blockNumber")
        return parse_hex_quantity(value) if value else 0

    def _receipt_fee(self, tx: dict[str, Any], receipt: dict[str, Any]) -> Decimal:
        gas_used = parse_hex_quantity(receipt.get("gasUsed") or 0)
        price = parse_hex_quantity(receipt.get("effectiveGasPrice") or tx.get("gasPrice") or 0)
        return from_minor_units(gas_used * price, self._currencies.native.subunits)

    async def _build_native_transaction(
        self,
        tx: dict[str, Any],
        receipt: dict[str, Any] | None,
        status: TransactionStatus,
    ) -> list[Transaction]:
        if not tx.get("to"):
            logger.debug("Skipping contract creation %s", tx["hash"])
            return []

        native = self._currencies.native
        value = parse_hex_quantity(tx.get("value") or 0)
        gas = parse_hex_quantity(tx.get("gas") or 0)
        gas_price = parse_hex_quantity(tx.get("gasPrice") or tx.get("maxFeePerGas") or 0)

        # Fee is the gas allowance priced at the offered gas price (cost - value)
        cost = gas * gas_price + value
        return [
            Transaction(
                currency=native.id,
                currency_fee=native.id,
                from_addresses=[await self._sender(tx)],
                to_address=self._converter.to_canonical(tx["to"]),
                amount=from_minor_units(value, native.subunits),
                fee=from_minor_units(cost - value, native.subunits),
                block_number=self._block_number(tx, receipt),
                tx_hash=tx["hash"],
                status=status,
            )
        ]

    def _build_token_transactions(
        self,
        tx: dict[str, Any],
        receipt: dict[str, Any],
        logs: list[dict[str, Any]],
        status: TransactionStatus,
    ) -> list[Transaction]:
        native = self._currencies.native
        fee = self._receipt_fee(tx, receipt)
        block_number = self._block_number(tx, receipt)

        transactions: list[Transaction] = []
        for log in logs:
            if log.get("removed"):
                continue
            currency = self._currencies.find_by_contract(log.get("address"))
            if currency is None:
                continue
            transfer = unpack_transfer_log(
                log["address"], log.get("topics") or [], log.get("data") or "0x", self._converter
            )
            if transfer is None:
                continue
            transactions.append(
                Transaction(
                    currency=currency.id,
                    currency_fee=native.id,
                    from_addresses=[transfer.from_address],
                    to_address=transfer.to_address,
                    amount=from_minor_units(transfer.value, currency.subunits),
                    fee=fee,
                    block_number=block_number,
                    tx_hash=tx["hash"],
                    status=status,
                )
            )

        return transactions

    async def _build_failed_token_transaction(
        self,
        tx: dict[str, Any],
        receipt: dict[str, Any],
        currency_id: str,
    ) -> list[Transaction]:
        native = self._currencies.native
        return [
            Transaction(
                currency=currency_id,
                currency_fee=native.id,
                from_addresses=[await self._sender(tx)],
                amount=Decimal(0),
                fee=self._receipt_fee(tx, receipt),
                block_number=self._block_number(tx, receipt),
                tx_hash=tx["hash"],
                status=TransactionStatus.FAILED,
            )
        ]

    async def get_balance_of_address(self, address: str, currency_id: str) -> Decimal:
        currency = self._currencies.get(currency_id)
        return await fetch_balance(self._rpc, address, currency)
