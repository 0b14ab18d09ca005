"""
BitcoinBlockchain - UTXO chain adapter over bitcoind JSON-RPC
"""

import asyncio
import logging
from decimal import Decimal
from typing import Any

from multichain.chains.base import Blockchain
from multichain.config import ChainConfig
from multichain.currencies import CurrencyRegistry
from multichain.exceptions import (
    AddressNotFoundError,
    BlockNotFoundError,
    ConfigurationError,
    RpcError,
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
from multichain.utils.amount import to_decimal

logger = logging.getLogger(__name__)

# getblock verbosity returning full transaction objects
_VERBOSE_BLOCK = 2

# bitcoind error codes for unknown hashes and out-of-range heights
RPC_INVALID_ADDRESS_OR_KEY = -5
RPC_INVALID_PARAMETER = -8


def output_address(vout: dict[str, Any]) -> str | None:
    """Destination address of an output (Core >= 22 `address`, older `addresses`)"""
    script = vout.get("scriptPubKey") or {}
    if script.get("address"):
        return script["address"]
    addresses = script.get("addresses") or []
    return addresses[0] if addresses else None


def find_output(vouts: list[dict[str, Any]], index: Any) -> dict[str, Any] | None:
    for vout in vouts:
        if vout.get("n") == index:
            return vout
    return None


class BitcoinBlockchain(Blockchain):
    """UTXO chain adapter serving a single native currency"""

    def __init__(
        self,
        client: JsonRpcClient | None = None,
        max_workers: int | None = None,
    ) -> None:
        """
        Args:
            client: Node transport; created from the settings URI when omitted
            max_workers: Concurrent previous-transaction lookups per transaction
        """
        self._client = client
        self._max_workers = max_workers or ChainConfig.get_utxo_max_workers()
        self._registry: CurrencyRegistry | None = None

    def configure(self, settings: BlockchainSettings) -> None:
        self._registry = CurrencyRegistry(ChainFamily.BITCOIN, settings.currencies)
        if self._client is None:
            self._client = JsonRpcClient(settings.uri)

    @property
    def _rpc(self) -> JsonRpcClient:
        if self._client is None:
            raise ConfigurationError("BitcoinBlockchain used before configure()")
        return self._client

    @property
    def _currencies(self) -> CurrencyRegistry:
        if self._registry is None:
            raise ConfigurationError("BitcoinBlockchain used before configure()")
        return self._registry

    @property
    def _currency_id(self) -> str:
        return self._currencies.native.id

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def get_latest_block_number(self) -> int:
        return int(await self._rpc.call("getblockcount"))

    async def get_block_by_number(self, block_number: int) -> Block:
        try:
            block_hash = await self._rpc.call("getblockhash", block_number)
        except RpcError as e:
            if e.code in (RPC_INVALID_ADDRESS_OR_KEY, RPC_INVALID_PARAMETER):
                raise BlockNotFoundError(f"Block {block_number} not found") from e
            raise
        return await self.get_block_by_hash(block_hash)

    async def get_block_by_hash(self, block_hash: str) -> Block:
        try:
            block = await self._rpc.call("getblock", block_hash, _VERBOSE_BLOCK)
        except RpcError as e:
            if e.code in (RPC_INVALID_ADDRESS_OR_KEY, RPC_INVALID_PARAMETER):
                raise BlockNotFoundError(f"Block {block_hash} not found") from e
            raise
        if not block:
            raise BlockNotFoundError(f"Block {block_hash} not found")
        height = int(block["height"])
        transactions: list[Transaction] = []
        for tx in block.get("tx", []):
            transactions.extend(await self.build_transactions(tx, height))

        return Block(hash=block["hash"], number=height, transactions=transactions)

    async def get_transaction(self, tx_hash: str) -> Transaction:
        """Get the first output record of a transaction; see get_transactions"""
        transactions = await self.get_transactions(tx_hash)
        if not transactions:
            raise TransactionNotFoundError(f"Transaction {tx_hash} has no spendable outputs")
        return transactions[0]

    async def get_transactions(self, tx_hash: str) -> list[Transaction]:
        """Get one record per paying output of a transaction"""
        try:
            tx = await self._rpc.call("getrawtransaction", tx_hash, 1)
        except RpcError as e:
            if e.code == RPC_INVALID_ADDRESS_OR_KEY:
                raise TransactionNotFoundError(f"Transaction {tx_hash} not found") from e
            raise
        if not tx:
            raise TransactionNotFoundError(f"Transaction {tx_hash} not found")

        block_number = 0
        if tx.get("blockhash"):
            header = await self._rpc.call("getblockheader", tx["blockhash"])
            block_number = int(header["height"])

        return await self.build_transactions(tx, block_number)

    async def build_transactions(
        self, tx: dict[str, Any], block_number: int = 0
    ) -> list[Transaction]:
        """
        Normalize a verbose transaction into one record per paying output.

        Every record shares the resolved source addresses and the transaction
        fee. The fee is None when any input cannot be resolved or the
        transaction spends no previous output (coinbase).
        """
        outputs: list[tuple[str, Decimal]] = []
        for vout in tx.get("vout", []):
            value = to_decimal(vout.get("value", 0))
            address = output_address(vout)
            if value > 0 and address:
                outputs.append((address, value))

        if not outputs:
            return []

        sources = await self._resolve_inputs(tx)
        from_addresses: list[str] = []
        for source in sources:
            address = output_address(source) if source else None
            if address and address not in from_addresses:
                from_addresses.append(address)

        fee = None
        if sources and all(source is not None for source in sources):
            total_in = Decimal(0)
            for source in sources:
                total_in = total_in + to_decimal(source["value"])
            total_out = Decimal(0)
            for vout in tx.get("vout", []):
                total_out = total_out + to_decimal(vout.get("value", 0))
            fee = total_in - total_out

        return [
            Transaction(
                currency=self._currency_id,
                currency_fee=self._currency_id,
                from_addresses=from_addresses,
                to_address=address,
                amount=value,
                fee=fee,
                block_number=block_number,
                tx_hash=tx["txid"],
                status=TransactionStatus.SUCCEED,
            )
            for address, value in outputs
        ]

    async def _resolve_inputs(self, tx: dict[str, Any]) -> list[dict[str, Any] | None]:
        """
        Fetch the previous output spent by each non-coinbase input, in input order.

        Lookups run concurrently, bounded by max_workers, one per distinct
        previous transaction. The first failure cancels the remaining lookups
        and propagates.
        """
        inputs = [vin for vin in tx.get("vin", []) if vin.get("txid")]
        if not inputs:
            return []

        limiter = asyncio.Semaphore(self._max_workers)
        previous_ids = list(dict.fromkeys(vin["txid"] for vin in inputs))

        async def fetch(txid: str) -> dict[str, Any]:
            async with limiter:
                return await self._rpc.call("getrawtransaction", txid, 1)

        tasks = [asyncio.ensure_future(fetch(txid)) for txid in previous_ids]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        previous = dict(zip(previous_ids, results))
        resolved: list[dict[str, Any] | None] = []
        for vin in inputs:
            source = find_output((previous[vin["txid"]] or {}).get("vout", []), vin.get("vout"))
            if source is None:
                logger.debug(
                    "Unresolvable input %s:%s of %s", vin["txid"], vin.get("vout"), tx.get("txid")
                )
            resolved.append(source)
        return resolved

    async def get_balance_of_address(self, address: str, currency_id: str) -> Decimal:
        """Balance of a node-wallet address from `listaddressgroupings`"""
        self._currencies.get(currency_id)

        groupings = await self._rpc.call("listaddressgroupings")
        for group in groupings or []:
            for entry in group:
                if len(entry) >= 2 and str(entry[0]).lower() == address.lower():
                    return to_decimal(entry[1])

        raise AddressNotFoundError(f"Address {address} not found in node wallet")
