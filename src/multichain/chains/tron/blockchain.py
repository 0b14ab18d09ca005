"""
TronBlockchain - TRON chain adapter over the java-tron HTTP API
"""

import logging
from decimal import Decimal
from typing import Any

from multichain.abi import unpack_transfer_log
from multichain.address.converter import TronAddressConverter
from multichain.chains.base import Blockchain
from multichain.chains.tron.api import decode_asset_name, fetch_balance
from multichain.currencies import CurrencyRegistry
from multichain.exceptions import (
    BlockNotFoundError,
    ConfigurationError,
    CurrencyNotFoundError,
    InvalidTransactionError,
    TransactionNotFoundError,
)
from multichain.rpc import TronHttpClient
from multichain.types import (
    Block,
    BlockchainSettings,
    ChainFamily,
    Transaction,
    TransactionStatus,
)
from multichain.utils.amount import from_minor_units

logger = logging.getLogger(__name__)

TRANSFER_CONTRACT = "TransferContract"
TRANSFER_ASSET_CONTRACT = "TransferAssetContract"


def contract_result(tx: dict[str, Any]) -> str | None:
    ret = tx.get("ret") or [{}]
    return ret[0].get("contractRet")


class TronBlockchain(Blockchain):
    """TRON chain adapter serving TRX, TRC10 assets and TRC20 tokens"""

    def __init__(self, client: TronHttpClient | None = None) -> None:
        self._client = client
        self._converter = TronAddressConverter()
        self._registry: CurrencyRegistry | None = None

    def configure(self, settings: BlockchainSettings) -> None:
        self._registry = CurrencyRegistry(ChainFamily.TRON, settings.currencies, self._converter)
        if self._client is None:
            self._client = TronHttpClient(settings.uri)

    @property
    def _api(self) -> TronHttpClient:
        if self._client is None:
            raise ConfigurationError("TronBlockchain used before configure()")
        return self._client

    @property
    def _currencies(self) -> CurrencyRegistry:
        if self._registry is None:
            raise ConfigurationError("TronBlockchain used before configure()")
        return self._registry

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def get_latest_block_number(self) -> int:
        block = await self._api.post("wallet/getnowblock")
        return int(block["block_header"]["raw_data"]["number"])

    async def get_block_by_number(self, block_number: int) -> Block:
        block = await self._api.post("wallet/getblockbynum", {"num": block_number})
        if not block:
            raise BlockNotFoundError(f"Block {block_number} not found")
        return await self._build_block(block)

    async def get_block_by_hash(self, block_hash: str) -> Block:
        block = await self._api.post("wallet/getblockbyid", {"value": block_hash})
        if not block:
            raise BlockNotFoundError(f"Block {block_hash} not found")
        return await self._build_block(block)

    async def _build_block(self, block: dict[str, Any]) -> Block:
        """Normalize every transaction; invalid or unconfigured ones are skipped"""
        number = int(block["block_header"]["raw_data"]["number"])
        transactions: list[Transaction] = []
        for tx in block.get("transactions", []):
            try:
                transactions.extend(await self.build_transactions(tx, number))
            except (InvalidTransactionError, CurrencyNotFoundError) as e:
                logger.debug("Skipping transaction %s: %s", tx.get("txID"), e)

        return Block(hash=block.get("blockID"), number=number, transactions=transactions)

    async def get_transaction(self, tx_hash: str) -> Transaction:
        """
        Raises:
            TransactionNotFoundError: Unknown hash or no configured transfer
            InvalidTransactionError: Zero-amount or reverted TRX/TRC10 transfer
            CurrencyNotFoundError: TRC10 transfer of an unconfigured asset
        """
        tx = await self._api.post("wallet/gettransactionbyid", {"value": tx_hash})
        if not tx:
            raise TransactionNotFoundError(f"Transaction {tx_hash} not found")

        info = await self._api.post("wallet/gettransactioninfobyid", {"value": tx_hash})
        transactions = await self.build_transactions(tx, int(info.get("blockNumber", 0)), info)
        if not transactions:
            raise TransactionNotFoundError(
                f"Transaction {tx_hash} moves no configured currency"
            )
        return transactions[0]

    async def build_transactions(
        self,
        tx: dict[str, Any],
        block_number: int = 0,
        info: dict[str, Any] | None = None,
    ) -> list[Transaction]:
        """
        Normalize a node transaction by its first contract.

        TRX and TRC10 transfers are read from the contract parameters and carry
        no fee. Anything else is a contract call read from the transaction info
        receipt: one record per configured Transfer event.
        """
        contracts = (tx.get("raw_data") or {}).get("contract") or []
        if not contracts:
            raise InvalidTransactionError(f"Transaction {tx.get('txID')} has no contract")

        contract = contracts[0]
        contract_type = contract.get("type")
        value = (contract.get("parameter") or {}).get("value") or {}

        if contract_type in (TRANSFER_CONTRACT, TRANSFER_ASSET_CONTRACT):
            return [self._build_transfer(tx, contract_type, value, block_number)]

        if info is None:
            info = await self._api.post("wallet/gettransactioninfobyid", {"value": tx["txID"]})
        if not info:
            logger.debug("No receipt yet for %s", tx.get("txID"))
            return []
        return self._build_contract_transactions(tx, value, info, block_number)

    def _build_transfer(
        self,
        tx: dict[str, Any],
        contract_type: str,
        value: dict[str, Any],
        block_number: int,
    ) -> Transaction:
        amount = int(value.get("amount", 0))
        result = contract_result(tx)
        if amount <= 0:
            raise InvalidTransactionError(f"Transaction {tx['txID']} transfers nothing")
        if result == "REVERT":
            raise InvalidTransactionError(f"Transaction {tx['txID']} reverted")

        if contract_type == TRANSFER_CONTRACT:
            currency = self._currencies.native
        else:
            asset_id = decode_asset_name(str(value.get("asset_name", "")))
            found = self._currencies.find_by_asset_id(asset_id)
            if found is None:
                raise CurrencyNotFoundError(f"TRC10 asset {asset_id} is not configured")
            currency = found

        return Transaction(
            currency=currency.id,
            currency_fee=self._currencies.native.id,
            from_addresses=[self._converter.to_canonical(value["owner_address"])],
            to_address=self._converter.to_canonical(value["to_address"]),
            amount=from_minor_units(amount, currency.subunits),
            block_number=block_number,
            tx_hash=tx["txID"],
            status=TransactionStatus.SUCCEED if result == "SUCCESS" else TransactionStatus.FAILED,
        )

    def _build_contract_transactions(
        self,
        tx: dict[str, Any],
        value: dict[str, Any],
        info: dict[str, Any],
        block_number: int,
    ) -> list[Transaction]:
        native = self._currencies.native
        receipt = info.get("receipt") or {}
        status = (
            TransactionStatus.SUCCEED
            if receipt.get("result") == "SUCCESS"
            else TransactionStatus.FAILED
        )
        fee = from_minor_units(int(info.get("fee", 0)), native.subunits)
        block_number = int(info.get("blockNumber", block_number))
        logs = info.get("log") or []

        if not logs:
            if status is TransactionStatus.FAILED:
                token = self._currencies.find_by_contract(
                    info.get("contract_address") or value.get("contract_address")
                )
                if token is not None:
                    return [
                        Transaction(
                            currency=token.id,
                            currency_fee=native.id,
                            from_addresses=[self._converter.to_canonical(value["owner_address"])],
                            amount=Decimal(0),
                            fee=fee,
                            block_number=block_number,
                            tx_hash=tx["txID"],
                            status=status,
                        )
                    ]
            return []

        transactions: list[Transaction] = []
        for log in logs:
            currency = self._currencies.find_by_contract(log.get("address"))
            if currency is None:
                continue
            transfer = unpack_transfer_log(
                log["address"], log.get("topics") or [], log.get("data") or "", self._converter
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
                    tx_hash=tx["txID"],
                    status=status,
                )
            )

        return transactions

    async def get_balance_of_address(self, address: str, currency_id: str) -> Decimal:
        currency = self._currencies.get(currency_id)
        return await fetch_balance(self._api, address, currency)
