"""
Blockchain and Wallet capability interfaces
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from multichain.exceptions import InvalidTransactionError
from multichain.types import (
    Block,
    BlockchainSettings,
    Currency,
    Transaction,
    WalletSettings,
)


class Blockchain(ABC):
    """
    Read-side chain capability.

    Observes blocks, transactions and balances through a trusted node and
    normalizes them into canonical Transaction records. Configure once, then
    the instance is safe for concurrent use.
    """

    @abstractmethod
    def configure(self, settings: BlockchainSettings) -> None:
        """Set the node endpoint and the currencies this instance serves"""
        pass

    @abstractmethod
    async def get_latest_block_number(self) -> int:
        """Get the current chain height"""
        pass

    @abstractmethod
    async def get_block_by_hash(self, block_hash: str) -> Block:
        """Fetch a block by hash with all of its transactions normalized"""
        pass

    @abstractmethod
    async def get_block_by_number(self, block_number: int) -> Block:
        """Fetch a block by height with all of its transactions normalized"""
        pass

    @abstractmethod
    async def get_transaction(self, tx_hash: str) -> Transaction:
        """
        Fetch and normalize a single transaction.

        Raises:
            TransactionNotFoundError: If the node does not know the hash or the
                transaction moves no configured currency
        """
        pass

    @abstractmethod
    async def get_balance_of_address(self, address: str, currency_id: str) -> Decimal:
        """
        Get an address balance in canonical units.

        Raises:
            CurrencyNotFoundError: If currency_id is not configured
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release the node transport"""
        pass


class Wallet(ABC):
    """
    Write-side chain capability for one currency and one custodial address.
    """

    @abstractmethod
    def configure(self, settings: WalletSettings) -> None:
        """Set the currency and/or the wallet account; parts left None are kept"""
        pass

    @abstractmethod
    async def create_address(self) -> tuple[str, str]:
        """Create a new deposit address, returning (address, secret)"""
        pass

    @abstractmethod
    async def create_transaction(
        self,
        transaction: Transaction,
        options: dict[str, Any] | None = None,
    ) -> Transaction:
        """
        Submit a transfer of the configured currency.

        Args:
            transaction: Transfer to submit (to_address, amount)
            options: Per-call fee overrides

        Returns:
            The transaction annotated with tx_hash, status pending and the
            effective fee options
        """
        pass

    @abstractmethod
    async def load_balance(self) -> Decimal:
        """Get the wallet address balance of the configured currency"""
        pass

    @abstractmethod
    async def prepare_deposit_collection(
        self,
        funding_transaction: Transaction,
        spreads: list[Transaction],
        deposit_currency: Currency,
    ) -> Transaction | None:
        """
        Plan the native-currency funding needed to collect token deposits.

        Never submits anything. Returns None when no funding is needed.
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release the node transport"""
        pass


def ensure_submittable(transaction: Transaction) -> None:
    """
    Reject transfers a wallet must not submit.

    Raises:
        InvalidTransactionError: If the transaction already carries a business
            decision (skipped/rejected), has no recipient, or a non-positive amount
    """
    if transaction.status.is_terminal_decision:
        raise InvalidTransactionError(
            f"Transaction is {transaction.status.value} and cannot be submitted"
        )
    if not transaction.to_address:
        raise InvalidTransactionError("Transaction has no recipient address")
    if transaction.amount <= 0:
        raise InvalidTransactionError(f"Invalid transfer amount: {transaction.amount}")
