"""
multichain - uniform blockchain and wallet adapters for UTXO, EVM and TRON chains

Normalizes each chain's wire representation into canonical Transaction and
Block records, and submits native and token transfers.
"""

__version__ = "0.1.0"

from multichain.types import (
    AssetKind,
    Block,
    BlockchainSettings,
    ChainFamily,
    Currency,
    CurrencyOptions,
    GasPriceRate,
    Transaction,
    TransactionStatus,
    WalletAccount,
    WalletSettings,
)
from multichain.exceptions import (
    MultichainError,
    ConfigurationError,
    TransportError,
    RpcError,
    DecodingError,
    TransactionError,
    InvalidTransactionError,
    TransactionNotFoundError,
    TransactionRejectedError,
    CurrencyNotFoundError,
    AddressNotFoundError,
    BlockNotFoundError,
)
from multichain.address import (
    AddressConverter,
    EvmAddressConverter,
    TronAddressConverter,
)
from multichain.currencies import CurrencyRegistry
from multichain.chains import Blockchain, Wallet, new_blockchain, new_wallet

__all__ = [
    "__version__",
    # Types
    "AssetKind",
    "Block",
    "BlockchainSettings",
    "ChainFamily",
    "Currency",
    "CurrencyOptions",
    "GasPriceRate",
    "Transaction",
    "TransactionStatus",
    "WalletAccount",
    "WalletSettings",
    # Exceptions
    "MultichainError",
    "ConfigurationError",
    "TransportError",
    "RpcError",
    "DecodingError",
    "TransactionError",
    "InvalidTransactionError",
    "TransactionNotFoundError",
    "TransactionRejectedError",
    "CurrencyNotFoundError",
    "AddressNotFoundError",
    "BlockNotFoundError",
    # Address converters
    "AddressConverter",
    "EvmAddressConverter",
    "TronAddressConverter",
    # Currencies
    "CurrencyRegistry",
    # Adapters
    "Blockchain",
    "Wallet",
    "new_blockchain",
    "new_wallet",
]
