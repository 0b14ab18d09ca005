"""
Type definitions for the multichain engine
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChainFamily(str, Enum):
    """Chain families served by the engine"""

    BITCOIN = "bitcoin"
    EVM = "evm"
    TRON = "tron"


class TransactionStatus(str, Enum):
    """Canonical transaction status"""

    PENDING = "pending"
    SUCCEED = "succeed"
    FAILED = "failed"
    SKIPPED = "skipped"
    REJECTED = "rejected"

    @property
    def is_terminal_decision(self) -> bool:
        """Statuses assigned by business rules outside the engine"""
        return self in (TransactionStatus.SKIPPED, TransactionStatus.REJECTED)


class GasPriceRate(str, Enum):
    """Fee rate class"""

    STANDARD = "standard"
    FAST = "fast"


class AssetKind(str, Enum):
    """How a currency is identified on its chain"""

    NATIVE = "native"
    CONTRACT = "contract"
    ASSET_ID = "asset_id"


# Option keys that carry transfer fee parameters
FEE_OPTION_KEYS = ("gas_limit", "gas_price", "gas_rate", "fee_limit")


class CurrencyOptions(BaseModel):
    """Chain-specific currency identifiers and fee parameters"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    erc20_contract_address: Optional[str] = None
    trc20_contract_address: Optional[str] = None
    trc10_asset_id: Optional[str] = None

    gas_limit: Optional[int] = Field(None, ge=0)
    gas_price: Optional[int] = Field(None, ge=0)
    gas_rate: Optional[GasPriceRate] = None
    fee_limit: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def _single_identifier(self) -> "CurrencyOptions":
        identifiers = [
            self.erc20_contract_address,
            self.trc20_contract_address,
            self.trc10_asset_id,
        ]
        if sum(1 for value in identifiers if value) > 1:
            raise ValueError("a currency carries at most one contract address or asset id")
        return self

    @property
    def kind(self) -> AssetKind:
        if self.erc20_contract_address or self.trc20_contract_address:
            return AssetKind.CONTRACT
        if self.trc10_asset_id:
            return AssetKind.ASSET_ID
        return AssetKind.NATIVE

    @property
    def contract_address(self) -> Optional[str]:
        return self.erc20_contract_address or self.trc20_contract_address

    def fee_options(self) -> dict[str, Any]:
        """Fee parameters that are explicitly set, for option resolution"""
        return self.model_dump(include=set(FEE_OPTION_KEYS), exclude_none=True)


class Currency(BaseModel):
    """A tradeable asset on a chain"""

    model_config = ConfigDict(frozen=True)

    id: str
    subunits: int = Field(ge=0, le=77)
    options: CurrencyOptions = Field(default_factory=CurrencyOptions)

    @property
    def kind(self) -> AssetKind:
        return self.options.kind

    @property
    def is_native(self) -> bool:
        return self.options.kind is AssetKind.NATIVE


class Transaction(BaseModel):
    """Canonical unit of value movement"""

    model_config = ConfigDict(frozen=True)

    currency: str
    currency_fee: Optional[str] = None
    from_addresses: list[str] = Field(default_factory=list)
    to_address: Optional[str] = None
    amount: Decimal = Decimal(0)
    fee: Optional[Decimal] = None
    block_number: int = Field(0, ge=0)
    tx_hash: Optional[str] = None
    status: TransactionStatus = TransactionStatus.PENDING
    options: dict[str, Any] = Field(default_factory=dict)

    @property
    def from_address(self) -> Optional[str]:
        """Primary source address"""
        return self.from_addresses[0] if self.from_addresses else None


class Block(BaseModel):
    """Block with its normalized transactions"""

    model_config = ConfigDict(frozen=True)

    hash: Optional[str] = None
    number: int = Field(ge=0)
    transactions: list[Transaction] = Field(default_factory=list)


class BlockchainSettings(BaseModel):
    """Blockchain adapter settings"""

    uri: str
    currencies: list[Currency]


class WalletAccount(BaseModel):
    """Node endpoint and credentials of the wallet an adapter operates"""

    uri: str
    address: str
    secret: str = ""


class WalletSettings(BaseModel):
    """Wallet adapter settings; either part may be supplied separately"""

    currency: Optional[Currency] = None
    wallet: Optional[WalletAccount] = None
