"""
Currency registry - partitions an adapter's currencies into native and token assets
"""

import logging
from typing import Iterable

from multichain.address.converter import AddressConverter
from multichain.exceptions import ConfigurationError, CurrencyNotFoundError, DecodingError
from multichain.types import AssetKind, ChainFamily, Currency

logger = logging.getLogger(__name__)

# Which option key identifies a token on each chain family
_ALLOWED_OPTIONS: dict[ChainFamily, set[str]] = {
    ChainFamily.BITCOIN: set(),
    ChainFamily.EVM: {"erc20_contract_address"},
    ChainFamily.TRON: {"trc20_contract_address", "trc10_asset_id"},
}

_IDENTIFIER_KEYS = ("erc20_contract_address", "trc20_contract_address", "trc10_asset_id")


class CurrencyRegistry:
    """Immutable per-adapter currency set with exactly one native asset"""

    def __init__(
        self,
        family: ChainFamily,
        currencies: Iterable[Currency],
        converter: AddressConverter | None = None,
    ) -> None:
        """
        Validate and partition currencies.

        Args:
            family: Chain family the adapter serves
            currencies: Configured currencies
            converter: Address converter used to canonicalize contract addresses

        Raises:
            ConfigurationError: On duplicate ids, foreign token options, or a
                native asset count other than one
        """
        self._family = family
        self._converter = converter
        self._by_id: dict[str, Currency] = {}
        self._contracts: dict[str, Currency] = {}
        self._asset_ids: dict[str, Currency] = {}
        native: list[Currency] = []

        for currency in currencies:
            if currency.id in self._by_id:
                raise ConfigurationError(f"Duplicate currency id: {currency.id}")
            self._check_options(currency)
            self._by_id[currency.id] = currency

            if currency.kind is AssetKind.NATIVE:
                native.append(currency)
            elif currency.kind is AssetKind.CONTRACT:
                try:
                    key = self._contract_key(currency.options.contract_address)
                except DecodingError as e:
                    raise ConfigurationError(f"Currency {currency.id}: {e}") from e
                self._contracts[key] = currency
            else:
                self._asset_ids[str(currency.options.trc10_asset_id)] = currency

        if len(native) != 1:
            raise ConfigurationError(
                f"{family.value} adapter needs exactly one native currency, got {len(native)}"
            )
        self._native = native[0]
        logger.debug(
            "Configured %s currencies: native=%s tokens=%s",
            family.value,
            self._native.id,
            [c.id for c in self.tokens],
        )

    def _check_options(self, currency: Currency) -> None:
        allowed = _ALLOWED_OPTIONS[self._family]
        for key in _IDENTIFIER_KEYS:
            if getattr(currency.options, key) and key not in allowed:
                raise ConfigurationError(
                    f"Currency {currency.id}: option {key} is not valid on {self._family.value}"
                )

    def _contract_key(self, address: str | None) -> str:
        if address is None:
            raise ConfigurationError("Contract currency without contract address")
        if self._converter is None:
            return address.lower()
        return self._converter.to_canonical(address).lower()

    @property
    def native(self) -> Currency:
        return self._native

    @property
    def tokens(self) -> list[Currency]:
        return [c for c in self._by_id.values() if not c.is_native]

    def get(self, currency_id: str) -> Currency:
        """Get a currency by id

        Raises:
            CurrencyNotFoundError: If the currency is not configured
        """
        currency = self._by_id.get(currency_id)
        if currency is None:
            raise CurrencyNotFoundError(f"Currency {currency_id} is not configured")
        return currency

    def find_by_contract(self, address: str | None) -> Currency | None:
        """Find a contract token by address, case-insensitively and across encodings"""
        if not address:
            return None
        try:
            key = self._contract_key(address)
        except DecodingError:
            logger.debug("Undecodable contract address %r", address)
            return None
        return self._contracts.get(key)

    def find_by_asset_id(self, asset_id: str) -> Currency | None:
        """Find an asset-id token by its id"""
        return self._asset_ids.get(str(asset_id))
