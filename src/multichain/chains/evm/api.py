"""
EVM node queries shared by the blockchain and wallet adapters
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from multichain.abi import BALANCE_OF_SELECTOR, decode_uint256, encode_call
from multichain.address.converter import EvmAddressConverter
from multichain.config import ChainConfig
from multichain.rpc import JsonRpcClient
from multichain.types import Currency, GasPriceRate
from multichain.utils.amount import from_minor_units, parse_hex_quantity

_converter = EvmAddressConverter()


class EvmFeeOptions(BaseModel):
    """Resolved fee parameters of an EVM transfer"""

    model_config = ConfigDict(extra="ignore")

    gas_limit: int = Field(ge=0)
    gas_price: Optional[int] = Field(None, ge=0)
    gas_rate: GasPriceRate = GasPriceRate.STANDARD


NATIVE_FEE_DEFAULTS = {"gas_limit": ChainConfig.EVM_NATIVE_GAS_LIMIT, "gas_rate": "standard"}
TOKEN_FEE_DEFAULTS = {"gas_limit": ChainConfig.EVM_TOKEN_GAS_LIMIT, "gas_rate": "standard"}


async def fetch_balance(client: JsonRpcClient, address: str, currency: Currency) -> Decimal:
    """
    Balance of an address at the latest block, in canonical units.

    Native balances come from `eth_getBalance`; ERC20 balances from a
    read-only `balanceOf(address)` call against the token contract.
    """
    if currency.is_native:
        result = await client.call("eth_getBalance", _converter.to_rpc(address), "latest")
        return from_minor_units(parse_hex_quantity(result), currency.subunits)

    data = encode_call(BALANCE_OF_SELECTOR, _converter.to_word(address))
    contract = _converter.to_rpc(str(currency.options.contract_address))
    result = await client.call("eth_call", {"to": contract, "data": data}, "latest")
    return from_minor_units(decode_uint256(result), currency.subunits)


async def fetch_gas_price(client: JsonRpcClient, rate: GasPriceRate) -> int:
    """Node gas price scaled by the rate class multiplier, in wei"""
    gas_price = parse_hex_quantity(await client.call("eth_gasPrice"))
    return int(Decimal(gas_price) * ChainConfig.get_gas_rate_multiplier(rate.value))


async def effective_gas_price(client: JsonRpcClient, options: EvmFeeOptions) -> int:
    """Explicit gas price if set, otherwise the rated node price"""
    if options.gas_price is not None:
        return options.gas_price
    return await fetch_gas_price(client, options.gas_rate)
