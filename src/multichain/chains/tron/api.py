"""
TRON node queries shared by the blockchain and wallet adapters
"""

import logging
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from multichain.abi import BALANCE_OF_SELECTOR, decode_uint256
from multichain.address.converter import TronAddressConverter
from multichain.config import ChainConfig
from multichain.exceptions import DecodingError, RpcError
from multichain.rpc import TronHttpClient
from multichain.types import AssetKind, Currency
from multichain.utils.amount import from_minor_units

logger = logging.getLogger(__name__)

_converter = TronAddressConverter()


class TronFeeOptions(BaseModel):
    """Resolved fee parameters of a TRON contract call"""

    model_config = ConfigDict(extra="ignore")

    fee_limit: int = Field(ge=0)


FEE_DEFAULTS = {"fee_limit": ChainConfig.TRON_FEE_LIMIT}


def decode_message(message: str | None) -> str:
    """Node messages are usually hex-encoded UTF-8; return plain text when they are not"""
    if not message:
        return ""
    try:
        return bytes.fromhex(message).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return message


def decode_asset_name(asset_name: str) -> str:
    """
    TRC10 asset id from a transfer's asset_name.

    Numeric ids come back hex-encoded unless the node renders visible
    addresses, in which case they are already plain digits.
    """
    if asset_name.isdigit() and len(asset_name) % 2:
        return asset_name
    try:
        decoded = bytes.fromhex(asset_name).decode("ascii")
    except (ValueError, UnicodeDecodeError):
        decoded = asset_name
    if not decoded.isdigit():
        if asset_name.isdigit():
            return asset_name
        raise DecodingError(f"Invalid TRC10 asset name: {asset_name!r}")
    return decoded


async def fetch_balance(client: TronHttpClient, address: str, currency: Currency) -> Decimal:
    """
    Balance of an address in canonical units.

    TRX and TRC10 balances come from the account record; TRC20 balances from
    a read-only `balanceOf(address)` call.
    """
    owner = _converter.to_rpc(address)

    if currency.kind is AssetKind.CONTRACT:
        response = await client.post(
            "wallet/triggerconstantcontract",
            {
                "owner_address": owner,
                "contract_address": _converter.to_rpc(str(currency.options.contract_address)),
                "function_selector": BALANCE_OF_SELECTOR,
                "parameter": _converter.to_word(address),
            },
        )
        result = response.get("result") or {}
        if not result.get("result"):
            raise RpcError(
                "wallet/triggerconstantcontract", decode_message(result.get("message"))
            )
        constant_result = response.get("constant_result") or []
        if not constant_result:
            raise DecodingError(f"balanceOf returned no result for {currency.id}")
        return from_minor_units(decode_uint256(constant_result[0]), currency.subunits)

    account = await client.post("wallet/getaccount", {"address": owner})
    if not account:
        logger.debug("Account %s is not activated", address)

    if currency.kind is AssetKind.ASSET_ID:
        asset_id = str(currency.options.trc10_asset_id)
        for entry in account.get("assetV2") or []:
            if str(entry.get("key")) == asset_id:
                return from_minor_units(int(entry.get("value", 0)), currency.subunits)
        return from_minor_units(0, currency.subunits)

    return from_minor_units(int(account.get("balance", 0)), currency.subunits)
