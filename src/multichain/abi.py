"""
Shared ABI definitions and codec helpers for token contracts
"""

from dataclasses import dataclass
from typing import Any, Sequence

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError as AbiDecodingError
from web3 import Web3

from multichain.address.converter import AddressConverter
from multichain.config import ChainConfig
from multichain.exceptions import DecodingError

TRANSFER_SELECTOR = "transfer(address,uint256)"
BALANCE_OF_SELECTOR = "balanceOf(address)"
TRANSFER_EVENT_SIGNATURE = "Transfer(address,address,uint256)"


def function_selector(signature: str) -> str:
    """4-byte method id of a function signature, as 8 hex chars"""
    return Web3.keccak(text=signature)[:4].hex().removeprefix("0x")


def encode_arguments(types: Sequence[str], values: Sequence[Any]) -> str:
    """ABI-encode call arguments as hex without prefix"""
    return encode(list(types), list(values)).hex()


def encode_transfer_arguments(to_word: str, amount: int) -> str:
    """Encode transfer(address,uint256) arguments: padded recipient word and amount"""
    return to_word.rjust(64, "0") + encode_arguments(["uint256"], [amount])


def encode_call(signature: str, arguments: str) -> str:
    """Full calldata (0x + selector + encoded arguments)"""
    return "0x" + function_selector(signature) + arguments


def decode_uint256(data: str | bytes) -> int:
    """Decode a big-endian uint256 return value or log payload"""
    if isinstance(data, str):
        digits = data[2:] if data[:2].lower() == "0x" else data
        if not digits:
            return 0
        try:
            raw = bytes.fromhex(digits.rjust(64, "0") if len(digits) < 64 else digits)
        except ValueError as e:
            raise DecodingError(f"Invalid uint256 payload: {data!r}") from e
    else:
        raw = data
    try:
        (value,) = decode(["uint256"], raw[:32].rjust(32, b"\x00"))
    except AbiDecodingError as e:
        raise DecodingError(f"Invalid uint256 payload: {data!r}") from e
    return value


def is_transfer_topic(topic: str) -> bool:
    """Whether an event topic0 is the standard Transfer event signature hash"""
    return topic.lower().removeprefix("0x") == ChainConfig.TRANSFER_EVENT_TOPIC


@dataclass
class TransferLog:
    """A decoded Transfer event"""

    contract: str
    from_address: str
    to_address: str
    value: int


def unpack_transfer_log(
    contract: str,
    topics: Sequence[str],
    data: str,
    converter: AddressConverter,
) -> TransferLog | None:
    """Decode a Transfer event log; None if the log is not a standard Transfer.

    Args:
        contract: Emitting contract address, in any encoding the converter accepts
        topics: Log topics (topic0 is the event signature hash)
        data: Log payload carrying the amount in token minor units
        converter: Chain address converter for the indexed from/to words

    Raises:
        DecodingError: If a matching log carries malformed topics or payload
    """
    if len(topics) != 3 or not is_transfer_topic(topics[0]):
        return None
    return TransferLog(
        contract=converter.to_canonical(contract),
        from_address=converter.from_word(topics[1]),
        to_address=converter.from_word(topics[2]),
        value=decode_uint256(data),
    )
