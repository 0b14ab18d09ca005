"""
multichain chain adapters and the family factory
"""

from multichain.chains.base import Blockchain, Wallet
from multichain.chains.bitcoin import BitcoinBlockchain, BitcoinWallet
from multichain.chains.evm import EvmBlockchain, EvmWallet
from multichain.chains.tron import TronBlockchain, TronWallet
from multichain.exceptions import ConfigurationError
from multichain.types import ChainFamily

_BLOCKCHAINS: dict[ChainFamily, type[Blockchain]] = {
    ChainFamily.BITCOIN: BitcoinBlockchain,
    ChainFamily.EVM: EvmBlockchain,
    ChainFamily.TRON: TronBlockchain,
}

_WALLETS: dict[ChainFamily, type[Wallet]] = {
    ChainFamily.BITCOIN: BitcoinWallet,
    ChainFamily.EVM: EvmWallet,
    ChainFamily.TRON: TronWallet,
}


def _family(family: ChainFamily | str) -> ChainFamily:
    try:
        return ChainFamily(family)
    except ValueError as e:
        raise ConfigurationError(f"Unsupported chain family: {family}") from e


def new_blockchain(family: ChainFamily | str) -> Blockchain:
    """Create an unconfigured blockchain adapter for a chain family"""
    return _BLOCKCHAINS[_family(family)]()


def new_wallet(family: ChainFamily | str) -> Wallet:
    """Create an unconfigured wallet adapter for a chain family"""
    return _WALLETS[_family(family)]()


__all__ = [
    "Blockchain",
    "Wallet",
    "BitcoinBlockchain",
    "BitcoinWallet",
    "EvmBlockchain",
    "EvmWallet",
    "TronBlockchain",
    "TronWallet",
    "new_blockchain",
    "new_wallet",
]
