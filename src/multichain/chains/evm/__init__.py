"""
EVM account-based chain family
"""

from multichain.chains.evm.blockchain import EvmBlockchain
from multichain.chains.evm.wallet import EvmWallet

__all__ = ["EvmBlockchain", "EvmWallet"]
