"""
TRON chain family
"""

from multichain.chains.tron.blockchain import TronBlockchain
from multichain.chains.tron.wallet import TronWallet

__all__ = ["TronBlockchain", "TronWallet"]
