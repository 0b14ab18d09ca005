"""
UTXO (Bitcoin-style) chain family
"""

from multichain.chains.bitcoin.blockchain import BitcoinBlockchain
from multichain.chains.bitcoin.wallet import BitcoinWallet

__all__ = ["BitcoinBlockchain", "BitcoinWallet"]
