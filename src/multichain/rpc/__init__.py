"""
Node transports
"""

from multichain.rpc.json_rpc import JsonRpcClient
from multichain.rpc.tron_http import TronHttpClient

__all__ = ["JsonRpcClient", "TronHttpClient"]
