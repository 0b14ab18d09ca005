"""
multichain engine configuration
Centralized defaults for fee parameters, codecs and transport settings
"""

import logging
import os
from decimal import Decimal
from typing import Dict

logger = logging.getLogger(__name__)


class ChainConfig:
    """Engine defaults, overridable from the environment where noted"""

    # keccak256("Transfer(address,address,uint256)")
    TRANSFER_EVENT_TOPIC = "ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"

    # TRON hex addresses carry a one-byte network prefix
    TRON_ADDRESS_PREFIX = "41"

    # EVM gas defaults
    EVM_NATIVE_GAS_LIMIT = 21_000
    EVM_TOKEN_GAS_LIMIT = 90_000

    # TRON fee ceiling in sun
    TRON_FEE_LIMIT = 1_000_000

    # Gas price multipliers per rate class
    GAS_RATE_MULTIPLIERS: Dict[str, Decimal] = {
        "standard": Decimal("1"),
        "fast": Decimal("1.1"),
    }

    DEFAULT_RPC_TIMEOUT = 30.0
    DEFAULT_UTXO_MAX_WORKERS = 8

    SECRET_LENGTH = 32

    @classmethod
    def get_rpc_timeout(cls) -> float:
        """Get the per-request transport timeout in seconds.

        Reads MULTICHAIN_RPC_TIMEOUT, falling back to DEFAULT_RPC_TIMEOUT.
        """
        raw = os.getenv("MULTICHAIN_RPC_TIMEOUT")
        if not raw:
            return cls.DEFAULT_RPC_TIMEOUT
        try:
            return float(raw)
        except ValueError:
            logger.warning("Ignoring malformed MULTICHAIN_RPC_TIMEOUT=%r", raw)
            return cls.DEFAULT_RPC_TIMEOUT

    @classmethod
    def get_utxo_max_workers(cls) -> int:
        """Get the fan-out width for previous-transaction lookups.

        Reads MULTICHAIN_UTXO_MAX_WORKERS, falling back to DEFAULT_UTXO_MAX_WORKERS.
        """
        raw = os.getenv("MULTICHAIN_UTXO_MAX_WORKERS")
        if not raw:
            return cls.DEFAULT_UTXO_MAX_WORKERS
        try:
            workers = int(raw)
        except ValueError:
            logger.warning("Ignoring malformed MULTICHAIN_UTXO_MAX_WORKERS=%r", raw)
            return cls.DEFAULT_UTXO_MAX_WORKERS
        return max(workers, 1)

    @classmethod
    def get_tron_api_key(cls) -> str | None:
        """Get the TronGrid API key from TRON_GRID_API_KEY, if set"""
        return os.getenv("TRON_GRID_API_KEY") or None

    @classmethod
    def get_gas_rate_multiplier(cls, rate: str) -> Decimal:
        """Get the gas price multiplier for a rate class (unknown classes count as standard)"""
        return cls.GAS_RATE_MULTIPLIERS.get(rate, cls.GAS_RATE_MULTIPLIERS["standard"])
