"""
Tests for engine configuration
"""

from decimal import Decimal

from multichain.config import ChainConfig


class TestChainConfig:
    def test_rpc_timeout(self, monkeypatch):
        monkeypatch.delenv("MULTICHAIN_RPC_TIMEOUT", raising=False)
        assert ChainConfig.get_rpc_timeout() == 30.0

        monkeypatch.setenv("MULTICHAIN_RPC_TIMEOUT", "2.5")
        assert ChainConfig.get_rpc_timeout() == 2.5

    def test_malformed_values_fall_back(self, monkeypatch, caplog):
        monkeypatch.setenv("MULTICHAIN_RPC_TIMEOUT", "soon")
        monkeypatch.setenv("MULTICHAIN_UTXO_MAX_WORKERS", "many")

        assert ChainConfig.get_rpc_timeout() == ChainConfig.DEFAULT_RPC_TIMEOUT
        assert ChainConfig.get_utxo_max_workers() == ChainConfig.DEFAULT_UTXO_MAX_WORKERS
        assert "MULTICHAIN_RPC_TIMEOUT" in caplog.text

    def test_utxo_workers_at_least_one(self, monkeypatch):
        monkeypatch.setenv("MULTICHAIN_UTXO_MAX_WORKERS", "0")
        assert ChainConfig.get_utxo_max_workers() == 1

    def test_tron_api_key(self, monkeypatch):
        monkeypatch.delenv("TRON_GRID_API_KEY", raising=False)
        assert ChainConfig.get_tron_api_key() is None

        monkeypatch.setenv("TRON_GRID_API_KEY", "key")
        assert ChainConfig.get_tron_api_key() == "key"

    def test_gas_rate_multiplier(self):
        assert ChainConfig.get_gas_rate_multiplier("standard") == Decimal("1")
        assert ChainConfig.get_gas_rate_multiplier("fast") == Decimal("1.1")
        assert ChainConfig.get_gas_rate_multiplier("unknown") == Decimal("1")
