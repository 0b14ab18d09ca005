"""
Tests for layered option resolution and secrets
"""

from multichain.utils.options import resolve_options
from multichain.utils.secret import random_secret


class TestResolveOptions:
    def test_later_sources_override(self):
        defaults = {"gas_limit": 21000, "gas_rate": "standard"}
        currency = {"gas_limit": 60000}
        overrides = {"gas_rate": "fast"}

        assert resolve_options(defaults, currency, overrides) == {
            "gas_limit": 60000,
            "gas_rate": "fast",
        }

    def test_none_falls_through(self):
        assert resolve_options({"fee_limit": 10}, None, {"fee_limit": None}) == {"fee_limit": 10}

    def test_sources_are_not_mutated(self):
        defaults = {"gas_limit": 21000}
        resolve_options(defaults, {"gas_limit": 1})
        assert defaults == {"gas_limit": 21000}

    def test_empty(self):
        assert resolve_options() == {}


class TestRandomSecret:
    def test_length_and_alphabet(self):
        secret = random_secret()
        assert len(secret) == 32
        assert secret.isalnum()

    def test_secrets_differ(self):
        assert random_secret() != random_secret()
