"""
Currency registry module
"""

from multichain.currencies.registry import CurrencyRegistry

__all__ = ["CurrencyRegistry"]
