"""
multichain custom exception hierarchy
"""

from typing import Any


class MultichainError(Exception):
    """multichain base exception"""

    pass


class ConfigurationError(MultichainError):
    """Configuration-related error"""

    pass


class TransportError(MultichainError):
    """Node unreachable or returned a malformed response"""

    pass


class RpcError(MultichainError):
    """Node answered with an explicit error payload"""

    def __init__(self, method: str, error: Any):
        self.method = method
        self.error = error
        super().__init__(f"{method}: {error}")

    @property
    def code(self) -> int | None:
        """JSON-RPC error code, when the payload carries one"""
        if isinstance(self.error, dict):
            return self.error.get("code")
        return None


class DecodingError(MultichainError):
    """Well-formed node output could not be decoded (address, ABI, number)"""

    pass


class TransactionError(MultichainError):
    """Transaction-related error"""

    pass


class InvalidTransactionError(TransactionError):
    """Transaction does not describe a valid transfer (reverted, zero amount)"""

    pass


class TransactionNotFoundError(TransactionError):
    """Transaction unknown to the node or carrying no transfer"""

    pass


class TransactionRejectedError(TransactionError):
    """Node refused to accept a transaction for broadcast"""

    def __init__(self, message: str, code: str | None = None):
        self.code = code
        super().__init__(message)


class CurrencyNotFoundError(MultichainError):
    """Currency is not configured on this adapter"""

    pass


class AddressNotFoundError(MultichainError):
    """Address is not known to the node wallet"""

    pass


class BlockNotFoundError(MultichainError):
    """Block unknown to the node"""

    pass
