"""
Random secrets for node-managed accounts
"""

import secrets
import string

from multichain.config import ChainConfig

_ALPHABET = string.ascii_letters + string.digits


def random_secret(length: int = ChainConfig.SECRET_LENGTH) -> str:
    """Random alphanumeric secret"""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
