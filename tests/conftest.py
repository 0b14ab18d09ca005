"""
Pytest configuration and fixtures
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from multichain.types import Currency, CurrencyOptions


@pytest.fixture
def anyio_backend():
    return "asyncio"


def rpc_mock(handlers: dict[str, Any]) -> AsyncMock:
    """
    AsyncMock node client answering by method (JsonRpcClient.call) or path
    (TronHttpClient.post).

    A handler is either a static result or a callable receiving the call
    parameters. Unknown methods fail the test.
    """

    def dispatch(method: str, *params: Any) -> Any:
        if method not in handlers:
            raise AssertionError(f"unexpected node call {method} {params}")
        handler = handlers[method]
        if callable(handler):
            return handler(*params)
        return handler

    client = AsyncMock()
    client.call.side_effect = dispatch
    client.post.side_effect = dispatch
    return client


def calls_of(client: AsyncMock, method: str) -> list[tuple]:
    """Parameters of every call to a node method, in order"""
    recorded = client.call.call_args_list + client.post.call_args_list
    return [c.args[1:] for c in recorded if c.args[0] == method]


@pytest.fixture
def btc():
    return Currency(id="btc", subunits=8)


@pytest.fixture
def eth():
    return Currency(id="eth", subunits=18)


@pytest.fixture
def usdt_erc20():
    return Currency(
        id="usdt",
        subunits=6,
        options=CurrencyOptions(erc20_contract_address="0x" + "dd" * 20),
    )


@pytest.fixture
def trx():
    return Currency(id="trx", subunits=6)


@pytest.fixture
def usdt_trc20():
    return Currency(
        id="usdt",
        subunits=6,
        options=CurrencyOptions(trc20_contract_address="TR7NHqjeKQxGTCi8q8ZY4pL8otSzgjLj6t"),
    )


@pytest.fixture
def btt_trc10():
    return Currency(id="btt", subunits=6, options=CurrencyOptions(trc10_asset_id="1002000"))
