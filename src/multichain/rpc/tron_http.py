"""
TronHttpClient - client for the java-tron full node HTTP API
"""

import json
import logging
from typing import Any

import httpx

from multichain.config import ChainConfig
from multichain.exceptions import RpcError, TransportError

logger = logging.getLogger(__name__)


class TronHttpClient:
    """
    Client for java-tron `/wallet/*` HTTP endpoints.

    Uses the TronGrid API key from TRON_GRID_API_KEY when no key is given.
    """

    def __init__(
        self,
        uri: str,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = uri.rstrip("/")
        self._headers = {"Accept": "application/json"}
        api_key = api_key or ChainConfig.get_tron_api_key()
        if api_key:
            self._headers["TRON-PRO-API-KEY"] = api_key
        self._timeout = timeout if timeout is not None else ChainConfig.get_rpc_timeout()
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client"""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def post(self, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        POST a JSON body to a node endpoint.

        Args:
            path: Endpoint path, e.g. "wallet/getnowblock"
            payload: JSON body

        Returns:
            Decoded JSON object ({} when the node answers with an empty body)

        Raises:
            TransportError: Network failure, HTTP error status or malformed body
            RpcError: The node returned an {"Error": ...} payload
        """
        client = await self._get_client()
        logger.debug("TRON request %s", path)

        try:
            response = await client.post(f"/{path.lstrip('/')}", json=payload or {})
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"{path}: {e}") from e

        if not response.content.strip():
            return {}
        try:
            result = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(f"{path}: malformed response: {response.text[:200]}") from e

        if not isinstance(result, dict):
            raise TransportError(f"{path}: unexpected response type {type(result).__name__}")
        if result.get("Error"):
            raise RpcError(path, result["Error"])
        return result
