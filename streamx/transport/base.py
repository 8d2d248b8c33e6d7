"""Abstract HTTP transport shared by every network-backed provider."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from streamx.providers.exceptions import MalformedResponse, TransportError

DEFAULT_TIMEOUT = 10.0


class Transport(ABC):
    """Single-shot JSON GET against an absolute URL.

    Implementations never retry; retry policy lives in the rotator.
    """

    #: True when requests are free of browser cross-origin restrictions
    is_native: bool = False

    def __init__(
        self, client: Optional[httpx.AsyncClient] = None, timeout: float = DEFAULT_TIMEOUT
    ):
        """
        Initialize transport.

        Args:
            client: Shared httpx client; one is created when omitted
            timeout: Request timeout in seconds for the owned client
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json, */*"},
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
        )

    @property
    def mode(self) -> str:
        return "native" if self.is_native else "web"

    @abstractmethod
    async def fetch(self, url: str) -> Any:
        """
        Fetch and decode a JSON payload.

        Args:
            url: Absolute URL

        Returns:
            Decoded JSON payload

        Raises:
            TransportError: On network failure or non-2xx status
            MalformedResponse: If a 2xx body is not JSON
        """
        pass

    async def _get_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}", url=url) from e

        if not response.is_success:
            raise TransportError(
                f"HTTP error: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"Response from {url} is not valid JSON") from e

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
