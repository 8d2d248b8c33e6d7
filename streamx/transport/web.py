"""Web transport: direct request with a CORS relay as last resort."""

from typing import Any, Optional

import httpx
import structlog

from streamx.providers.exceptions import ProviderError, TransportError
from streamx.transport.base import DEFAULT_TIMEOUT, Transport

logger = structlog.get_logger(__name__)

DEFAULT_CORS_PROXY = "https://cors-anywhere.herokuapp.com/"


class WebTransport(Transport):
    """Browser-context strategy.

    Tries the target directly, then exactly once more through the relay by
    prefixing the target URL.
    """

    is_native = False

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        cors_proxy: str = DEFAULT_CORS_PROXY,
    ):
        super().__init__(client=client, timeout=timeout)
        self.cors_proxy = cors_proxy

    async def fetch(self, url: str) -> Any:
        try:
            return await self._get_json(url)
        except ProviderError as e:
            logger.debug("direct_fetch_failed", url=url, error=str(e))

        proxy_url = f"{self.cors_proxy}{url}"
        try:
            return await self._get_json(proxy_url)
        except ProviderError as e:
            logger.debug("proxy_fetch_failed", url=proxy_url, error=str(e))
            raise TransportError("Web fetch failed", url=url) from e
