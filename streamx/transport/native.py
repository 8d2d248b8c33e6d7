"""Native transport: host-level HTTP without cross-origin restrictions."""

from typing import Any, Optional

import httpx
import structlog

from streamx.transport.base import DEFAULT_TIMEOUT, Transport

logger = structlog.get_logger(__name__)

MOBILE_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/114.0.0.0 Mobile Safari/537.36"
)


class NativeTransport(Transport):
    """Issues requests directly with a fixed mobile browser user agent."""

    is_native = True

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = MOBILE_USER_AGENT,
    ):
        super().__init__(client=client, timeout=timeout)
        self.user_agent = user_agent

    async def fetch(self, url: str) -> Any:
        logger.debug("native_fetch", url=url)
        return await self._get_json(url, headers={"User-Agent": self.user_agent})
