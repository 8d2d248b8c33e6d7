"""HTTP transport strategies and mirror rotation."""

from typing import Optional

import httpx

from streamx.transport.base import DEFAULT_TIMEOUT, Transport
from streamx.transport.native import MOBILE_USER_AGENT, NativeTransport
from streamx.transport.rotation import EndpointRotator, RotationState
from streamx.transport.web import DEFAULT_CORS_PROXY, WebTransport

TRANSPORT_MODES = ("native", "web")


def create_transport(
    mode: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = MOBILE_USER_AGENT,
    cors_proxy: str = DEFAULT_CORS_PROXY,
) -> Transport:
    """
    Build the transport for an execution context.

    Args:
        mode: "native" or "web"
        client: Optional shared httpx client
        timeout: Request timeout in seconds
        user_agent: User agent sent by the native strategy
        cors_proxy: Relay prefix used by the web strategy

    Returns:
        Transport instance

    Raises:
        ValueError: If mode is unknown
    """
    if mode == "native":
        return NativeTransport(client=client, timeout=timeout, user_agent=user_agent)
    if mode == "web":
        return WebTransport(client=client, timeout=timeout, cors_proxy=cors_proxy)
    raise ValueError(f"Unknown transport mode '{mode}', expected one of {TRANSPORT_MODES}")


__all__ = [
    "TRANSPORT_MODES",
    "EndpointRotator",
    "NativeTransport",
    "RotationState",
    "Transport",
    "WebTransport",
    "create_transport",
]
