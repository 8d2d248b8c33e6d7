"""Video provider implementations.

Concrete adapters live in their own modules (youtube, dailymotion, peertube,
mock) and are imported from there.
"""

from streamx.providers.base import FetchResult, VideoProvider
from streamx.providers.exceptions import (
    AllInstancesExhausted,
    MalformedResponse,
    ProviderError,
    TransportError,
)
from streamx.providers.manager import ProviderManager

__all__ = [
    "FetchResult",
    "VideoProvider",
    "ProviderManager",
    "ProviderError",
    "TransportError",
    "AllInstancesExhausted",
    "MalformedResponse",
]
