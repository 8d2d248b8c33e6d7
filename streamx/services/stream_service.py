"""Aggregation facade over every video provider.

The four public coroutines never raise. A failed provider call becomes an
explicit FetchResult failure, which the facade resolves into the fallback for
its execution context:

- web (preview) context: the provider's mock set, after a short delay that
  mirrors network latency;
- native context: an empty list, an honest "device is offline" signal.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional

import structlog

from streamx.core.metrics import MetricsCollector
from streamx.models.video import Platform, VideoRecord
from streamx.providers.base import FetchResult, VideoProvider
from streamx.providers.exceptions import ProviderError
from streamx.providers.manager import ProviderManager
from streamx.testing.fixtures import (
    SAMPLE_STREAM_URL,
    filter_mock_set,
    find_mock_stream_url,
    get_mock_set,
)
from streamx.transport.base import Transport
from streamx.transport.rotation import RotationState

logger = structlog.get_logger(__name__)

DEFAULT_FALLBACK_DELAY = 0.8


class StreamService:
    """Entry point for trending, search, suggestions and stream resolution."""

    def __init__(
        self,
        provider_manager: ProviderManager,
        transport: Transport,
        rotation_state: Optional[RotationState] = None,
        fallback_delay: float = DEFAULT_FALLBACK_DELAY,
    ):
        """
        Initialize the facade.

        Args:
            provider_manager: Registry of provider adapters
            transport: Transport shared by the adapters; its context decides
                which fallback applies
            rotation_state: Mirror pool state, exposed for health reporting
            fallback_delay: Seconds to wait before serving preview mocks
        """
        self.provider_manager = provider_manager
        self.transport = transport
        self.rotation_state = rotation_state
        self.fallback_delay = fallback_delay

    @property
    def is_native(self) -> bool:
        return self.transport.is_native

    async def get_trending(self, provider: str, country: str = "US") -> List[VideoRecord]:
        """
        Get trending videos for a provider selection.

        Args:
            provider: Platform tag or "All"
            country: Region code

        Returns:
            Normalized records; possibly empty, never an error
        """
        target = self.provider_manager.resolve(provider)
        if target is None:
            return get_mock_set(provider)

        result = await self._attempt(target, "trending", target.trending, country)
        if result.ok:
            return result.records or []
        return await self._fallback(provider, "trending", result.failure)

    async def search(self, query: str, provider: str) -> List[VideoRecord]:
        """
        Search videos on a provider selection.

        Args:
            query: Free-text query
            provider: Platform tag or "All"

        Returns:
            Normalized records; possibly empty, never an error
        """
        target = self.provider_manager.resolve(provider)
        if target is None:
            return filter_mock_set(get_mock_set(provider), query, widen_on_miss=False)

        result = await self._attempt(target, "search", target.search, query)
        if result.ok:
            return result.records or []
        return await self._fallback(provider, "search", result.failure, query=query)

    async def get_suggestions(self, query: str) -> List[str]:
        """
        Get search suggestions from the YouTube provider.

        An empty query returns [] without touching the network.
        """
        if not query:
            return []

        provider = self.provider_manager.get_provider_by_name(Platform.YOUTUBE.value)
        if provider is None:
            return []

        try:
            suggestions = await self.provider_manager.execute_with_error_isolation(
                Platform.YOUTUBE.value, provider.suggestions, query
            )
        except ProviderError as e:
            MetricsCollector.record_provider_call(Platform.YOUTUBE.value, "suggestions", "failure")
            logger.debug("suggestions_unavailable", query=query, error=str(e))
            return []

        MetricsCollector.record_provider_call(Platform.YOUTUBE.value, "suggestions", "success")
        return suggestions

    async def get_stream_url(self, video_id: str, provider: str) -> Optional[str]:
        """
        Resolve a playable or embeddable URL.

        Providers without a stream API resolve through the mock catalog and
        finally the generic sample, so playback always has something to load.

        Returns:
            URL, or None when the provider answered but nothing qualifies or
            the lookup failed
        """
        target = self.provider_manager.get_provider_by_name(provider)
        if target is None:
            return find_mock_stream_url(video_id) or SAMPLE_STREAM_URL

        try:
            url = await self.provider_manager.execute_with_error_isolation(
                provider, target.stream_url, video_id
            )
        except ProviderError as e:
            MetricsCollector.record_provider_call(provider, "stream", "failure")
            logger.warning(
                "stream_resolution_failed", video_id=video_id, provider=provider, error=str(e)
            )
            return None

        MetricsCollector.record_provider_call(provider, "stream", "success")
        return url

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def _attempt(
        self,
        provider: VideoProvider,
        operation: str,
        call: Callable[..., Awaitable[List[VideoRecord]]],
        *args: Any,
    ) -> FetchResult:
        name = provider.platform.value
        try:
            records = await self.provider_manager.execute_with_error_isolation(name, call, *args)
        except ProviderError as e:
            MetricsCollector.record_provider_call(name, operation, "failure")
            return FetchResult.failed(e)

        MetricsCollector.record_provider_call(name, operation, "success")
        return FetchResult.success(records)

    async def _fallback(
        self,
        provider: str,
        operation: str,
        failure: Optional[ProviderError],
        query: Optional[str] = None,
    ) -> List[VideoRecord]:
        if self.is_native:
            MetricsCollector.record_fallback(provider, "empty")
            logger.error(
                "provider_failed",
                provider=provider,
                operation=operation,
                error_type=type(failure).__name__,
                error=str(failure),
            )
            return []

        MetricsCollector.record_fallback(provider, "mock")
        logger.warning(
            "provider_fallback",
            provider=provider,
            operation=operation,
            error_type=type(failure).__name__,
            error=str(failure),
        )
        if self.fallback_delay > 0:
            await asyncio.sleep(self.fallback_delay)

        videos = get_mock_set(provider)
        if query is not None:
            videos = filter_mock_set(videos, query)
        return videos
