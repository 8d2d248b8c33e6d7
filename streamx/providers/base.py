"""Abstract base class for video providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from streamx.models.video import Platform, VideoRecord
from streamx.providers.exceptions import ProviderError
from streamx.testing.fixtures import SAMPLE_STREAM_URL, find_mock_stream_url


@dataclass
class FetchResult:
    """Outcome of one adapter call: either records or the failure that stopped it."""

    records: Optional[List[VideoRecord]] = None
    failure: Optional[ProviderError] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, records: List[VideoRecord]) -> "FetchResult":
        return cls(records=records)

    @classmethod
    def failed(cls, failure: ProviderError) -> "FetchResult":
        return cls(failure=failure)


class VideoProvider(ABC):
    """Abstract base class for video platform providers."""

    platform: Platform

    @abstractmethod
    async def trending(self, country: str = "US") -> List[VideoRecord]:
        """
        Fetch trending videos.

        Args:
            country: ISO 3166 region code

        Returns:
            Normalized records in provider order

        Raises:
            ProviderError: If the provider cannot be reached or answers garbage
        """
        pass

    @abstractmethod
    async def search(self, query: str) -> List[VideoRecord]:
        """
        Search videos.

        Args:
            query: Free-text query

        Returns:
            Normalized records in provider order

        Raises:
            ProviderError: If the provider cannot be reached or answers garbage
        """
        pass

    async def suggestions(self, query: str) -> List[str]:
        """Search-as-you-type suggestions; unsupported by default."""
        return []

    async def stream_url(self, video_id: str) -> Optional[str]:
        """
        Resolve a playable or embeddable URL.

        The default serves providers without a stream API: the id is looked up
        in the mock catalog, and anything unknown gets the generic sample.
        """
        return find_mock_stream_url(video_id) or SAMPLE_STREAM_URL
