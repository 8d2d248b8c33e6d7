"""Static providers for platforms without a client-reachable API."""

from typing import List

from streamx.models.video import Platform, VideoRecord
from streamx.providers.base import VideoProvider
from streamx.testing.fixtures import filter_mock_set, get_mock_set

# Shorter queries are treated as "show everything"
MIN_SEARCH_QUERY_LENGTH = 3


class MockProvider(VideoProvider):
    """Serves a fixed mock set; search filters it by title.

    Used for TikTok, Rumble and Bandcamp (whose set is empty).
    """

    def __init__(self, platform: Platform):
        self.platform = platform

    async def trending(self, country: str = "US") -> List[VideoRecord]:
        return get_mock_set(self.platform.value)

    async def search(self, query: str) -> List[VideoRecord]:
        return filter_mock_set(
            get_mock_set(self.platform.value), query, min_query_length=MIN_SEARCH_QUERY_LENGTH
        )
