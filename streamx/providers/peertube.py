"""PeerTube provider over the SepiaSearch federated index."""

from typing import Any, Dict, List
from urllib.parse import urlencode

from streamx.models.video import Platform, VideoRecord
from streamx.providers.base import VideoProvider
from streamx.providers.exceptions import MalformedResponse
from streamx.providers.normalizers import map_peertube_videos
from streamx.transport.base import Transport

PEERTUBE_SEARCH_API = "https://sepiasearch.org/api/v1/search/videos"


class PeerTubeProvider(VideoProvider):
    """PeerTube provider; trending is approximated by newest SFW uploads."""

    platform = Platform.PEERTUBE

    def __init__(
        self,
        transport: Transport,
        search_api: str = PEERTUBE_SEARCH_API,
        trending_count: int = 10,
        search_count: int = 20,
    ):
        self.transport = transport
        self.search_api = search_api
        self.trending_count = trending_count
        self.search_count = search_count

    async def _fetch(self, params: Dict[str, Any]) -> List[VideoRecord]:
        data = await self.transport.fetch(f"{self.search_api}?{urlencode(params)}")
        videos = data.get("data") if isinstance(data, dict) else None
        if not isinstance(videos, list):
            raise MalformedResponse("PeerTube payload has no data list")
        return map_peertube_videos(videos)

    async def trending(self, country: str = "US") -> List[VideoRecord]:
        # SepiaSearch has no regional view; country is accepted and ignored
        return await self._fetch(
            {"sort": "-publishedAt", "nsfw": "false", "count": self.trending_count}
        )

    async def search(self, query: str) -> List[VideoRecord]:
        return await self._fetch({"search": query, "count": self.search_count, "sort": "-match"})
