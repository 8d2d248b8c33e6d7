"""Dailymotion provider over the public Data API."""

from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode

from streamx.models.video import Platform, VideoRecord
from streamx.providers.base import VideoProvider
from streamx.providers.exceptions import MalformedResponse
from streamx.providers.normalizers import map_dailymotion_videos
from streamx.transport.base import Transport

DM_API_BASE = "https://api.dailymotion.com"

VIDEO_FIELDS = [
    "id",
    "title",
    "owner.username",
    "views_total",
    "created_time",
    "duration",
    "thumbnail_720_url",
    "owner.avatar_80_url",
]


class DailymotionProvider(VideoProvider):
    """Dailymotion provider; live and premium videos are always excluded."""

    platform = Platform.DAILYMOTION

    EMBED_URL = "https://www.dailymotion.com/embed/video/{video_id}?autoplay=1"

    def __init__(self, transport: Transport, api_base: str = DM_API_BASE, limit: int = 20):
        self.transport = transport
        self.api_base = api_base.rstrip("/")
        self.limit = limit

    def _videos_url(self, extra: Dict[str, Any]) -> str:
        params: Dict[str, Any] = {
            "flags": "no_live,no_premium",
            "fields": ",".join(VIDEO_FIELDS),
        }
        params.update(extra)
        return f"{self.api_base}/videos?{urlencode(params, safe=',.')}"

    async def _fetch_list(self, url: str) -> List[VideoRecord]:
        data = await self.transport.fetch(url)
        videos = data.get("list") if isinstance(data, dict) else None
        if not isinstance(videos, list):
            raise MalformedResponse("Dailymotion payload has no video list")
        return map_dailymotion_videos(videos)

    async def trending(self, country: str = "US") -> List[VideoRecord]:
        url = self._videos_url({"sort": "trending", "limit": self.limit, "country": country})
        return await self._fetch_list(url)

    async def search(self, query: str) -> List[VideoRecord]:
        url = self._videos_url({"limit": self.limit, "search": query})
        return await self._fetch_list(url)

    async def stream_url(self, video_id: str) -> Optional[str]:
        # Embeds are addressable by id; no API round-trip needed
        return self.EMBED_URL.format(video_id=quote(video_id, safe=""))
