"""YouTube provider backed by a rotating pool of Piped API mirrors."""

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import structlog

from streamx.models.video import Platform, VideoRecord
from streamx.providers.base import VideoProvider
from streamx.providers.exceptions import MalformedResponse
from streamx.providers.normalizers import map_piped_videos
from streamx.transport.rotation import EndpointRotator

logger = structlog.get_logger(__name__)


def _component(value: str) -> str:
    """Percent-encode a path or query component, slashes included."""
    return quote(value, safe="")


class PipedProvider(VideoProvider):
    """YouTube provider implementation over Piped mirrors.

    Every request goes through the rotator so a dead mirror is skipped and
    the healthy one becomes preferred for later calls.
    """

    platform = Platform.YOUTUBE

    # Progressive (audio+video) variants in order of preference
    QUALITY_PREFERENCE = ["1080p", "720p"]

    def __init__(self, rotator: EndpointRotator):
        self.rotator = rotator

    async def trending(self, country: str = "US") -> List[VideoRecord]:
        data = await self.rotator.fetch(f"/trending?region={_component(country)}")
        if not isinstance(data, list):
            raise MalformedResponse("Piped trending payload is not a list")
        return map_piped_videos(data)

    async def search(self, query: str) -> List[VideoRecord]:
        data = await self.rotator.fetch(f"/search?q={_component(query)}&filter=all")
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise MalformedResponse("Piped search payload has no items list")

        streams = [it for it in items if isinstance(it, dict) and it.get("type") == "stream"]
        logger.debug("piped_search_filtered", total=len(items), streams=len(streams))
        return map_piped_videos(streams)

    async def suggestions(self, query: str) -> List[str]:
        data = await self.rotator.fetch(f"/suggestions?query={_component(query)}")
        if not isinstance(data, list):
            raise MalformedResponse("Piped suggestions payload is not a list")
        return [str(s) for s in data if isinstance(s, (str, int, float))]

    async def stream_url(self, video_id: str) -> Optional[str]:
        """
        Resolve a playable URL for a video.

        Prefers the adaptive HLS manifest; otherwise the best progressive
        variant by QUALITY_PREFERENCE, then any progressive variant.

        Returns:
            Stream URL, or None if no variant qualifies
        """
        data = await self.rotator.fetch(f"/streams/{_component(video_id)}")
        if not isinstance(data, dict):
            raise MalformedResponse("Piped streams payload is not an object")

        hls = data.get("hls")
        if isinstance(hls, str) and hls:
            return hls

        best = self._select_progressive(data.get("videoStreams"))
        return best["url"] if best else None

    def _select_progressive(self, streams: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(streams, list):
            return None
        # videoOnly must be explicitly False; a missing flag does not count as progressive
        progressive = [
            s
            for s in streams
            if isinstance(s, dict)
            and s.get("videoOnly") is False
            and isinstance(s.get("url"), str)
            and s["url"]
        ]

        for quality in self.QUALITY_PREFERENCE:
            for stream in progressive:
                if stream.get("quality") == quality:
                    return stream
        return progressive[0] if progressive else None
