"""Video data models shared by every provider."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Platform(str, Enum):
    """Source platform tag carried by every normalized record."""

    YOUTUBE = "YouTube"
    DAILYMOTION = "Dailymotion"
    PEERTUBE = "PeerTube"
    TIKTOK = "TikTok"
    RUMBLE = "Rumble"
    BANDCAMP = "Bandcamp"


# Provider selection sentinel meaning "default breadth", routed to YouTube
ALL_PROVIDERS = "All"


@dataclass(frozen=True)
class VideoRecord:
    """Normalized video metadata for display.

    Every non-optional field always holds a display-ready value; normalizers
    substitute explicit defaults instead of leaving anything unset.
    """

    id: str
    title: str
    uploader: str
    views: str  # formatted, e.g. "1.5M"
    date: str  # formatted upload date or "Recently"
    duration: str  # "H:MM:SS" / "M:SS" / "00:00"
    thumbnail: str
    platform: Platform
    avatar: str = ""
    stream_url: Optional[str] = None
    is_short: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["platform"] = self.platform.value
        return data

