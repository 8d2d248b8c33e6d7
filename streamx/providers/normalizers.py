"""Map raw provider payloads onto VideoRecord.

Every mapper is total: unexpected or missing fields degrade to the record's
display defaults, and output order matches input order.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from streamx.core.formatting import format_date, format_duration, format_views
from streamx.models.video import Platform, VideoRecord

UNKNOWN_DATE = "Recently"
SEPIASEARCH_BASE = "https://sepiasearch.org"


def _str(value: Any, default: str = "") -> str:
    if value is None or isinstance(value, (dict, list)):
        return default
    text = str(value)
    return text if text else default


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _items(raw: Any) -> List[Dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [it for it in raw if isinstance(it, dict)]


def piped_video_id(url: Any) -> str:
    """Extract the video id from a Piped item url such as "/watch?v=abc"."""
    if not isinstance(url, str) or not url:
        return ""
    ids = parse_qs(urlparse(url).query).get("v")
    if ids:
        return ids[0]
    _, sep, tail = url.partition("v=")
    return tail.split("&")[0] if sep else ""


def map_piped_item(it: Dict[str, Any]) -> VideoRecord:
    is_short = it.get("isShort")
    return VideoRecord(
        id=piped_video_id(it.get("url")),
        title=_str(it.get("title")),
        uploader=_str(it.get("uploaderName"), "Unknown"),
        views=format_views(it.get("views")),
        date=_str(it.get("uploadedDate"), UNKNOWN_DATE),
        duration=format_duration(it.get("duration")),
        thumbnail=_str(it.get("thumbnail")),
        platform=Platform.YOUTUBE,
        avatar=_str(it.get("uploaderAvatar")),
        is_short=is_short if isinstance(is_short, bool) else None,
    )


def map_piped_videos(raw: Any) -> List[VideoRecord]:
    return [map_piped_item(it) for it in _items(raw)]


def _dm_field(it: Dict[str, Any], owner_key: str) -> Any:
    # fields=owner.username comes back flat as "owner.username"; accept nested too
    flat = it.get(f"owner.{owner_key}")
    if flat is not None:
        return flat
    return _dict(it.get("owner")).get(owner_key)


def map_dailymotion_item(it: Dict[str, Any]) -> VideoRecord:
    return VideoRecord(
        id=_str(it.get("id")),
        title=_str(it.get("title")),
        uploader=_str(_dm_field(it, "username"), "Unknown"),
        views=format_views(it.get("views_total")),
        date=UNKNOWN_DATE,
        duration=format_duration(it.get("duration")),
        thumbnail=_str(it.get("thumbnail_720_url")),
        platform=Platform.DAILYMOTION,
        avatar=_str(_dm_field(it, "avatar_80_url")),
    )


def map_dailymotion_videos(raw: Any) -> List[VideoRecord]:
    return [map_dailymotion_item(it) for it in _items(raw)]


def _peertube_thumbnail(it: Dict[str, Any]) -> str:
    thumb = _str(it.get("thumbnailUrl"))
    if thumb:
        return thumb
    preview = _str(it.get("previewPath"))
    return f"{SEPIASEARCH_BASE}{preview}" if preview else ""


def _peertube_stream(it: Dict[str, Any]) -> Optional[str]:
    embed = _str(it.get("embedUrl")) or _str(it.get("embedPath"))
    return embed or None


def map_peertube_item(it: Dict[str, Any]) -> VideoRecord:
    title = it.get("name") or _dict(it.get("option")).get("name")
    return VideoRecord(
        id=_str(it.get("uuid")) or _str(it.get("id")),
        title=_str(title),
        uploader=_str(_dict(it.get("account")).get("name"), "PeerTube User"),
        views=format_views(it.get("views")),
        date=format_date(it.get("publishedAt")) or UNKNOWN_DATE,
        duration=format_duration(it.get("duration")),
        thumbnail=_peertube_thumbnail(it),
        platform=Platform.PEERTUBE,
        avatar="",
        stream_url=_peertube_stream(it),
    )


def map_peertube_videos(raw: Any) -> List[VideoRecord]:
    return [map_peertube_item(it) for it in _items(raw)]
