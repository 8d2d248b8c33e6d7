"""Response schemas for API endpoints.

This module provides Pydantic models for response serialization with
OpenAPI examples.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from streamx.models.video import VideoRecord


class VideoRecordResponse(BaseModel):
    """Normalized video record."""

    id: str = Field(..., examples=["dQw4w9WgXcQ"])
    title: str = Field(..., examples=["Rick Astley - Never Gonna Give You Up"])
    uploader: str = Field(..., examples=["Rick Astley"])
    views: str = Field(..., description="Formatted view count", examples=["1.5M"])
    date: str = Field(..., description="Formatted upload date", examples=["2 years ago"])
    duration: str = Field(..., examples=["3:32"])
    thumbnail: str = Field(..., examples=["https://i.ytimg.com/vi/dQw4w9WgXcQ/hqdefault.jpg"])
    platform: str = Field(..., examples=["YouTube"])
    avatar: str = Field("", examples=["https://yt3.ggpht.com/avatar.jpg"])
    stream_url: Optional[str] = Field(None, examples=["https://example.com/video.mp4"])
    is_short: Optional[bool] = Field(None, examples=[False])

    @classmethod
    def from_record(cls, record: VideoRecord) -> "VideoRecordResponse":
        return cls(**record.to_dict())


class VideoListResponse(BaseModel):
    """Response for trending and search endpoints."""

    provider: str = Field(..., examples=["All"])
    count: int = Field(..., examples=[20])
    items: List[VideoRecordResponse] = Field(default_factory=list)

    @classmethod
    def from_records(cls, provider: str, records: List[VideoRecord]) -> "VideoListResponse":
        return cls(
            provider=provider,
            count=len(records),
            items=[VideoRecordResponse.from_record(r) for r in records],
        )


class SuggestionsResponse(BaseModel):
    """Response for suggestions endpoint."""

    query: str = Field(..., examples=["never gonna"])
    suggestions: List[str] = Field(default_factory=list, examples=[["never gonna give you up"]])


class StreamUrlResponse(BaseModel):
    """Response for stream resolution endpoint."""

    video_id: str = Field(..., examples=["dQw4w9WgXcQ"])
    provider: str = Field(..., examples=["YouTube"])
    url: Optional[str] = Field(
        None,
        description="Playable or embeddable URL, null when none qualifies",
        examples=["https://pipedproxy.example/hls/manifest.m3u8"],
    )


HealthStatus = Literal["healthy", "unhealthy"]


class ComponentHealth(BaseModel):
    """One entry of the health report (transport, rotation or providers)."""

    status: HealthStatus
    details: Optional[Dict[str, Any]] = Field(default=None, examples=[{"mode": "native"}])


class HealthResponse(BaseModel):
    """Configuration-level health report; upstreams are not probed."""

    status: HealthStatus
    timestamp: str = Field(..., description="ISO 8601, UTC")
    version: str
    uptime_seconds: float
    components: Dict[str, ComponentHealth]


class LivenessResponse(BaseModel):
    status: Literal["alive"] = "alive"


class ErrorDetail(BaseModel):
    """Body of every 4xx/5xx response produced by this API."""

    error_code: str = Field(..., examples=["INVALID_PROVIDER", "INVALID_QUERY"])
    message: str = Field(..., examples=["Unknown provider 'Vimeo'"])
    details: Optional[str] = Field(None, examples=["Valid providers: All, YouTube, ..."])
    timestamp: str
    request_id: Optional[str] = Field(None, description="Echo of the X-Request-ID header")
    suggestion: Optional[str] = None
