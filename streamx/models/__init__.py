"""Data models for the application."""

from streamx.models.video import ALL_PROVIDERS, Platform, VideoRecord

__all__ = [
    "ALL_PROVIDERS",
    "Platform",
    "VideoRecord",
]
