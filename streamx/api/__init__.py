"""API endpoints."""

from streamx.api import health, metrics, video

__all__ = [
    "health",
    "metrics",
    "video",
]
