"""Pytest configuration and shared fixtures"""

import os
from typing import Any, Dict, List, Optional

import pytest

from streamx.models.video import Platform
from streamx.providers.dailymotion import DailymotionProvider
from streamx.providers.exceptions import TransportError
from streamx.providers.manager import ProviderManager
from streamx.providers.mock import MockProvider
from streamx.providers.peertube import PeerTubeProvider
from streamx.providers.youtube import PipedProvider
from streamx.services.stream_service import StreamService
from streamx.transport.base import Transport
from streamx.transport.rotation import EndpointRotator, RotationState

PIPED_POOL = [
    "https://mirror0.test",
    "https://mirror1.test",
    "https://mirror2.test",
    "https://mirror3.test",
]


class FakeTransport(Transport):
    """Scripted transport: answers by URL prefix, fails everything else.

    A route maps to a payload, or to an exception instance to raise.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None, native: bool = True):
        self._owns_client = False
        self._client = None
        self.is_native = native
        self.routes: Dict[str, Any] = routes or {}
        self.calls: List[str] = []

    async def fetch(self, url: str) -> Any:
        self.calls.append(url)
        for prefix, outcome in self.routes.items():
            if url.startswith(prefix):
                if isinstance(outcome, Exception):
                    raise outcome
                return outcome
        raise TransportError("HTTP error: 503", url=url, status_code=503)


def build_service(
    transport: FakeTransport, pool: Optional[List[str]] = None, fallback_delay: float = 0.0
) -> StreamService:
    """Wire a StreamService over a fake transport the way the app does."""
    state = RotationState(pool=list(pool or PIPED_POOL))
    rotator = EndpointRotator(transport, state)

    manager = ProviderManager()
    manager.register_provider(PipedProvider(rotator))
    manager.register_provider(DailymotionProvider(transport))
    manager.register_provider(PeerTubeProvider(transport))
    for platform in (Platform.TIKTOK, Platform.RUMBLE, Platform.BANDCAMP):
        manager.register_provider(MockProvider(platform))

    return StreamService(manager, transport, rotation_state=state, fallback_delay=fallback_delay)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables before each test"""
    for key in list(os.environ.keys()):
        if key.startswith("APP_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def piped_trending_payload() -> List[Dict[str, Any]]:
    """Sample Piped /trending response."""
    return [
        {
            "url": "/watch?v=dQw4w9WgXcQ",
            "type": "stream",
            "title": "Never Gonna Give You Up",
            "thumbnail": "https://pipedproxy.test/vi/dQw4w9WgXcQ/hqdefault.jpg",
            "uploaderName": "Rick Astley",
            "uploaderAvatar": "https://pipedproxy.test/avatar/rick.jpg",
            "uploadedDate": "14 years ago",
            "duration": 212,
            "views": 1500000000,
            "isShort": False,
        },
        {
            "url": "/watch?v=short123",
            "type": "stream",
            "title": "Quick tip",
            "thumbnail": "https://pipedproxy.test/vi/short123/hqdefault.jpg",
            "uploaderName": "Tips",
            "uploaderAvatar": None,
            "uploadedDate": None,
            "duration": 45,
            "views": 500,
            "isShort": True,
        },
    ]


@pytest.fixture
def piped_search_payload(piped_trending_payload: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Sample Piped /search response mixing streams with channels and playlists."""
    return {
        "items": [
            piped_trending_payload[0],
            {"url": "/channel/UCuAXFkgsw1L7xaCfnd5JJOw", "type": "channel", "name": "Rick Astley"},
            {"url": "/playlist?list=PL123", "type": "playlist", "name": "Hits"},
            piped_trending_payload[1],
        ],
        "nextpage": None,
    }


@pytest.fixture
def piped_streams_payload() -> Dict[str, Any]:
    """Sample Piped /streams response without an HLS manifest."""
    return {
        "title": "Never Gonna Give You Up",
        "hls": None,
        "videoStreams": [
            {"url": "https://cdn.test/720-vo", "quality": "720p", "videoOnly": True},
            {"url": "https://cdn.test/720", "quality": "720p", "videoOnly": False},
            {"url": "https://cdn.test/1080-vo", "quality": "1080p", "videoOnly": True},
            {"url": "https://cdn.test/1080", "quality": "1080p", "videoOnly": False},
            {"url": "https://cdn.test/360", "quality": "360p", "videoOnly": False},
        ],
    }


@pytest.fixture
def dailymotion_payload() -> Dict[str, Any]:
    """Sample Dailymotion /videos response (fields come back flat)."""
    return {
        "page": 1,
        "limit": 20,
        "has_more": True,
        "list": [
            {
                "id": "x8abcd1",
                "title": "Goal of the season",
                "owner.username": "sportsdesk",
                "views_total": 25300,
                "created_time": 1704067200,
                "duration": 95,
                "thumbnail_720_url": "https://s1.dmcdn.test/x8abcd1/720.jpg",
                "owner.avatar_80_url": "https://s2.dmcdn.test/avatar/80.jpg",
            }
        ],
    }


@pytest.fixture
def peertube_payload() -> Dict[str, Any]:
    """Sample SepiaSearch /search/videos response."""
    return {
        "total": 1,
        "data": [
            {
                "id": 4821,
                "uuid": "9c9de5e8-0a1e-484a-b099-e80766180a6d",
                "name": "Self-hosting 101",
                "duration": 3661,
                "views": 1234,
                "publishedAt": "2024-03-14T10:00:00.000Z",
                "thumbnailUrl": "https://framatube.test/static/thumbnails/9c9d.jpg",
                "embedUrl": "https://framatube.test/videos/embed/9c9de5e8",
                "embedPath": "/videos/embed/9c9de5e8",
                "account": {"name": "framasoft", "host": "framatube.test"},
            }
        ],
    }


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def make_service():
    """Factory wiring a StreamService over a FakeTransport."""
    return build_service


@pytest.fixture
def piped_pool() -> List[str]:
    """Four interchangeable Piped mirrors."""
    return list(PIPED_POOL)
