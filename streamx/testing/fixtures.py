"""Static mock catalog for preview mode and scraper-only platforms.

These sets stand in for providers with no client-reachable API (TikTok,
Rumble, Bandcamp) and back the web-preview fallback when live retrieval
fails. Accessors always hand out copies so the catalog cannot be mutated.
"""

from typing import Dict, List, Optional

from streamx.models.video import Platform, VideoRecord

SAMPLE_BUCKET = "https://commondatastorage.googleapis.com/gtv-videos-bucket/sample"

# Played when a mock id has no stream of its own
SAMPLE_STREAM_URL = f"{SAMPLE_BUCKET}/BigBuckBunny.mp4"

# Generic set, also used as the YouTube/Dailymotion preview fallback
MOCK_VIDEOS: List[VideoRecord] = [
    VideoRecord(
        id="yt-mock-1",
        title="Big Buck Bunny - Open Movie (Full HD)",
        uploader="Blender Foundation",
        views="2.4M",
        date="2 years ago",
        duration="9:56",
        thumbnail=f"{SAMPLE_BUCKET}/images/BigBuckBunny.jpg",
        platform=Platform.YOUTUBE,
        avatar="https://i.pravatar.cc/80?img=11",
        stream_url=f"{SAMPLE_BUCKET}/BigBuckBunny.mp4",
    ),
    VideoRecord(
        id="yt-mock-2",
        title="Elephants Dream - The First Open Movie",
        uploader="Orange Open Movie Project",
        views="845.2K",
        date="5 years ago",
        duration="10:53",
        thumbnail=f"{SAMPLE_BUCKET}/images/ElephantsDream.jpg",
        platform=Platform.YOUTUBE,
        avatar="https://i.pravatar.cc/80?img=12",
        stream_url=f"{SAMPLE_BUCKET}/ElephantsDream.mp4",
    ),
    VideoRecord(
        id="yt-mock-3",
        title="Sintel - Third Open Movie by Blender",
        uploader="Blender Foundation",
        views="1.1M",
        date="3 years ago",
        duration="14:48",
        thumbnail=f"{SAMPLE_BUCKET}/images/Sintel.jpg",
        platform=Platform.YOUTUBE,
        avatar="https://i.pravatar.cc/80?img=11",
        stream_url=f"{SAMPLE_BUCKET}/Sintel.mp4",
    ),
    VideoRecord(
        id="yt-mock-4",
        title="Tears of Steel - Sci-Fi Short Film",
        uploader="Blender Studio",
        views="932.7K",
        date="1 year ago",
        duration="12:14",
        thumbnail=f"{SAMPLE_BUCKET}/images/TearsOfSteel.jpg",
        platform=Platform.YOUTUBE,
        avatar="https://i.pravatar.cc/80?img=13",
        stream_url=f"{SAMPLE_BUCKET}/TearsOfSteel.mp4",
    ),
    VideoRecord(
        id="yt-mock-5",
        title="Live Cricket Match Highlights - Final Over Thriller",
        uploader="Sports Central",
        views="3.8M",
        date="3 days ago",
        duration="1:02:45",
        thumbnail=f"{SAMPLE_BUCKET}/images/WeAreGoingOnBullrun.jpg",
        platform=Platform.YOUTUBE,
        avatar="https://i.pravatar.cc/80?img=14",
        stream_url=f"{SAMPLE_BUCKET}/WeAreGoingOnBullrun.mp4",
    ),
    VideoRecord(
        id="yt-mock-6",
        title="What Car Can You Get For A Grand?",
        uploader="Garage Talk",
        views="415.0K",
        date="Recently",
        duration="9:27",
        thumbnail=f"{SAMPLE_BUCKET}/images/WhatCarCanYouGetForAGrand.jpg",
        platform=Platform.YOUTUBE,
        avatar="https://i.pravatar.cc/80?img=15",
        stream_url=f"{SAMPLE_BUCKET}/WhatCarCanYouGetForAGrand.mp4",
    ),
]

MOCK_TIKTOK_VIDEOS: List[VideoRecord] = [
    VideoRecord(
        id="tt-mock-1",
        title="Street dance challenge goes viral",
        uploader="@dancecrew",
        views="12.5M",
        date="1 day ago",
        duration="0:15",
        thumbnail=f"{SAMPLE_BUCKET}/images/ForBiggerBlazes.jpg",
        platform=Platform.TIKTOK,
        avatar="https://i.pravatar.cc/80?img=21",
        stream_url=f"{SAMPLE_BUCKET}/ForBiggerBlazes.mp4",
        is_short=True,
    ),
    VideoRecord(
        id="tt-mock-2",
        title="60 second pasta recipe",
        uploader="@quickbites",
        views="4.2M",
        date="2 days ago",
        duration="0:15",
        thumbnail=f"{SAMPLE_BUCKET}/images/ForBiggerEscapes.jpg",
        platform=Platform.TIKTOK,
        avatar="https://i.pravatar.cc/80?img=22",
        stream_url=f"{SAMPLE_BUCKET}/ForBiggerEscapes.mp4",
        is_short=True,
    ),
    VideoRecord(
        id="tt-mock-3",
        title="Cat reacts to cucumber prank",
        uploader="@petlife",
        views="28.9M",
        date="5 days ago",
        duration="0:15",
        thumbnail=f"{SAMPLE_BUCKET}/images/ForBiggerFun.jpg",
        platform=Platform.TIKTOK,
        avatar="https://i.pravatar.cc/80?img=23",
        stream_url=f"{SAMPLE_BUCKET}/ForBiggerFun.mp4",
        is_short=True,
    ),
    VideoRecord(
        id="tt-mock-4",
        title="Sunset timelapse from the rooftop",
        uploader="@skyviews",
        views="860.3K",
        date="1 week ago",
        duration="0:15",
        thumbnail=f"{SAMPLE_BUCKET}/images/ForBiggerJoyrides.jpg",
        platform=Platform.TIKTOK,
        avatar="https://i.pravatar.cc/80?img=24",
        stream_url=f"{SAMPLE_BUCKET}/ForBiggerJoyrides.mp4",
        is_short=True,
    ),
]

MOCK_RUMBLE_VIDEOS: List[VideoRecord] = [
    VideoRecord(
        id="rb-mock-1",
        title="Off-road rally: Subaru Outback on street and dirt",
        uploader="RallyNation",
        views="312.4K",
        date="4 days ago",
        duration="9:54",
        thumbnail=f"{SAMPLE_BUCKET}/images/SubaruOutbackOnStreetAndDirt.jpg",
        platform=Platform.RUMBLE,
        avatar="https://i.pravatar.cc/80?img=31",
        stream_url=f"{SAMPLE_BUCKET}/SubaruOutbackOnStreetAndDirt.mp4",
    ),
    VideoRecord(
        id="rb-mock-2",
        title="Volkswagen GTI full review",
        uploader="AutoReviewHQ",
        views="98.1K",
        date="2 weeks ago",
        duration="15:01",
        thumbnail=f"{SAMPLE_BUCKET}/images/VolkswagenGTIReview.jpg",
        platform=Platform.RUMBLE,
        avatar="https://i.pravatar.cc/80?img=32",
        stream_url=f"{SAMPLE_BUCKET}/VolkswagenGTIReview.mp4",
    ),
    VideoRecord(
        id="rb-mock-3",
        title="Meltdown: the week in independent news",
        uploader="Indie Report",
        views="54.6K",
        date="Recently",
        duration="0:15",
        thumbnail=f"{SAMPLE_BUCKET}/images/ForBiggerMeltdowns.jpg",
        platform=Platform.RUMBLE,
        avatar="https://i.pravatar.cc/80?img=33",
        stream_url=f"{SAMPLE_BUCKET}/ForBiggerMeltdowns.mp4",
    ),
]

MOCK_PEERTUBE_VIDEOS: List[VideoRecord] = [
    VideoRecord(
        id="pt-mock-1",
        title="Self-hosting your own video platform",
        uploader="Framasoft",
        views="21.7K",
        date="3/14/2024",
        duration="18:22",
        thumbnail=f"{SAMPLE_BUCKET}/images/ElephantsDream.jpg",
        platform=Platform.PEERTUBE,
        stream_url=f"{SAMPLE_BUCKET}/ElephantsDream.mp4",
    ),
    VideoRecord(
        id="pt-mock-2",
        title="Introduction to the Fediverse",
        uploader="PeerTube User",
        views="8.9K",
        date="Recently",
        duration="7:41",
        thumbnail=f"{SAMPLE_BUCKET}/images/Sintel.jpg",
        platform=Platform.PEERTUBE,
        stream_url=f"{SAMPLE_BUCKET}/Sintel.mp4",
    ),
]

MOCK_BANDCAMP_VIDEOS: List[VideoRecord] = []

_MOCK_SETS: Dict[Platform, List[VideoRecord]] = {
    Platform.YOUTUBE: MOCK_VIDEOS,
    Platform.DAILYMOTION: MOCK_VIDEOS,
    Platform.PEERTUBE: MOCK_PEERTUBE_VIDEOS,
    Platform.TIKTOK: MOCK_TIKTOK_VIDEOS,
    Platform.RUMBLE: MOCK_RUMBLE_VIDEOS,
    Platform.BANDCAMP: MOCK_BANDCAMP_VIDEOS,
}


def get_mock_set(platform: Optional[str]) -> List[VideoRecord]:
    """
    Get the best available mock set for a provider token.

    Args:
        platform: Platform tag, "All", or any unknown token

    Returns:
        Copy of the provider's set; the generic set for anything unmapped
    """
    try:
        key = Platform(platform)
    except ValueError:
        return list(MOCK_VIDEOS)
    return list(_MOCK_SETS[key])


def filter_mock_set(
    videos: List[VideoRecord],
    query: str,
    min_query_length: int = 0,
    widen_on_miss: bool = True,
) -> List[VideoRecord]:
    """
    Filter a mock set by case-insensitive title substring.

    Queries shorter than min_query_length return the unfiltered set. A query
    matching nothing also returns it unless widen_on_miss is False, in which
    case the result is empty.
    """
    if len(query) < min_query_length:
        return list(videos)

    needle = query.lower()
    matches = [v for v in videos if needle in v.title.lower()]
    if matches or not widen_on_miss:
        return matches
    return list(videos)


def find_mock_stream_url(video_id: str) -> Optional[str]:
    """Look an id up across every mock set and return its stream URL."""
    for videos in (MOCK_TIKTOK_VIDEOS, MOCK_RUMBLE_VIDEOS, MOCK_PEERTUBE_VIDEOS, MOCK_VIDEOS):
        for video in videos:
            if video.id == video_id and video.stream_url:
                return video.stream_url
    return None
