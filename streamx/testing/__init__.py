"""Testing module for preview-mode mock data."""

from streamx.testing.fixtures import (
    MOCK_VIDEOS,
    SAMPLE_STREAM_URL,
    filter_mock_set,
    find_mock_stream_url,
    get_mock_set,
)

__all__ = [
    "MOCK_VIDEOS",
    "SAMPLE_STREAM_URL",
    "filter_mock_set",
    "find_mock_stream_url",
    "get_mock_set",
]
