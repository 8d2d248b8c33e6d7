"""Video API endpoints.

Thin JSON wrappers over StreamService. The service never raises for
provider failures, so the only errors produced here are request validation
errors.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Path, Query

from streamx.api.schemas import (
    ErrorDetail,
    StreamUrlResponse,
    SuggestionsResponse,
    VideoListResponse,
)
from streamx.core.errors import APIError, ErrorCode
from streamx.models.video import ALL_PROVIDERS, Platform
from streamx.services.stream_service import StreamService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["video"])

VALID_PROVIDERS = [ALL_PROVIDERS] + [p.value for p in Platform]


# Dependency placeholder for the stream service
async def get_stream_service() -> StreamService:
    """Get stream service instance."""
    raise NotImplementedError("Stream service dependency not configured")


def validate_provider(provider: str) -> str:
    """
    Check a provider selection token.

    Raises:
        APIError: If the token is neither "All" nor a platform tag
    """
    if provider not in VALID_PROVIDERS:
        raise APIError(
            ErrorCode.INVALID_PROVIDER,
            f"Unknown provider '{provider}'",
            details=f"Valid providers: {', '.join(VALID_PROVIDERS)}",
        )
    return provider


@router.get(
    "/trending",
    response_model=VideoListResponse,
    responses={400: {"model": ErrorDetail, "description": "Invalid provider"}},
)
async def get_trending(
    provider: str = Query(ALL_PROVIDERS, description="Platform tag or 'All'"),  # noqa: B008
    country: str = Query("US", min_length=2, max_length=2, description="Region code"),  # noqa: B008
    service: StreamService = Depends(get_stream_service),  # noqa: B008
) -> Any:
    """
    Get trending videos.

    Always answers with a list; failed providers are replaced by preview
    mocks (web mode) or an empty list (native mode).
    """
    validate_provider(provider)
    records = await service.get_trending(provider, country.upper())

    logger.info("trending_served", provider=provider, country=country, count=len(records))
    return VideoListResponse.from_records(provider, records)


@router.get(
    "/search",
    response_model=VideoListResponse,
    responses={400: {"model": ErrorDetail, "description": "Invalid provider or query"}},
)
async def search_videos(
    q: str = Query(..., description="Search query"),  # noqa: B008
    provider: str = Query(ALL_PROVIDERS, description="Platform tag or 'All'"),  # noqa: B008
    service: StreamService = Depends(get_stream_service),  # noqa: B008
) -> Any:
    """Search videos on one provider."""
    validate_provider(provider)
    query = q.strip()
    if not query:
        raise APIError(ErrorCode.INVALID_QUERY, "Search query must not be empty")

    records = await service.search(query, provider)

    logger.info("search_served", provider=provider, query=query, count=len(records))
    return VideoListResponse.from_records(provider, records)


@router.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    q: str = Query("", description="Partial query"),  # noqa: B008
    service: StreamService = Depends(get_stream_service),  # noqa: B008
) -> Any:
    """Get search suggestions; an empty query yields an empty list."""
    suggestions = await service.get_suggestions(q)
    return SuggestionsResponse(query=q, suggestions=suggestions)


@router.get(
    "/stream/{video_id}",
    response_model=StreamUrlResponse,
    responses={400: {"model": ErrorDetail, "description": "Invalid provider"}},
)
async def get_stream_url(
    video_id: str = Path(..., min_length=1, description="Provider-scoped video id"),  # noqa: B008
    provider: str = Query(..., description="Platform tag the id belongs to"),  # noqa: B008
    service: StreamService = Depends(get_stream_service),  # noqa: B008
) -> Any:
    """Resolve a playable or embeddable URL for a video."""
    validate_provider(provider)
    url = await service.get_stream_url(video_id, provider)

    logger.info("stream_resolved", video_id=video_id, provider=provider, found=url is not None)
    return StreamUrlResponse(video_id=video_id, provider=provider, url=url)
