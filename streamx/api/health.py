"""Health endpoints.

/health reports configuration state only. Upstream providers are never
probed: a dead provider is already absorbed by the fallback tiers, so it does
not make this service unhealthy.
"""

import time
from datetime import datetime, timezone
from typing import Dict, Literal

import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from streamx import __version__
from streamx.api.schemas import ComponentHealth, HealthResponse, LivenessResponse
from streamx.services.stream_service import StreamService

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])

_started_at: float = time.monotonic()


def reset_start_time() -> None:
    global _started_at
    _started_at = time.monotonic()


# Bound to the application's service in create_app()
async def get_stream_service() -> StreamService:
    raise NotImplementedError("Stream service dependency not configured")


def _check_transport(service: StreamService) -> ComponentHealth:
    details = {"mode": service.transport.mode, "fallback": "empty" if service.is_native else "mock"}
    return ComponentHealth(status="healthy", details=details)


def _check_rotation(service: StreamService) -> ComponentHealth:
    """Report the mirror pool and which mirror calls currently start from."""
    state = service.rotation_state
    if state is None or not state.pool:
        return ComponentHealth(status="unhealthy", details={"error": "No mirror pool configured"})

    return ComponentHealth(
        status="healthy",
        details={
            "instances": len(state.pool),
            "preferred_index": state.preferred,
            "preferred_instance": state.preferred_instance,
        },
    )


def _check_providers(service: StreamService) -> ComponentHealth:
    providers = service.provider_manager.list_providers()
    if not any(providers.values()):
        return ComponentHealth(status="unhealthy", details={"error": "No providers enabled"})
    return ComponentHealth(status="healthy", details=providers)


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Service can answer requests"},
        503: {"description": "Misconfigured: no mirrors or no enabled providers"},
    },
)
async def health_check(
    service: StreamService = Depends(get_stream_service),  # noqa: B008
) -> JSONResponse:
    """Report transport mode, mirror rotation and provider registry state."""
    components: Dict[str, ComponentHealth] = {
        "transport": _check_transport(service),
        "rotation": _check_rotation(service),
        "providers": _check_providers(service),
    }

    healthy = all(c.status == "healthy" for c in components.values())
    overall: Literal["healthy", "unhealthy"] = "healthy" if healthy else "unhealthy"

    body = HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=__version__,
        uptime_seconds=round(time.monotonic() - _started_at, 2),
        components=components,
    )

    logger.info(
        "health_checked",
        status=overall,
        components={name: c.status for name, c in components.items()},
    )
    return JSONResponse(
        content=body.model_dump(),
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


@router.get("/liveness", response_model=LivenessResponse)
async def liveness_check() -> LivenessResponse:
    """Process is up; no dependency checks."""
    return LivenessResponse(status="alive")
