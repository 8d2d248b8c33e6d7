"""Application wiring.

Builds the transport, the mirror rotation state, every provider adapter and
the stream service from configuration, then exposes them over FastAPI.
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from streamx import __version__
from streamx.api import health, metrics, video
from streamx.core.config import Config, ConfigService, MonitoringConfig, SecurityConfig
from streamx.core.errors import APIError, global_exception_handler
from streamx.core.logging import clear_request_id, configure_logging, set_request_id
from streamx.core.metrics import MetricsCollector, initialize_metrics
from streamx.models.video import Platform
from streamx.providers.dailymotion import DailymotionProvider
from streamx.providers.manager import ProviderManager
from streamx.providers.mock import MockProvider
from streamx.providers.peertube import PeerTubeProvider
from streamx.providers.youtube import PipedProvider
from streamx.services.stream_service import StreamService
from streamx.transport import EndpointRotator, RotationState, create_transport

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Platforms with no client-reachable API; served from the mock catalog
STATIC_PLATFORMS = (Platform.TIKTOK, Platform.RUMBLE, Platform.BANDCAMP)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds a request_id for log correlation and echoes it in the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_request_id()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Times every request and labels it by route template."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)

        # Unmatched paths share one label
        route = request.scope.get("route")
        MetricsCollector.record_request(
            method=request.method,
            endpoint=route.path if route else "/unmatched",
            status=response.status_code,
            duration=time.perf_counter() - started,
        )
        return response


def build_stream_service(
    config: Config, client: Optional[httpx.AsyncClient] = None
) -> StreamService:
    """
    Wire transport, rotation state, adapters and the facade from configuration.

    Args:
        config: Loaded application configuration
        client: Optional httpx client shared by all adapters

    Returns:
        Ready-to-use StreamService owning its rotation state
    """
    transport = create_transport(
        config.transport.mode,
        client=client,
        timeout=config.transport.timeout,
        user_agent=config.transport.user_agent,
        cors_proxy=config.transport.cors_proxy,
    )

    rotation_state = RotationState(pool=list(config.piped.instances))
    rotator = EndpointRotator(transport, rotation_state, max_attempts=config.piped.max_attempts)

    manager = ProviderManager()
    manager.register_provider(PipedProvider(rotator), enabled=config.piped.enabled)
    manager.register_provider(
        DailymotionProvider(
            transport, api_base=config.dailymotion.api_base, limit=config.dailymotion.limit
        ),
        enabled=config.dailymotion.enabled,
    )
    manager.register_provider(
        PeerTubeProvider(
            transport,
            search_api=config.peertube.search_api,
            trending_count=config.peertube.trending_count,
            search_count=config.peertube.search_count,
        ),
        enabled=config.peertube.enabled,
    )
    for platform in STATIC_PLATFORMS:
        manager.register_provider(MockProvider(platform))

    return StreamService(
        manager,
        transport,
        rotation_state=rotation_state,
        fallback_delay=config.fallback.delay,
    )


_stream_service: Optional[StreamService] = None


def get_stream_service() -> StreamService:
    if _stream_service is None:
        raise RuntimeError("Stream service not configured")
    return _stream_service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load configuration, build the stream service, and close its HTTP client on exit."""
    global _stream_service

    health.reset_start_time()
    config = ConfigService().load()
    configure_logging(config.logging.level, config.logging.format)
    initialize_metrics(__version__)

    _stream_service = build_stream_service(config)
    logger.info(
        "startup_complete",
        version=__version__,
        transport_mode=config.transport.mode,
        piped_instances=len(config.piped.instances),
        providers=_stream_service.provider_manager.list_providers(),
    )

    try:
        yield
    finally:
        await _stream_service.aclose()
        _stream_service = None
        logger.info("shutdown_complete")


def create_app() -> FastAPI:
    """Create the FastAPI application with middleware, handlers and routers."""
    app = FastAPI(
        title="StreamX Aggregator",
        description="Resilient multi-provider video metadata aggregation",
        version=__version__,
        lifespan=lifespan,
    )

    # Default ["*"] for development; override via APP_SECURITY_CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=SecurityConfig().cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    metrics_enabled = MonitoringConfig().metrics_enabled
    if metrics_enabled:
        app.add_middleware(MetricsMiddleware)

    # Added last: outermost layer, its request_id spans every other middleware
    app.add_middleware(RequestIDMiddleware)

    for exc_class in (Exception, APIError):
        app.add_exception_handler(exc_class, global_exception_handler)

    for router_module in (video, health):
        app.dependency_overrides[router_module.get_stream_service] = get_stream_service

    app.include_router(health.router)
    app.include_router(video.router)
    if metrics_enabled:
        app.include_router(metrics.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from streamx.core.config import ServerConfig

    server = ServerConfig()
    uvicorn.run(app, host=server.host, port=server.port)
