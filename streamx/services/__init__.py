"""Service layer implementations."""

from streamx.services.stream_service import StreamService

__all__ = ["StreamService"]
