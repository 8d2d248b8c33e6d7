"""Endpoint rotation over a pool of interchangeable mirrors."""

from dataclasses import dataclass, field
from typing import Any, List

import structlog

from streamx.core.metrics import MetricsCollector
from streamx.providers.exceptions import AllInstancesExhausted, ProviderError
from streamx.transport.base import Transport

logger = structlog.get_logger(__name__)

DEFAULT_MAX_ATTEMPTS = 3


@dataclass
class RotationState:
    """Mirror pool plus the index of the mirror calls start from.

    Shared by handle between the rotator and whoever reports on it. Reads and
    writes are unsynchronized; a stale read costs at most one failed attempt.
    """

    pool: List[str] = field(default_factory=list)
    preferred: int = 0

    def __post_init__(self) -> None:
        self.pool = [base.rstrip("/") for base in self.pool]

    @property
    def preferred_instance(self) -> str:
        return self.pool[self.preferred] if self.pool else ""


class EndpointRotator:
    """Fetches a path from the preferred mirror, failing over round-robin."""

    def __init__(
        self,
        transport: Transport,
        state: RotationState,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        """
        Initialize rotator.

        Args:
            transport: Transport used for each attempt
            state: Shared rotation state
            max_attempts: Upper bound on mirrors tried per call
        """
        self.transport = transport
        self.state = state
        self.max_attempts = max_attempts

    async def fetch(self, path: str) -> Any:
        """
        Fetch a path, trying up to max_attempts distinct mirrors in order.

        Args:
            path: Path and query appended to the mirror base URL

        Returns:
            Payload from the first mirror that succeeds

        Raises:
            AllInstancesExhausted: If every attempted mirror failed
        """
        pool = self.state.pool
        start = self.state.preferred
        attempts = min(self.max_attempts, len(pool))
        tried: List[str] = []

        for attempt in range(attempts):
            index = (start + attempt) % len(pool)
            instance = pool[index]
            tried.append(instance)

            try:
                payload = await self.transport.fetch(f"{instance}{path}")
            except ProviderError as e:
                MetricsCollector.record_mirror_failure(instance)
                logger.warning(
                    "mirror_failed",
                    instance=instance,
                    attempt=attempt + 1,
                    max_attempts=attempts,
                    error=str(e),
                )
                continue

            if index != self.state.preferred:
                self.state.preferred = index
                MetricsCollector.record_mirror_promotion()
                logger.info("instance_promoted", instance=instance, index=index)

            return payload

        raise AllInstancesExhausted(tried)
