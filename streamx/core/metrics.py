"""Prometheus metrics.

Besides HTTP traffic, the counters here make the resilience layer visible:
which providers fail, which fallback answered, and how often the mirror
pool rotates.
"""

from prometheus_client import Counter, Histogram, Info

app_info = Info("streamx", "StreamX aggregator build information")

http_requests_total = Counter(
    "streamx_http_requests_total",
    "HTTP requests served",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "streamx_http_request_duration_seconds",
    "HTTP request latency, including provider round-trips and fallback delay",
    ["method", "endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 0.8, 1.0, 2.0, 5.0, 10.0, 30.0],
)

provider_requests_total = Counter(
    "streamx_provider_requests_total",
    "Provider calls by operation and outcome",
    ["provider", "operation", "outcome"],
)

provider_fallbacks_total = Counter(
    "streamx_provider_fallbacks_total",
    "Failed provider calls answered with a fallback, by kind (mock or empty)",
    ["provider", "kind"],
)

errors_total = Counter(
    "streamx_errors_total",
    "Error responses by error code and endpoint",
    ["error_code", "endpoint"],
)

mirror_failures_total = Counter(
    "streamx_mirror_failures_total",
    "Failed attempts against a rotation mirror",
    ["instance"],
)

mirror_promotions_total = Counter(
    "streamx_mirror_promotions_total",
    "Times a different mirror became the preferred instance",
)


class MetricsCollector:
    """Static helpers so call sites never touch metric objects directly."""

    @staticmethod
    def record_request(method: str, endpoint: str, status: int, duration: float) -> None:
        """
        Record one served HTTP request.

        Args:
            method: HTTP method
            endpoint: Route template, not the raw path
            status: Response status code
            duration: Seconds spent serving the request
        """
        http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    @staticmethod
    def record_provider_call(provider: str, operation: str, outcome: str) -> None:
        """
        Record one adapter call.

        Args:
            provider: Platform tag, e.g. "YouTube"
            operation: "trending", "search", "suggestions" or "stream"
            outcome: "success" or "failure"
        """
        provider_requests_total.labels(
            provider=provider, operation=operation, outcome=outcome
        ).inc()

    @staticmethod
    def record_fallback(provider: str, kind: str) -> None:
        provider_fallbacks_total.labels(provider=provider, kind=kind).inc()

    @staticmethod
    def record_error(error_code: str, endpoint: str) -> None:
        errors_total.labels(error_code=error_code, endpoint=endpoint).inc()

    @staticmethod
    def record_mirror_failure(instance: str) -> None:
        mirror_failures_total.labels(instance=instance).inc()

    @staticmethod
    def record_mirror_promotion() -> None:
        mirror_promotions_total.inc()


def initialize_metrics(version: str) -> None:
    """Publish build information; called once at startup."""
    app_info.info({"version": version})
