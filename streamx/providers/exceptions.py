"""Provider-specific exceptions."""

from typing import List, Optional


class ProviderError(Exception):
    """Base exception for provider errors."""

    pass


class TransportError(ProviderError):
    """Raised when an HTTP request fails or returns a non-2xx status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class AllInstancesExhausted(ProviderError):
    """Raised when every mirror tried for one rotated call has failed."""

    def __init__(self, tried: List[str]):
        self.tried = tried
        super().__init__(f"All API instances failed ({len(tried)} tried)")


class MalformedResponse(ProviderError):
    """Raised when a payload lacks the structure an adapter expects."""

    pass
