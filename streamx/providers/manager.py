"""Registry of provider adapters keyed by platform tag."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

import structlog

from streamx.models.video import ALL_PROVIDERS, Platform
from streamx.providers.base import VideoProvider
from streamx.providers.exceptions import ProviderError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class _Registration:
    provider: VideoProvider
    enabled: bool


class ProviderManager:
    """Holds one adapter per platform and resolves caller selections to them."""

    def __init__(self) -> None:
        self._registry: Dict[str, _Registration] = {}

    def register_provider(self, provider: VideoProvider, enabled: bool = True) -> None:
        """Register an adapter under its platform tag, replacing any previous one."""
        name = provider.platform.value
        self._registry[name] = _Registration(provider=provider, enabled=enabled)
        logger.info("provider_registered", provider=name, enabled=enabled)

    def _set_enabled(self, name: str, enabled: bool) -> None:
        registration = self._registry.get(name)
        if registration is None:
            raise ValueError(f"Provider '{name}' is not registered")
        registration.enabled = enabled
        logger.info("provider_toggled", provider=name, enabled=enabled)

    def enable_provider(self, name: str) -> None:
        """
        Raises:
            ValueError: If no adapter is registered under name
        """
        self._set_enabled(name, True)

    def disable_provider(self, name: str) -> None:
        """
        Raises:
            ValueError: If no adapter is registered under name
        """
        self._set_enabled(name, False)

    def is_provider_enabled(self, name: str) -> bool:
        registration = self._registry.get(name)
        return registration is not None and registration.enabled

    def get_provider_by_name(self, name: str) -> Optional[VideoProvider]:
        """Return the adapter for a platform tag, or None if unknown or disabled."""
        registration = self._registry.get(name)
        if registration is None or not registration.enabled:
            return None
        return registration.provider

    def resolve(self, selection: str) -> Optional[VideoProvider]:
        """
        Resolve a caller's provider selection.

        "All" means default breadth and is served by the YouTube adapter.

        Args:
            selection: Platform tag or "All"

        Returns:
            Adapter, or None if the token maps to nothing enabled
        """
        name = Platform.YOUTUBE.value if selection == ALL_PROVIDERS else selection
        provider = self.get_provider_by_name(name)
        if provider is None:
            logger.debug("provider_unresolved", selection=selection)
        return provider

    def list_providers(self) -> Dict[str, bool]:
        """Map every registered platform tag to its enabled flag."""
        return {name: reg.enabled for name, reg in self._registry.items()}

    async def execute_with_error_isolation(
        self,
        provider_name: str,
        operation: Callable[..., Awaitable[T]],
        *args: Any,
        **kwargs: Any,
    ) -> T:
        """
        Run an adapter coroutine so that callers only ever see ProviderError.

        ProviderError subclasses propagate unchanged. Anything else (a bug
        in a mapper, a library error) is logged with its traceback and
        wrapped.

        Raises:
            ProviderError: If the operation fails for any reason
        """
        operation_name = getattr(operation, "__name__", repr(operation))
        try:
            return await operation(*args, **kwargs)
        except ProviderError:
            raise
        except Exception as e:
            logger.error(
                "provider_unexpected_error",
                provider=provider_name,
                operation=operation_name,
                error=str(e),
                exc_info=True,
            )
            raise ProviderError(
                f"Provider '{provider_name}' encountered an unexpected error: {e}"
            ) from e
