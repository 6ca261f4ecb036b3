"""
Error taxonomy.

Provider clients raise these; adapters convert them into LoadResult /
ActionResult values at their boundary so nothing above an adapter needs
exception handling to keep other providers' data visible.
"""

from typing import Optional


class StratusError(Exception):
    """Base class for all Stratus exceptions."""


class ProviderAPIError(StratusError):
    """Raised when a provider API call fails (HTTP error, SDK error, network)."""

    def __init__(
        self, provider: str, message: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message
        self.status_code = status_code


class InstanceNotFoundError(ProviderAPIError):
    """Raised when the provider reports that the target instance does not exist."""


class MalformedResponseError(StratusError):
    """Raised when a provider response does not have the expected shape."""


class UnsupportedProviderError(StratusError):
    """Raised when no adapter or data variant exists for a provider."""
