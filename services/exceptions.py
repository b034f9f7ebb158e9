"""
Exceptions raised by provider clients, search lookups and the router.
"""
from typing import Optional


class AIServiceError(Exception):
    """Base class for errors raised inside the chat router."""


class ConfigurationError(AIServiceError):
    """A required API key is missing; raised before any network call."""


class ProviderError(AIServiceError):
    """Upstream provider call failed or returned an unusable body."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{provider} API error: {message}")
        self.provider = provider
        self.status_code = status_code


class EnrichmentSourceError(AIServiceError):
    """A search or attachment lookup failed."""

    def __init__(self, source: str, message: str):
        super().__init__(f"{source} lookup failed: {message}")
        self.source = source
