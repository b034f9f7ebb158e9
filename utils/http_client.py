"""
HTTP client utilities with connection pooling.
Provides reusable httpx clients for provider and search calls.
"""
import httpx
from config import Config


class HTTPClientManager:
    """Manages shared httpx clients with connection pooling."""

    _provider_client: httpx.AsyncClient | None = None
    _search_client: httpx.AsyncClient | None = None

    @classmethod
    def get_provider_client(cls) -> httpx.AsyncClient:
        """
        Get or create a shared httpx client for AI provider calls.

        Features:
        - Connection pooling (reuses TCP connections to the provider APIs)
        - Generous timeout for long completions

        Returns:
            Configured httpx.AsyncClient for chat-completion requests
        """
        if cls._provider_client is None:
            limits = httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=60.0
            )

            cls._provider_client = httpx.AsyncClient(
                timeout=Config.AI_TIMEOUT,
                limits=limits,
                http2=True
            )

        return cls._provider_client

    @classmethod
    def get_search_client(cls) -> httpx.AsyncClient:
        """
        Get or create a shared httpx client for search operations.

        Returns:
            Configured httpx.AsyncClient for Google and YouTube lookups
        """
        if cls._search_client is None:
            limits = httpx.Limits(
                max_connections=10,
                max_keepalive_connections=5,
                keepalive_expiry=30.0
            )

            cls._search_client = httpx.AsyncClient(
                timeout=Config.SEARCH_TIMEOUT,
                follow_redirects=True,
                limits=limits,
                http2=True
            )

        return cls._search_client

    @classmethod
    async def close_all(cls) -> None:
        """
        Close all managed clients and clean up connections.
        """
        if cls._provider_client is not None:
            await cls._provider_client.aclose()
            cls._provider_client = None

        if cls._search_client is not None:
            await cls._search_client.aclose()
            cls._search_client = None
