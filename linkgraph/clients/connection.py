"""
Wikipedia client management.

Provides a shared link client with dependency injection for FastAPI.
"""

import logging
import threading

from linkgraph.clients.wikipedia import WikipediaLinkClient
from linkgraph.config import settings
from linkgraph.services.graph_builder import LinkFetcher

logger = logging.getLogger(__name__)


class ClientManager:
    """
    Singleton manager for the Wikipedia link client.

    Keeps a single WikipediaLinkClient so requests share one HTTP
    connection pool. The client is created on first use and closed
    at application shutdown.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Implement singleton pattern."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize client manager."""
        if self._initialized:
            return

        self._client = None
        self._initialized = True

    @property
    def is_open(self) -> bool:
        """Whether a shared client has been created and not yet closed."""
        return self._client is not None

    def get_client(self) -> WikipediaLinkClient:
        """Get or create the shared link client from current settings."""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    logger.info(f"Creating Wikipedia link client: {settings.wikipedia_api_url}")
                    self._client = WikipediaLinkClient(
                        base_url=settings.wikipedia_api_url,
                        user_agent=settings.user_agent,
                        timeout=settings.request_timeout,
                        page_limit=settings.page_limit,
                    )

        return self._client

    async def close(self):
        """Close the shared client (a later request creates a new one)."""
        if self._client is not None:
            client, self._client = self._client, None
            await client.aclose()
            logger.info("Closed Wikipedia link client")


# Global client manager instance
_manager = ClientManager()


def get_link_fetcher() -> LinkFetcher:
    """
    FastAPI dependency for the link fetch capability.

    Returns:
        Async callable mapping a topic to its outbound link titles
    """
    return _manager.get_client().fetch_links
