"""Wikipedia Link Client

Async client resolving a Wikipedia article title to its outbound article links
using the Action API query endpoint (prop=links).

Public Interface:
    - WikipediaLinkClient: Main client class
    - WikipediaAPIError: Exception for API errors

Example:
    >>> async with WikipediaLinkClient() as client:
    ...     links = await client.fetch_links("Albert_Einstein")
    >>> print(len(links))
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class WikipediaAPIError(Exception):
    """Base exception for Wikipedia API errors."""

    pass


class WikipediaLinkClient:
    """Client for the Wikipedia Action API links query.

    Implements:
        - Main-namespace link listing (plnamespace=0)
        - Continuation handling so a single call returns every link
        - Error handling for HTTP, API-level and malformed responses

    Articles that do not exist resolve to an empty link list, not an error.
    Failed calls are not retried.

    Args:
        client: Existing httpx.AsyncClient to use (owned by the caller)
        base_url: Action API endpoint
        user_agent: User-Agent header sent with each request
        timeout: Request timeout in seconds (default: 30)
        page_limit: Links requested per API page (default: 500, the API maximum)
    """

    BASE_URL = "https://en.wikipedia.org/w/api.php"
    USER_AGENT = "LinkGraph/1.0 (Educational Project)"

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = BASE_URL,
        user_agent: str = USER_AGENT,
        timeout: float = 30.0,
        page_limit: int = 500,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout = timeout
        self.page_limit = page_limit
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        )

    async def __aenter__(self) -> "WikipediaLinkClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _make_request(self, params: dict[str, Any]) -> dict[str, Any]:
        """Make a single API request.

        Raises:
            WikipediaAPIError: On transport errors, non-2xx status or invalid JSON
        """
        try:
            response = await self._client.get(
                self.base_url,
                params=params,
                headers={"User-Agent": self.user_agent},
            )
        except httpx.HTTPError as e:
            raise WikipediaAPIError(f"Request failed: {e}") from e

        if response.is_error:
            raise WikipediaAPIError(
                f"Wikipedia API error: {response.status_code} {response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise WikipediaAPIError("Invalid JSON in Wikipedia API response") from e

        if not isinstance(data, dict):
            raise WikipediaAPIError("Unexpected API response format")

        if "error" in data:
            error_info = data["error"]
            raise WikipediaAPIError(f"API error: {error_info.get('info', 'Unknown error')}")

        return data

    async def fetch_links(self, topic: str) -> list[str]:
        """Fetch the titles of every article linked from a topic.

        Args:
            topic: Wikipedia article title (spaces or underscores)

        Returns:
            Linked article titles in API order; empty if the article is missing

        Raises:
            WikipediaAPIError: On API errors
        """
        params: dict[str, Any] = {
            "action": "query",
            "titles": topic,
            "prop": "links",
            "plnamespace": 0,
            "pllimit": self.page_limit,
            "format": "json",
        }

        links: list[str] = []
        pages_fetched = 0

        while True:
            data = await self._make_request(params)
            pages_fetched += 1

            pages = (data.get("query") or {}).get("pages")
            if not pages:
                break

            page = next(iter(pages.values()))
            links.extend(link["title"] for link in page.get("links", []))

            continuation = data.get("continue")
            if not continuation:
                break
            params = {**params, **continuation}

        logger.debug(f"Fetched {len(links)} links for '{topic}' ({pages_fetched} pages)")
        return links
