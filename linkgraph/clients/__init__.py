"""Upstream link source clients."""

from .connection import ClientManager, get_link_fetcher
from .wikipedia import WikipediaAPIError, WikipediaLinkClient

__all__ = ["get_link_fetcher", "ClientManager", "WikipediaLinkClient", "WikipediaAPIError"]
