"""Business logic services."""

from .graph_builder import FetchError, GraphBuilder, LinkFetcher, VisitedSet

__all__ = ["GraphBuilder", "FetchError", "LinkFetcher", "VisitedSet"]
