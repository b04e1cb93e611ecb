"""
Graph builder for LinkGraph.

Builds a bounded-depth link graph by recursively expanding outbound links
from a root topic. Each topic is fetched at most once per build; children
of a node are expanded concurrently.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from linkgraph.models.graph import GraphNode, LinkGraph

logger = logging.getLogger(__name__)

LinkFetcher = Callable[[str], Awaitable[list[str]]]


class FetchError(Exception):
    """Raised when the links for a topic could not be fetched."""

    def __init__(self, topic: str, cause: BaseException):
        self.topic = topic
        self.cause = cause
        super().__init__(f"Failed to fetch links for {topic}: {cause}")


def normalize_topic(link: str) -> str:
    """Convert a link title into the topic form used for fetching."""
    return link.replace(" ", "_")


def display_title(topic: str) -> str:
    """Human-readable title for a topic."""
    return topic.replace("_", " ")


class VisitedSet:
    """
    Topics already claimed for fetching during one build.

    claim() is an atomic test-and-set: of any number of concurrent callers
    for the same topic, exactly one gets True.
    """

    def __init__(self):
        self._topics: set[str] = set()
        self._lock = asyncio.Lock()

    async def claim(self, topic: str) -> bool:
        """Mark topic as visited; False if it was already claimed."""
        async with self._lock:
            if topic in self._topics:
                return False
            self._topics.add(topic)
            return True

    def __contains__(self, topic: str) -> bool:
        return topic in self._topics

    def __len__(self) -> int:
        return len(self._topics)


class GraphBuilder:
    """
    Depth-limited link graph builder.

    Args:
        fetch_links: Async callable returning the outbound link titles of a topic
        max_concurrency: Maximum fetches in flight per build (None or 0 = unbounded)

    Example:
        >>> builder = GraphBuilder(client.fetch_links)
        >>> graph = await builder.build("Albert_Einstein", max_depth=1)
        >>> print(len(graph.nodes))
    """

    def __init__(self, fetch_links: LinkFetcher, max_concurrency: int | None = None):
        if max_concurrency is not None and max_concurrency < 0:
            raise ValueError(f"max_concurrency must be >= 0, got {max_concurrency}")

        self.fetch_links = fetch_links
        self.max_concurrency = max_concurrency or None

    async def build(self, root: str, max_depth: int) -> LinkGraph:
        """
        Build the link graph rooted at a topic.

        Args:
            root: Root topic (recorded as given)
            max_depth: Recursion depth; 0 returns only the root node

        Returns:
            LinkGraph containing one node per visited topic

        Raises:
            FetchError: If any fetch within the depth bound fails
            ValueError: If max_depth is negative
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")

        start_time = time.time()

        visited = VisitedSet()
        # Created per build so the semaphore binds to the running event loop
        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        nodes = await self._expand(root, 0, max_depth, visited, semaphore)

        execution_time_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Built graph for '{root}' (depth={max_depth}): "
            f"{len(nodes)} nodes in {execution_time_ms:.1f}ms"
        )

        return LinkGraph(root=root, nodes=list(nodes.values()))

    async def _fetch(self, topic: str, semaphore: asyncio.Semaphore | None) -> list[str]:
        """Fetch links for a topic, wrapping any failure in FetchError."""
        try:
            if semaphore is None:
                links = await self.fetch_links(topic)
            else:
                async with semaphore:
                    links = await self.fetch_links(topic)
        except Exception as e:
            logger.warning(f"Fetch failed for '{topic}': {e}")
            raise FetchError(topic, e) from e

        links = list(links)
        logger.debug(f"Fetched {len(links)} links for '{topic}'")
        return links

    async def _expand(
        self,
        topic: str,
        depth: int,
        max_depth: int,
        visited: VisitedSet,
        semaphore: asyncio.Semaphore | None,
    ) -> dict[str, GraphNode]:
        """
        Expand a topic and, below max_depth, all of its links.

        Returns:
            Map of topic to node for everything this branch claimed
        """
        # Claim before fetching so concurrent branches never fetch the same topic
        if not await visited.claim(topic):
            logger.debug(f"Skipping '{topic}' at depth {depth}: already visited")
            return {}

        links = await self._fetch(topic, semaphore)

        nodes = {topic: GraphNode(id=topic, title=display_title(topic), links=links)}

        if depth >= max_depth or not links:
            return nodes

        children = [
            asyncio.create_task(
                self._expand(normalize_topic(link), depth + 1, max_depth, visited, semaphore)
            )
            for link in links
        ]

        try:
            results = await asyncio.gather(*children)
        except Exception:
            # Fail fast: stop sibling branches before propagating
            for child in children:
                child.cancel()
            await asyncio.gather(*children, return_exceptions=True)
            raise

        for child_nodes in results:
            for child_topic, child_node in child_nodes.items():
                nodes.setdefault(child_topic, child_node)

        return nodes
