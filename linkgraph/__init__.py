"""LinkGraph: bounded-depth link graphs rooted at a Wikipedia topic."""

from linkgraph.models import GraphNode, LinkGraph
from linkgraph.services import FetchError, GraphBuilder

__version__ = "1.0.0"

__all__ = ["GraphBuilder", "FetchError", "GraphNode", "LinkGraph"]
