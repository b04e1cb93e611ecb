"""Graph data models."""

from pydantic import BaseModel, Field


class GraphNode(BaseModel):
    """Graph node representing an article and its outbound links."""

    id: str = Field(..., description="Node ID (topic as fetched, e.g. Albert_Einstein)")
    title: str = Field(..., description="Display title (ID with underscores as spaces)")
    links: list[str] = Field(
        default_factory=list, description="Outbound link titles in fetch order"
    )


class LinkGraph(BaseModel):
    """Link graph rooted at the queried topic."""

    root: str = Field(..., description="Root topic")
    nodes: list[GraphNode] = Field(..., description="All nodes discovered during traversal")

    def get_node(self, node_id: str) -> GraphNode | None:
        """Return the node with the given ID, if present."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None
