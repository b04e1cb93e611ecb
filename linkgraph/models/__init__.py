"""Pydantic models for graphs and API responses."""

from .common import ErrorDetail, ErrorResponse, HealthResponse
from .graph import GraphNode, LinkGraph

__all__ = [
    "GraphNode",
    "LinkGraph",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
]
