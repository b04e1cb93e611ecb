"""
Graph API endpoints.

Provides the endpoint that builds a link graph around a root topic.
"""

import logging

from fastapi import APIRouter, Depends, Path, Query, Request, Response

from linkgraph.api.errors import error_response
from linkgraph.clients import get_link_fetcher
from linkgraph.config import settings
from linkgraph.models.common import ErrorResponse
from linkgraph.models.graph import LinkGraph
from linkgraph.rate_limit import limiter
from linkgraph.services import FetchError, GraphBuilder, LinkFetcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["graph"])


@router.get(
    "/graph/{topic}",
    response_model=LinkGraph,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
@limiter.limit(settings.rate_limit)
async def get_graph(
    request: Request,  # noqa: ARG001 - required by slowapi limiter
    response: Response,
    topic: str = Path(
        ..., min_length=1, max_length=settings.max_topic_length, description="Root topic"
    ),
    depth: int = Query(
        settings.default_depth,
        ge=0,
        le=settings.max_depth,
        description="Recursion depth (0 returns only the root node)",
    ),
    fetch_links: LinkFetcher = Depends(get_link_fetcher),
):
    """
    Build the link graph rooted at a topic.

    Returns every node reachable within the requested depth, each with its
    complete outbound link list.
    """
    # Set cache headers
    response.headers["Cache-Control"] = "public, max-age=3600"

    builder = GraphBuilder(fetch_links, max_concurrency=settings.max_concurrency)

    try:
        return await builder.build(topic, depth)

    except FetchError as e:
        logger.warning(f"Graph build failed for '{topic}': {e}")
        return error_response(502, "UPSTREAM_ERROR", str(e), details={"topic": e.topic})
