"""
LinkGraph CLI - Build Wikipedia link graphs from a root topic.

Usage:
    linkgraph build "Albert_Einstein" [--depth 1] [--max-concurrency 10]
        Builds the link graph and prints it as JSON.

    linkgraph serve [--host 127.0.0.1] [--port 8000]
        Runs the HTTP API.
"""

import argparse
import asyncio
import logging
import sys

from linkgraph.clients.wikipedia import WikipediaLinkClient
from linkgraph.config import settings
from linkgraph.models.graph import LinkGraph
from linkgraph.services.graph_builder import FetchError, GraphBuilder

logger = logging.getLogger(__name__)


async def build_graph(topic: str, depth: int, max_concurrency: int | None = None) -> LinkGraph:
    """Build a graph against the configured Wikipedia endpoint."""
    async with WikipediaLinkClient(
        base_url=settings.wikipedia_api_url,
        user_agent=settings.user_agent,
        timeout=settings.request_timeout,
        page_limit=settings.page_limit,
    ) as client:
        builder = GraphBuilder(client.fetch_links, max_concurrency=max_concurrency)
        return await builder.build(topic, depth)


def cmd_build(args: argparse.Namespace) -> None:
    """Build a link graph and print it to stdout."""
    if args.depth < 0:
        print("Error: --depth must be >= 0", file=sys.stderr)
        sys.exit(1)

    if args.max_concurrency is not None and args.max_concurrency < 0:
        print("Error: --max-concurrency must be >= 0", file=sys.stderr)
        sys.exit(1)

    try:
        graph = asyncio.run(build_graph(args.topic, args.depth, args.max_concurrency))
    except FetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(graph.model_dump_json(indent=2))


def cmd_serve(args: argparse.Namespace) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "linkgraph.main:app",
        host=args.host,
        port=args.port,
        log_level="debug" if args.verbose else "info",
    )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkgraph",
        description="LinkGraph - Build Wikipedia link graphs",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # 'build' subcommand
    build_parser = subparsers.add_parser("build", help="Build the link graph for a topic")
    build_parser.add_argument("topic", type=str, help="Root topic, e.g. Albert_Einstein")
    build_parser.add_argument(
        "--depth",
        type=int,
        default=settings.default_depth,
        help="Recursion depth (default: %(default)s)",
    )
    build_parser.add_argument(
        "--max-concurrency",
        type=int,
        default=settings.max_concurrency or None,
        help="Maximum fetches in flight (default: unbounded)",
    )
    build_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    build_parser.set_defaults(func=cmd_build)

    # 'serve' subcommand
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default=settings.host, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    serve_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging (stderr, so JSON output stays clean)
    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args.func(args)


if __name__ == "__main__":
    main()
