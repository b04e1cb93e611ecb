"""
Tests for the Wikipedia link client.

HTTP is served by httpx.MockTransport -- no network calls.
"""

import asyncio

import httpx
import pytest

from linkgraph.clients.wikipedia import WikipediaAPIError, WikipediaLinkClient
from linkgraph.services.graph_builder import FetchError, GraphBuilder

BASE_URL = "https://wiki.test/w/api.php"


def _page(title: str, links: list[str]) -> dict:
    return {
        "12345": {
            "pageid": 12345,
            "ns": 0,
            "title": title,
            "links": [{"ns": 0, "title": link} for link in links],
        }
    }


def _fetch(handler, topic: str, **kwargs) -> list[str]:
    """Fetch links for a topic against a mocked Action API."""

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
            client = WikipediaLinkClient(client=http, base_url=BASE_URL, **kwargs)
            return await client.fetch_links(topic)

    return asyncio.run(run())


class TestFetchLinks:
    """Tests for WikipediaLinkClient.fetch_links."""

    def test_returns_link_titles_in_order(self):
        def handler(request):
            return httpx.Response(200, json={"query": {"pages": _page("Physics", ["Energy", "Matter"])}})

        assert _fetch(handler, "Physics") == ["Energy", "Matter"]

    def test_request_parameters(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"batchcomplete": ""})

        _fetch(handler, "Albert_Einstein", page_limit=100)

        params = seen[0].url.params
        assert str(seen[0].url).startswith(BASE_URL)
        assert params["action"] == "query"
        assert params["titles"] == "Albert_Einstein"
        assert params["prop"] == "links"
        assert params["plnamespace"] == "0"
        assert params["pllimit"] == "100"
        assert params["format"] == "json"
        assert seen[0].headers["User-Agent"] == WikipediaLinkClient.USER_AGENT

    def test_follows_continuation(self):
        seen = []

        def handler(request):
            seen.append(dict(request.url.params))
            if "plcontinue" not in request.url.params:
                return httpx.Response(
                    200,
                    json={
                        "continue": {"plcontinue": "12345|0|Matter", "continue": "||"},
                        "query": {"pages": _page("Physics", ["Energy"])},
                    },
                )
            return httpx.Response(200, json={"query": {"pages": _page("Physics", ["Matter"])}})

        assert _fetch(handler, "Physics") == ["Energy", "Matter"]
        assert len(seen) == 2
        assert seen[1]["plcontinue"] == "12345|0|Matter"
        assert seen[1]["titles"] == "Physics"

    def test_missing_article_returns_empty_list(self):
        def handler(request):
            return httpx.Response(
                200,
                json={"query": {"pages": {"-1": {"ns": 0, "title": "Nope", "missing": ""}}}},
            )

        assert _fetch(handler, "Nope") == []

    def test_response_without_pages_returns_empty_list(self):
        def handler(request):
            return httpx.Response(200, json={"batchcomplete": ""})

        assert _fetch(handler, "Anything") == []


class TestFetchLinksErrors:
    """Failures raise WikipediaAPIError without retrying."""

    def test_http_error_status(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(503)

        with pytest.raises(WikipediaAPIError, match="503"):
            _fetch(handler, "Physics")

        assert len(calls) == 1

    def test_api_level_error(self):
        def handler(request):
            return httpx.Response(
                200, json={"error": {"code": "badvalue", "info": "Unrecognized value"}}
            )

        with pytest.raises(WikipediaAPIError, match="Unrecognized value"):
            _fetch(handler, "Physics")

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>not json</html>")

        with pytest.raises(WikipediaAPIError, match="Invalid JSON"):
            _fetch(handler, "Physics")

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(WikipediaAPIError, match="Request failed"):
            _fetch(handler, "Physics")


class TestClientLifecycle:
    """Ownership of the underlying httpx client."""

    def test_injected_client_left_open(self):
        async def run():
            http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
            async with WikipediaLinkClient(client=http):
                pass
            closed = http.is_closed
            await http.aclose()
            return closed

        assert asyncio.run(run()) is False

    def test_owned_client_closed(self):
        async def run():
            client = WikipediaLinkClient()
            await client.aclose()
            return client._client.is_closed

        assert asyncio.run(run()) is True


class TestGraphBuilderWithWikipedia:
    """GraphBuilder driving the real client against a mocked API."""

    def test_build_depth_one(self):
        pages = {
            "Albert_Einstein": ["Physics", "Theory of relativity"],
            "Physics": ["Energy"],
            "Theory_of_relativity": [],
        }
        requested = []

        def handler(request):
            title = request.url.params["titles"]
            requested.append(title)
            return httpx.Response(200, json={"query": {"pages": _page(title, pages[title])}})

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
                client = WikipediaLinkClient(client=http, base_url=BASE_URL)
                return await GraphBuilder(client.fetch_links).build("Albert_Einstein", 1)

        graph = asyncio.run(run())

        assert sorted(node.id for node in graph.nodes) == [
            "Albert_Einstein",
            "Physics",
            "Theory_of_relativity",
        ]
        assert graph.get_node("Physics").links == ["Energy"]
        assert sorted(requested) == ["Albert_Einstein", "Physics", "Theory_of_relativity"]

    def test_upstream_failure_becomes_fetch_error(self):
        def handler(request):
            return httpx.Response(500)

        async def run():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
                client = WikipediaLinkClient(client=http, base_url=BASE_URL)
                return await GraphBuilder(client.fetch_links).build("Physics", 0)

        with pytest.raises(FetchError) as exc_info:
            asyncio.run(run())

        assert exc_info.value.topic == "Physics"
        assert isinstance(exc_info.value.cause, WikipediaAPIError)
