"""
Tests for the Brave web search client and the sub-agent tools.
"""

import importlib
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from lead_research.tools import MAX_URLS_PER_FETCH, create_search_tools
from lead_research.utils import is_url_blocked
from lead_research.web import web_search

# The package re-exports the function under the module name
search_module = importlib.import_module("lead_research.web.search.web_search")

REAL_ASYNC_CLIENT = httpx.AsyncClient

BRAVE_RESPONSE = {
    "web": {
        "results": [
            {
                "title": "Tokio tutorial",
                "url": "https://tokio.rs/tokio/tutorial",
                "description": "Asynchronous Rust",
                "age": "2 days ago",
            }
        ]
    }
}


def mock_transport_client(handler):
    """AsyncClient factory routing every request through handler."""

    def factory(**kwargs):
        return REAL_ASYNC_CLIENT(transport=httpx.MockTransport(handler), **kwargs)

    return factory


@pytest.fixture
def empty_cache():
    cache = Mock()
    cache.get.return_value = None
    return cache


class TestWebSearch:
    """Test cases for web_search"""

    @pytest.mark.asyncio
    async def test_cache_hit_skips_request(self):
        cached = {"query": "q", "results": [], "total_results": 0, "api_response": {}}
        cache = Mock()
        cache.get.return_value = cached

        with patch.object(search_module.httpx, "AsyncClient") as client:
            assert await web_search("q", 5, cache=cache) is cached

        client.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_api_key(self, empty_cache):
        with patch.object(
            search_module, "get_settings",
            return_value=Mock(brave_api_key=""),
        ):
            with pytest.raises(ValueError, match="BRAVE_API_KEY"):
                await web_search("q", cache=empty_cache)

    @pytest.mark.asyncio
    async def test_successful_search_is_cached(self, empty_cache):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=BRAVE_RESPONSE)

        with patch.object(
            search_module.httpx, "AsyncClient",
            side_effect=mock_transport_client(handler),
        ):
            results = await web_search("tokio", 30, cache=empty_cache, api_key="key")

        assert results["results"] == [
            {
                "title": "Tokio tutorial",
                "url": "https://tokio.rs/tokio/tutorial",
                "description": "Asynchronous Rust",
                "published": "2 days ago",
            }
        ]
        assert results["total_results"] == 1
        assert requests[0].headers["X-Subscription-Token"] == "key"
        assert requests[0].url.params["count"] == "20"
        empty_cache.set.assert_called_once_with("tokio", 30, results)

    @pytest.mark.asyncio
    async def test_rate_limit_is_retried(self, empty_cache):
        responses = iter([httpx.Response(429), httpx.Response(200, json=BRAVE_RESPONSE)])

        with (
            patch.object(
                search_module.httpx, "AsyncClient",
                side_effect=mock_transport_client(lambda request: next(responses)),
            ),
            patch.object(search_module.asyncio, "sleep", new=AsyncMock()),
        ):
            results = await web_search("tokio", cache=empty_cache, api_key="key")

        assert results["total_results"] == 1

    @pytest.mark.asyncio
    async def test_server_error_raises(self, empty_cache):
        with patch.object(
            search_module.httpx, "AsyncClient",
            side_effect=mock_transport_client(lambda request: httpx.Response(500)),
        ):
            with pytest.raises(httpx.HTTPError, match="status 500"):
                await web_search("tokio", cache=empty_cache, api_key="key")

        empty_cache.set.assert_not_called()


class TestSearchTools:
    """Test cases for the tools handed to sub-agents"""

    def setup_method(self):
        self.agent_manager = Mock()
        self.web_fetcher = Mock()
        self.cache = Mock()
        self.search_web, self.fetch_web_content = create_search_tools(
            self.agent_manager, self.cache, self.web_fetcher
        )

    @pytest.mark.asyncio
    async def test_search_failure_returned_as_data(self):
        with patch(
            "lead_research.tools.web_search", AsyncMock(side_effect=ValueError("no key"))
        ):
            result = await self.search_web(query="tokio")

        assert result["results"] == []
        assert result["error"] == "Search failed: no key"

    @pytest.mark.asyncio
    async def test_search_results_are_indexed(self):
        search_results = {
            "query": "tokio",
            "total_results": 1,
            "results": [
                {
                    "title": "Tokio",
                    "url": "https://tokio.rs",
                    "description": "Runtime",
                    "published": "",
                }
            ],
            "api_response": {},
        }
        with patch("lead_research.tools.web_search", AsyncMock(return_value=search_results)):
            result = await self.search_web(query="tokio", count=3)

        assert result["results"][0]["index"] == 1
        assert "api_response" not in result

    @pytest.mark.asyncio
    async def test_fetch_filters_blocked_and_tracks_successes(self):
        self.web_fetcher.fetch_content_batch = AsyncMock(
            return_value=[
                {"url": "https://a.example", "success": True, "content": "A"},
                {"url": "https://b.example", "success": False, "error": "HTTP 403"},
            ]
        )

        results = await self.fetch_web_content(
            urls=["https://r.jina.ai/https://x.example", "https://a.example", "https://b.example"]
        )

        self.web_fetcher.fetch_content_batch.assert_awaited_once_with(
            ["https://a.example", "https://b.example"]
        )
        assert results[0]["success"] is False
        assert "blocked" in results[0]["error"]
        self.agent_manager.track_url.assert_called_once_with("https://a.example")

    @pytest.mark.asyncio
    async def test_fetch_caps_url_count(self):
        self.web_fetcher.fetch_content_batch = AsyncMock(return_value=[])
        urls = [f"https://site{i}.example" for i in range(MAX_URLS_PER_FETCH + 3)]

        await self.fetch_web_content(urls=urls)

        assert self.web_fetcher.fetch_content_batch.call_args[0][0] == urls[:MAX_URLS_PER_FETCH]


class TestBlockedUrls:
    def test_blocked_domain(self):
        assert is_url_blocked("https://r.jina.ai/https://example.com")
        assert not is_url_blocked("https://example.com")
