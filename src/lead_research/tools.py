"""
Research Tools for Agents

Web search and page fetching tools handed to research sub-agents.
"""

from typing import TYPE_CHECKING, Any

from strands import tool

from lead_research.types import SearchResults
from lead_research.utils import get_blocked_url_error, is_url_blocked
from lead_research.web import SearchCache, WebContentFetcher, web_search

if TYPE_CHECKING:
    from lead_research.agents import AgentManager

MAX_URLS_PER_FETCH = 5


def create_search_tools(
    agent_manager: "AgentManager", cache: SearchCache, web_fetcher: WebContentFetcher
):
    """Create the search and fetch tools bound to one agent manager."""

    @tool
    async def search_web(query: str, count: int = 5) -> dict[str, Any]:
        """
        Search the web for up-to-date information.

        Returns a list of relevant results with title, URL and a short description.
        Run several searches with distinct queries when a task needs it.

        Args:
            query: The search query string
            count: Number of results to return (default: 5, max: 20)

        Returns:
            Dictionary containing search results with title, url, and description
        """
        try:
            search_results: SearchResults = await web_search(query, count, cache=cache)
        except Exception as e:
            # Errors go back to the agent as data so it can try another query
            return {
                "query": query,
                "total_results": 0,
                "results": [],
                "error": f"Search failed: {e}",
            }

        return {
            "query": search_results["query"],
            "total_results": search_results["total_results"],
            "results": [
                {
                    "index": i,
                    "title": result["title"],
                    "url": result["url"],
                    "description": result["description"],
                    "published": result.get("published", ""),
                }
                for i, result in enumerate(search_results["results"], 1)
            ],
        }

    @tool
    async def fetch_web_content(urls: list[str]) -> list[dict[str, Any]]:
        """
        Fetch and extract the readable content of web pages given a list of URLs.

        Use it for the most promising URLs from the search results. Pages are
        fetched in parallel; at most 5 URLs are fetched per call.

        Args:
            urls: List of URLs to fetch content from (limit: 5 URLs max per call)

        Returns:
            List of dictionaries containing extracted content and metadata for each URL
        """
        filtered_urls = []
        blocked_results = []
        for url in urls[:MAX_URLS_PER_FETCH]:
            if is_url_blocked(url):
                blocked_results.append(get_blocked_url_error(url))
            else:
                filtered_urls.append(url)

        fetch_results = await web_fetcher.fetch_content_batch(filtered_urls)
        all_results = blocked_results + fetch_results

        for result in all_results:
            if result.get("success"):
                agent_manager.track_url(result["url"])

        return all_results

    return [search_web, fetch_web_content]
