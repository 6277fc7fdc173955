import asyncio
import itertools
import logging

import httpx
from httpcore._async.connection import exponential_backoff

from ...settings import get_settings
from ...types import SearchResultItem, SearchResults
from .cache import SearchCache

logger = logging.getLogger("research")

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"
MAX_RETRIES = 5


async def web_search(
    query: str, count: int = 10, *, cache: SearchCache, api_key: str | None = None
) -> SearchResults:
    """
    Perform a web search using the Brave Search API with caching.

    Args:
        query: The search query string
        count: Number of results to return (default: 10, max: 20)
        cache: Cache consulted before and filled after the request
        api_key: Brave API key; defaults to the configured key

    Returns:
        Dictionary containing search results and metadata

    Raises:
        ValueError: If no Brave API key is configured
        httpx.HTTPError: If the API request fails
    """
    cached_results = cache.get(query, count)
    if cached_results is not None:
        return cached_results

    api_key = api_key or get_settings().brave_api_key
    if not api_key:
        raise ValueError("BRAVE_API_KEY environment variable is required")

    headers = {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "X-Subscription-Token": api_key,
    }
    params = {
        "q": str(query),
        "count": str(min(count, 20)),  # Brave API max is 20
        "search_lang": "en",
        "country": "US",
        "safesearch": "moderate",
    }

    async with httpx.AsyncClient(timeout=300.0) as client:
        for attempt, delay in enumerate(
            itertools.islice(exponential_backoff(factor=1.0), MAX_RETRIES + 1)
        ):
            await asyncio.sleep(delay)  # 0, 1, 2, 4, 8, 16 seconds

            try:
                response = await client.get(
                    BRAVE_SEARCH_URL, headers=headers, params=params
                )
                response.raise_for_status()
            except httpx.TimeoutException as e:
                raise httpx.HTTPError("Search request timed out") from e
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 429 and attempt < MAX_RETRIES:
                    logger.warning(
                        f"Rate limited, retrying (attempt {attempt + 1}/{MAX_RETRIES + 1})"
                    )
                    continue
                raise httpx.HTTPError(
                    f"Search API returned status {e.response.status_code}: {e.response.text}"
                ) from e

            data = response.json()
            results = [
                SearchResultItem(
                    title=result.get("title", ""),
                    url=result.get("url", ""),
                    description=result.get("description", ""),
                    published=result.get("age", ""),
                )
                for result in data.get("web", {}).get("results", [])
            ]
            search_results = SearchResults(
                query=query,
                results=results,
                total_results=len(results),
                api_response=data,
            )
            cache.set(query, count, search_results)
            return search_results

    raise httpx.HTTPError("Maximum retries exceeded for rate limited requests")
