"""
Common type definitions for the research loop.

TypedDict definitions for search, fetch and result payloads.
"""

from typing import Any, Literal, TypedDict


class SearchResultItem(TypedDict):
    """Individual search result from web search API."""

    title: str
    url: str
    description: str
    published: str


class SearchResults(TypedDict):
    """Complete search results from web search."""

    query: str
    results: list[SearchResultItem]
    total_results: int
    api_response: Any  # Raw API response data


class FetchResult(TypedDict, total=False):
    """Outcome of fetching a single web page."""

    url: str
    success: bool
    title: str
    content: str
    content_length: int
    error: str


StopReason = Literal["complete", "no_next_steps", "iteration_limit"]


class ResearchResults(TypedDict):
    """Report plus metadata for one research run."""

    query: str
    report: str
    iterations: int
    stop_reason: StopReason
    subtasks_total: int
    subtasks_failed: int
    sources_consulted: list[str]
    generated_at: str
