"""
Web access for research sub-agents: search and page fetching.
"""

from lead_research.web.content_fetcher import WebContentFetcher
from lead_research.web.search import SearchCache, web_search

__all__ = ["WebContentFetcher", "SearchCache", "web_search"]
