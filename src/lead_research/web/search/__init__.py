"""
Search and Caching Package

Provides web search capabilities with caching for research sub-agents.
"""

from lead_research.web.search.cache import SearchCache
from lead_research.web.search.web_search import web_search

__all__ = ["web_search", "SearchCache"]
