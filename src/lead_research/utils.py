"""
Utility functions for research sub-agent tools.
"""

from .types import FetchResult

# Domains that are blocked for fetching
BLOCKED_DOMAINS = [
    # Anonymous calls to the jina.ai reader get rate limited quickly, and some
    # models reach for it whenever another fetch is blocked.
    "r.jina.ai",
]


def is_url_blocked(url: str) -> bool:
    """
    Check if a URL should be blocked from fetching.

    Args:
        url: The URL to check

    Returns:
        True if the URL is blocked, False otherwise
    """
    return any(blocked_domain in url for blocked_domain in BLOCKED_DOMAINS)


def get_blocked_url_error(url: str) -> FetchResult:
    """Create a standardized error response for blocked URLs."""
    return FetchResult(
        url=url,
        success=False,
        error="URL blocked - domain not allowed for fetching",
        content="",
        title="",
    )
