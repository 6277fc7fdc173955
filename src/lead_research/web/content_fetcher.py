"""
Web Content Fetcher

Fetches pages for research sub-agents and reduces them to readable text.
"""

import asyncio
import logging
import re

import httpx
from bs4 import BeautifulSoup, Tag

from ..types import FetchResult

logger = logging.getLogger("research")

BLOCK_ELEMENTS = ["p", "div", "section", "article", "li", "tr", "h1", "h2", "h3", "h4", "h5", "h6"]


class WebContentFetcher:
    """Fetches web pages concurrently and extracts their main text."""

    DEFAULT_HEADERS = {
        "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # Elements that never hold article text
    NOISE_ELEMENTS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "form", "iframe"]

    CONTENT_SELECTORS = [
        "main",
        "article",
        '[role="main"]',
        ".post-content",
        ".article-content",
        ".entry-content",
        "#content",
        "#main-content",
    ]

    def __init__(self, timeout: float = 30.0, max_content_length: int = 12000):
        self.timeout = timeout
        self.max_content_length = max_content_length

    async def fetch_content(self, url: str) -> FetchResult:
        """
        Fetch and clean content from a web URL.

        Args:
            url: The URL to fetch content from

        Returns:
            FetchResult with success status, content, title and error info
        """
        if not url.startswith(("http://", "https://")):
            return self._error_response(
                url, "Invalid URL format. Must start with http:// or https://"
            )

        async with httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True
        ) as client:
            try:
                response = await client.get(url, headers=self.DEFAULT_HEADERS)
                if response.status_code == 429:
                    # Rate limited - try once more after a brief wait
                    await asyncio.sleep(2)
                    response = await client.get(url, headers=self.DEFAULT_HEADERS)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                return self._error_response(
                    url,
                    f"HTTP {e.response.status_code}: {e.response.reason_phrase}. "
                    "The site may block automated requests; try an alternative source.",
                )
            except httpx.RequestError as e:
                return self._error_response(
                    url, f"Request failed: {e}. The site may be temporarily unavailable."
                )

        return self.parse_html(url, response.text)

    async def fetch_content_batch(self, urls: list[str]) -> list[FetchResult]:
        """
        Fetch content from multiple URLs concurrently.

        Args:
            urls: List of URLs to fetch content from

        Returns:
            One FetchResult per URL, in input order
        """
        if not urls:
            return []

        results = await asyncio.gather(
            *(self.fetch_content(url) for url in urls), return_exceptions=True
        )

        processed_results: list[FetchResult] = []
        for url, result in zip(urls, results):
            if isinstance(result, Exception):
                result = self._error_response(url, f"Fetch failed: {result}")
            if result.get("success"):
                logger.info(
                    f"✅ Fetched {url} ({result.get('content_length', 0)} chars)"
                )
            else:
                logger.warning(f"❌ Failed to fetch {url}: {result.get('error')}")
            processed_results.append(result)

        return processed_results

    def parse_html(self, url: str, html: str) -> FetchResult:
        """Parse HTML content and extract clean text."""
        soup = BeautifulSoup(html, "html.parser")

        title_tag = soup.find("title")
        title = title_tag.get_text().strip() if title_tag else "No title found"

        for element in soup(self.NOISE_ELEMENTS):
            element.decompose()

        text_content = self._extract_text(self._find_main_content(soup))
        if len(text_content) > self.max_content_length:
            text_content = (
                text_content[: self.max_content_length]
                + "\n\n... [Content truncated for brevity]"
            )

        return FetchResult(
            url=url,
            success=True,
            title=title,
            content=text_content,
            content_length=len(text_content),
        )

    def _find_main_content(self, soup: BeautifulSoup) -> Tag | BeautifulSoup:
        for selector in self.CONTENT_SELECTORS:
            main_content = soup.select_one(selector)
            if main_content:
                return main_content

        body = soup.find("body")
        if isinstance(body, Tag):
            return body
        return soup

    @staticmethod
    def _extract_text(element: Tag | BeautifulSoup) -> str:
        """Extract text with a line break after each block element."""
        for block in element.find_all(BLOCK_ELEMENTS):
            block.append("\n")

        text_content = element.get_text(" ")
        text_content = re.sub(r"[ \t]+", " ", text_content)
        text_content = re.sub(r" *\n *", "\n", text_content)
        text_content = re.sub(r"\n{3,}", "\n\n", text_content)
        return text_content.strip()

    @staticmethod
    def _error_response(url: str, error_msg: str) -> FetchResult:
        return FetchResult(url=url, success=False, error=error_msg, content="", title="")
