"""
Citation formatting and URL normalization.

Turns inline source URLs in a synthesized report into numbered markers and
appends a Sources section. Everything outside the replaced URLs is left
byte-for-byte unchanged.
"""

import re
from typing import NamedTuple
from urllib.parse import urlparse, urlunparse

# A URL wrapped in square brackets is replaced as a whole, brackets included.
# Bare URLs may contain balanced parentheses, e.g. .../wiki/Rust_(programming_language)
INLINE_URL_PATTERN = re.compile(
    r"\[(?P<bracketed>https?://[^\s\[\]]+)\]"
    r"|(?P<bare>https?://(?:[^\s<>\[\]()\"']|\([^\s()<>]*\))+)"
)

# Sentence punctuation that ends a bare URL rather than belonging to it
TRAILING_PUNCTUATION = ".,;:!?"


class CitationResult(NamedTuple):
    """Result of citation formatting."""

    text: str
    sources: list[str]


class CitationProcessor:
    """Replaces inline URLs with numbered citations."""

    @staticmethod
    def normalize_url(url: str) -> str:
        """
        Normalize a URL for duplicate detection.

        Scheme and host are lower-cased, a trailing slash on the path and the
        fragment are dropped. The query is kept since it often selects the page.

        Args:
            url: The URL to normalize

        Returns:
            Normalized URL string
        """
        try:
            parsed = urlparse(url.strip())
            return urlunparse(
                (
                    parsed.scheme.lower(),
                    parsed.netloc.lower(),
                    parsed.path.rstrip("/"),
                    parsed.params,
                    parsed.query,
                    "",
                )
            )
        except ValueError:
            return url.strip().lower()

    @staticmethod
    def split_trailing_punctuation(url: str) -> tuple[str, str]:
        """Split sentence punctuation off the end of a bare URL."""
        stripped = url.rstrip(TRAILING_PUNCTUATION)
        return stripped, url[len(stripped) :]

    def _match_url(self, match: re.Match) -> tuple[str, str]:
        """URL of a pattern match and the text that follows it in place."""
        if match.group("bracketed"):
            return match.group("bracketed"), ""
        return self.split_trailing_punctuation(match.group("bare"))

    def extract_urls(self, text: str) -> list[str]:
        """
        Extract unique inline URLs in first-seen order.

        Args:
            text: Text containing URLs

        Returns:
            List of URLs, one per normalized URL
        """
        seen: set[str] = set()
        urls: list[str] = []
        for match in INLINE_URL_PATTERN.finditer(text):
            url, _ = self._match_url(match)
            key = self.normalize_url(url)
            if key not in seen:
                seen.add(key)
                urls.append(url)
        return urls

    @staticmethod
    def build_sources_section(sources: list[str]) -> str:
        lines = [f"[{number}] {url}" for number, url in enumerate(sources, 1)]
        return "\n\n## Sources\n\n" + "\n".join(lines)

    def format_citations(self, text: str) -> CitationResult:
        """
        Number every unique inline URL and append a Sources section.

        Each occurrence of a URL is replaced by the same ``[n]`` marker, with
        numbers assigned in first-seen order. Text without URLs is returned
        unchanged and without a Sources section.

        Args:
            text: Synthesized report with inline URLs

        Returns:
            CitationResult with the formatted text and the numbered sources
        """
        sources = self.extract_urls(text)
        if not sources:
            return CitationResult(text=text, sources=[])

        numbers = {
            self.normalize_url(url): number for number, url in enumerate(sources, 1)
        }

        def replace(match: re.Match) -> str:
            url, trailing = self._match_url(match)
            return f"[{numbers[self.normalize_url(url)]}]{trailing}"

        updated_text = INLINE_URL_PATTERN.sub(replace, text)
        return CitationResult(
            text=updated_text + self.build_sources_section(sources),
            sources=sources,
        )

    def format_report(self, text: str) -> str:
        """Citation capability entry point: formatted report text only."""
        return self.format_citations(text).text
