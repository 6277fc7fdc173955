"""
Unit tests for URL normalization used in citation deduplication.

Tests handling of URL variations like trailing slashes, case differences,
query parameters, and fragments.
"""

from lead_research.processing import CitationProcessor

normalize_url = CitationProcessor.normalize_url


class TestUrlNormalization:
    """Test cases for CitationProcessor.normalize_url."""

    def test_basic_url_unchanged(self):
        url = "https://example.com/path"
        assert normalize_url(url) == "https://example.com/path"

    def test_trailing_slash_removed(self):
        assert normalize_url("https://example.com/path/") == "https://example.com/path"
        assert normalize_url("https://example.com/") == "https://example.com"

    def test_scheme_and_host_lowercased(self):
        url = "HTTPS://EXAMPLE.COM/path"
        assert normalize_url(url) == "https://example.com/path"

    def test_path_case_preserved(self):
        """Paths are case sensitive on most servers."""
        url = "https://example.com/Docs/README"
        assert normalize_url(url) == "https://example.com/Docs/README"

    def test_query_parameters_kept(self):
        url = "https://example.com/watch?v=abc123"
        assert normalize_url(url) == "https://example.com/watch?v=abc123"

    def test_fragments_removed(self):
        url = "https://example.com/path#section1"
        assert normalize_url(url) == "https://example.com/path"

    def test_complex_url_normalization(self):
        url = "HTTPS://Example.COM/x-guide/?ref=homepage#strategies"
        assert normalize_url(url) == "https://example.com/x-guide?ref=homepage"

    def test_whitespace_stripped(self):
        url = "  https://example.com/path  "
        assert normalize_url(url) == "https://example.com/path"

    def test_non_url_passes_through(self):
        assert normalize_url("not-a-valid-url") == "not-a-valid-url"

    def test_empty_string(self):
        assert normalize_url("") == ""

    def test_url_variations_normalization(self):
        """Test URL variations that should be considered identical."""
        urls = [
            "https://example.com/x-guide/",
            "https://example.com/x-guide",
            "https://Example.com/x-guide",
            "https://example.com/x-guide#top",
        ]

        expected = "https://example.com/x-guide"

        for url in urls:
            assert normalize_url(url) == expected, f"Failed for URL: {url}"
