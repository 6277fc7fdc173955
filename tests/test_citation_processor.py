"""
Unit tests for CitationProcessor.

Tests inline URL extraction, numbered citation replacement and the Sources
section in isolation from the rest of the research system.
"""

from lead_research.processing import CitationProcessor, CitationResult


class TestCitationProcessor:
    """Test suite for CitationProcessor."""

    def setup_method(self):
        """Set up test fixtures."""
        self.processor = CitationProcessor()

    def test_bracketed_url_replaced(self):
        result = self.processor.format_citations("Final comparison...[http://x]")

        assert result == CitationResult(
            text="Final comparison...[1]\n\n## Sources\n\n[1] http://x",
            sources=["http://x"],
        )

    def test_bare_url_replaced(self):
        text = "According to https://example.com/study the effect is small"

        result = self.processor.format_citations(text)

        assert result.text == (
            "According to [1] the effect is small"
            "\n\n## Sources\n\n[1] https://example.com/study"
        )

    def test_trailing_punctuation_stays_in_text(self):
        text = "See https://example.com/a. Also https://example.com/b, and more!"

        result = self.processor.format_citations(text)

        assert result.text.startswith("See [1]. Also [2], and more!")
        assert result.sources == ["https://example.com/a", "https://example.com/b"]

    def test_bare_url_with_parentheses(self):
        text = "Rust is described at https://en.wikipedia.org/wiki/Rust_(programming_language) today"

        result = self.processor.format_citations(text)

        assert result.text == (
            "Rust is described at [1] today"
            "\n\n## Sources\n\n[1] https://en.wikipedia.org/wiki/Rust_(programming_language)"
        )

    def test_bracketed_url_with_parentheses(self):
        text = "Rust [https://en.wikipedia.org/wiki/Rust_(programming_language)]."

        result = self.processor.format_citations(text)

        assert result.text.startswith("Rust [1].\n\n## Sources")
        assert result.sources == [
            "https://en.wikipedia.org/wiki/Rust_(programming_language)"
        ]

    def test_url_inside_parenthetical_remark(self):
        text = "Go is popular (see https://go.dev/blog/survey)."

        result = self.processor.format_citations(text)

        assert result.text.startswith("Go is popular (see [1]).")
        assert result.sources == ["https://go.dev/blog/survey"]

    def test_sources_match_extracted_urls(self):
        text = "A https://a.example/x, B [https://b.example/y] and https://A.example/x/"

        result = self.processor.format_citations(text)

        assert result.sources == self.processor.extract_urls(text)
        assert result.text.startswith("A [1], B [2] and [1]")

    def test_numbering_follows_first_appearance(self):
        text = (
            "Rust is fast [https://rust.example/perf]. "
            "Go is simple [https://go.example/docs]. "
            "Rust is also safe [https://rust.example/perf]."
        )

        result = self.processor.format_citations(text)

        assert result.text.split("\n\n## Sources")[0] == (
            "Rust is fast [1]. Go is simple [2]. Rust is also safe [1]."
        )
        assert result.text.endswith(
            "## Sources\n\n[1] https://rust.example/perf\n[2] https://go.example/docs"
        )

    def test_equivalent_urls_share_a_number(self):
        text = (
            "First [https://Example.com/guide/] and again "
            "[https://example.com/guide#intro]."
        )

        result = self.processor.format_citations(text)

        assert result.sources == ["https://Example.com/guide/"]
        assert "First [1] and again [1]." in result.text

    def test_different_queries_are_distinct_sources(self):
        text = "[https://example.com/page?id=1] vs [https://example.com/page?id=2]"

        result = self.processor.format_citations(text)

        assert len(result.sources) == 2
        assert result.text.startswith("[1] vs [2]")

    def test_text_without_urls_unchanged(self):
        text = "A report with no links.\n\n* bullet [not a link]\n"

        result = self.processor.format_citations(text)

        assert result.text == text
        assert result.sources == []
        assert "## Sources" not in result.text

    def test_surrounding_text_preserved_exactly(self):
        text = "# Title\n\n  Indented line with https://a.example/x\n\n| a | b |\n"

        result = self.processor.format_citations(text)

        assert result.text.startswith("# Title\n\n  Indented line with [1]\n\n| a | b |\n")

    def test_formatting_is_deterministic(self):
        text = "One [https://a.example] two https://b.example three [https://a.example]"

        assert self.processor.format_report(text) == self.processor.format_report(text)

    def test_extract_urls(self):
        text = "x [https://a.example/1] y https://b.example/2. z https://A.example/1/"

        assert self.processor.extract_urls(text) == [
            "https://a.example/1",
            "https://b.example/2",
        ]

    def test_non_http_schemes_ignored(self):
        text = "Contact mailto:someone@example.com or ftp://files.example.com"

        assert self.processor.format_report(text) == text

    def test_build_sources_section(self):
        section = CitationProcessor.build_sources_section(
            ["https://a.example", "https://b.example"]
        )

        assert section == "\n\n## Sources\n\n[1] https://a.example\n[2] https://b.example"
