"""
Tests for the SearchCache module
"""

import json
from datetime import datetime, timedelta

import pytest

from lead_research.types import SearchResults
from lead_research.web.search.cache import SearchCache


def backdate(cache: SearchCache, query: str, count: int, hours: float) -> None:
    """Rewrite an entry's timestamp so it looks older than it is."""
    metadata = cache._load_metadata()
    cache_key = cache._generate_cache_key(query, count)
    metadata[cache_key]["cached_at"] = (
        datetime.now() - timedelta(hours=hours)
    ).isoformat()
    cache._save_metadata(metadata)


class TestSearchCache:
    """Test cases for SearchCache functionality"""

    @pytest.fixture
    def cache(self, tmp_path):
        return SearchCache(cache_dir=str(tmp_path / "cache"), cache_ttl_hours=1)

    @pytest.fixture
    def search_results(self) -> SearchResults:
        return {
            "query": "rust vs go concurrency",
            "total_results": 2,
            "results": [
                {
                    "title": "Fearless Concurrency",
                    "url": "https://doc.rust-lang.org/book/ch16-00-concurrency.html",
                    "description": "Rust's ownership model and threads",
                    "published": "2024-05-01",
                },
                {
                    "title": "Effective Go: Concurrency",
                    "url": "https://go.dev/doc/effective_go#concurrency",
                    "description": "Goroutines and channels",
                    "published": "",
                },
            ],
            "api_response": {"type": "search"},
        }

    def test_initialization_creates_metadata(self, tmp_path):
        cache_dir = tmp_path / "nested" / "cache"
        SearchCache(cache_dir=str(cache_dir))

        metadata_file = cache_dir / SearchCache.METADATA_FILENAME
        assert metadata_file.exists()
        assert json.loads(metadata_file.read_text()) == {}

    def test_cache_key_ignores_case_and_whitespace(self, cache):
        key = cache._generate_cache_key("Rust vs Go", 10)

        assert cache._generate_cache_key("  rust VS go ", 10) == key
        assert cache._generate_cache_key("Rust vs Go", 5) != key

    def test_set_and_get(self, cache, search_results):
        assert cache.get("rust vs go concurrency", 5) is None

        cache.set("rust vs go concurrency", 5, search_results)

        assert cache.get("rust vs go concurrency", 5) == search_results
        assert cache.get("rust vs go concurrency", 10) is None
        assert cache.get("python asyncio", 5) is None

    def test_metadata_tracking(self, cache, search_results):
        cache.set("rust vs go concurrency", 5, search_results)

        entry = cache._load_metadata()[cache._generate_cache_key("rust vs go concurrency", 5)]
        assert entry["query"] == "rust vs go concurrency"
        assert entry["count"] == 5
        assert entry["results_count"] == 2
        assert datetime.fromisoformat(entry["cached_at"])

    def test_expired_entry_removed_on_get(self, cache, search_results):
        cache.set("stale query", 5, search_results)
        backdate(cache, "stale query", 5, hours=2)
        cache_filepath = cache._get_cache_filepath(
            cache._generate_cache_key("stale query", 5)
        )

        assert cache.get("stale query", 5) is None
        assert not cache_filepath.exists()
        assert cache._load_metadata() == {}

    def test_cleanup_expired(self, cache, search_results):
        for query in ["old one", "old two", "fresh"]:
            cache.set(query, 5, search_results)
        backdate(cache, "old one", 5, hours=3)
        backdate(cache, "old two", 5, hours=1.5)

        assert cache.cleanup_expired() == 2
        assert cache.get("fresh", 5) == search_results
        assert len(cache._load_metadata()) == 1

    def test_corrupted_metadata_treated_as_miss(self, cache, search_results):
        cache.set("query", 5, search_results)
        cache.metadata_file.write_text("not json")

        assert cache.get("query", 5) is None

        # Cache stays usable afterwards
        cache.set("query", 5, search_results)
        assert cache.get("query", 5) == search_results

    def test_missing_result_file(self, cache, search_results):
        cache.set("query", 5, search_results)
        cache._get_cache_filepath(cache._generate_cache_key("query", 5)).unlink()

        assert cache.get("query", 5) is None

    def test_invalid_timestamp_counts_as_expired(self, cache):
        assert cache._is_cache_expired("yesterday-ish") is True
        assert cache._is_cache_expired(datetime.now().isoformat()) is False

    def test_unicode_queries(self, cache, search_results):
        query = "並行処理 concurrency 🚀"
        cache.set(query, 5, search_results)

        assert cache.get(query, 5) == search_results

    def test_persistence_across_instances(self, tmp_path, search_results):
        SearchCache(cache_dir=str(tmp_path)).set("query", 5, search_results)

        assert SearchCache(cache_dir=str(tmp_path)).get("query", 5) == search_results
