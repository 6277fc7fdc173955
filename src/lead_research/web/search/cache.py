"""
Search Result Caching Module

File-based cache that keeps sub-agents from repeating identical searches.
"""

import hashlib
import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from lead_research.types import SearchResults

logger = logging.getLogger("research")


class SearchCache:
    """
    Simple file-based cache for search results with a time-to-live
    """

    METADATA_FILENAME = "cache_metadata.json"

    def __init__(self, cache_dir: str = "cache", cache_ttl_hours: float = 24):
        """
        Initialize the search cache

        Args:
            cache_dir: Directory to store cache files
            cache_ttl_hours: How many hours to keep cached results (default: 24)
        """
        self.cache_dir = Path(cache_dir)
        self.cache_ttl = timedelta(hours=cache_ttl_hours)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self.metadata_file = self.cache_dir / self.METADATA_FILENAME
        if not self.metadata_file.exists():
            self._save_metadata({})

    def _generate_cache_key(self, query: str, count: int) -> str:
        key_data = f"{query.lower().strip()}_{count}"
        return hashlib.md5(key_data.encode()).hexdigest()

    def _get_cache_filepath(self, cache_key: str) -> Path:
        return self.cache_dir / f"{cache_key}.json"

    def _load_metadata(self) -> dict[str, Any]:
        try:
            with self.metadata_file.open(encoding="utf-8") as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            return {}

    def _save_metadata(self, metadata: dict[str, Any]) -> None:
        try:
            with self.metadata_file.open("w", encoding="utf-8") as f:
                json.dump(metadata, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.warning(f"Failed to save cache metadata: {e}")

    def _is_cache_expired(self, cached_time: str) -> bool:
        try:
            cached_datetime = datetime.fromisoformat(cached_time)
        except (ValueError, TypeError):
            return True
        return datetime.now() - cached_datetime > self.cache_ttl

    def get(self, query: str, count: int = 10) -> SearchResults | None:
        """
        Get cached search results if available and not expired

        Args:
            query: Search query
            count: Number of results requested

        Returns:
            Cached search results or None if not found/expired
        """
        cache_key = self._generate_cache_key(query, count)
        cache_filepath = self._get_cache_filepath(cache_key)
        if not cache_filepath.exists():
            return None

        metadata = self._load_metadata()
        if cache_key not in metadata:
            return None

        if self._is_cache_expired(metadata[cache_key]["cached_at"]):
            self._remove_entry(cache_key)
            return None

        try:
            with cache_filepath.open(encoding="utf-8") as f:
                cached_results = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load cached results for {query}: {e}")
            return None

        logger.info(f"🔄 Using cached results for: {query}")
        return cached_results

    def set(self, query: str, count: int, results: SearchResults) -> None:
        """
        Cache search results

        Args:
            query: Search query
            count: Number of results requested
            results: Search results to cache
        """
        cache_key = self._generate_cache_key(query, count)
        try:
            with self._get_cache_filepath(cache_key).open("w", encoding="utf-8") as f:
                json.dump(results, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to cache results for {query}: {e}")
            return

        metadata = self._load_metadata()
        metadata[cache_key] = {
            "query": query,
            "count": count,
            "cached_at": datetime.now().isoformat(),
            "results_count": results.get("total_results", 0),
        }
        self._save_metadata(metadata)

    def _remove_entry(self, cache_key: str) -> None:
        self._get_cache_filepath(cache_key).unlink(missing_ok=True)

        metadata = self._load_metadata()
        if metadata.pop(cache_key, None) is not None:
            self._save_metadata(metadata)

    def cleanup_expired(self) -> int:
        """Remove all expired cache entries. Returns the number removed."""
        expired_keys = [
            cache_key
            for cache_key, entry in self._load_metadata().items()
            if self._is_cache_expired(entry.get("cached_at", ""))
        ]
        for cache_key in expired_keys:
            self._remove_entry(cache_key)

        if expired_keys:
            logger.info(f"🧹 Cleaned up {len(expired_keys)} expired cache entries")
        return len(expired_keys)
