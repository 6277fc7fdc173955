"""
Research processing components.

Citation formatting and URL handling for synthesized reports.
"""

from .citation_processor import CitationProcessor, CitationResult

__all__ = [
    "CitationProcessor",
    "CitationResult",
]
