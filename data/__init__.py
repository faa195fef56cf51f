"""
Record construction for the sentiment pipeline.

This package provides:
- Canonical text-record schema with column aliases
- Line records for plain-text novels (line and chapter numbers)
- Records for article-search results (section and publication time)
"""

from .schema import (
    CANONICAL_RECORD_COLUMNS,
    canonicalize_records_frame,
    records_frame,
    records_from_frame,
)
from .literature import chapter_titles, records_from_novel, records_from_novels, strip_gutenberg_boilerplate
from .news import records_from_articles

__all__ = [
    "CANONICAL_RECORD_COLUMNS",
    "canonicalize_records_frame",
    "records_from_frame",
    "records_frame",
    "records_from_novel",
    "records_from_novels",
    "strip_gutenberg_boilerplate",
    "chapter_titles",
    "records_from_articles",
]
