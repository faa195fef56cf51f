"""
Records for news articles already fetched from an article-search API.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from sentiment.records import TextRecord, parse_timestamp

logger = logging.getLogger("corpus_sentiment.data.news")


def _article_id(item: dict[str, Any], fallback: int) -> str:
    for key in ("_id", "uri", "web_url", "url", "id"):
        value = str(item.get(key) or "").strip()
        if value:
            return value
    return f"article-{fallback}"


def _article_text(item: dict[str, Any]) -> str:
    for key in ("lead_paragraph", "abstract", "snippet"):
        value = str(item.get(key) or "").strip()
        if value:
            return value
    return ""


def records_from_articles(articles: Iterable[Any]) -> list[TextRecord]:
    """
    Convert article dicts (``lead_paragraph``, ``section_name``, ``pub_date``)
    to records. The lead paragraph falls back to the abstract, then the
    snippet. A malformed ``pub_date`` leaves the record undated.
    """
    records: list[TextRecord] = []
    undated = 0
    for i, item in enumerate(articles, start=1):
        if not isinstance(item, dict):
            continue
        raw_ts = item.get("pub_date") or item.get("published_at")
        timestamp = parse_timestamp(raw_ts)
        if timestamp is None:
            undated += 1
        section = str(item.get("section_name") or item.get("section") or "").strip()
        records.append(
            TextRecord(
                document_id=_article_id(item, i),
                text=_article_text(item),
                category=section or None,
                timestamp=timestamp,
            )
        )
    if undated:
        logger.warning("%d of %d articles have no usable pub_date", undated, len(records))
    return records
