"""
Canonical text-record schema utilities.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from sentiment.records import TextRecord, parse_timestamp

logger = logging.getLogger("corpus_sentiment.data")


CANONICAL_RECORD_COLUMNS = [
    "document_id",
    "line_number",
    "chapter",
    "category",
    "timestamp",
    "text",
]


_COLUMN_ALIASES = {
    "document_id": ["document_id", "doc_id", "document", "book", "title", "_id", "id", "web_url", "url"],
    "text": ["text", "lead_paragraph", "content", "body", "abstract", "snippet"],
    "line_number": ["line_number", "linenumber", "line", "line_no"],
    "chapter": ["chapter", "chapter_number"],
    "category": ["category", "section", "section_name", "news_desk", "label"],
    "timestamp": ["timestamp", "pub_date", "published_at", "published", "date", "datetime", "time"],
}


def _find_column(df: pd.DataFrame, canonical_name: str) -> Optional[str]:
    for candidate in _COLUMN_ALIASES.get(canonical_name, []):
        if candidate in df.columns:
            return candidate
    return None


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    text = str(value).strip()
    return text or None


def canonicalize_records_frame(raw_df: pd.DataFrame) -> pd.DataFrame:
    """
    Convert a vendor-specific text table into the canonical record schema.

    Only a text column is required. Missing document ids fall back to the row
    position; unparseable timestamps become NaT.
    """
    if raw_df is None or raw_df.empty:
        return pd.DataFrame(columns=CANONICAL_RECORD_COLUMNS)

    df = raw_df.copy()
    text_col = _find_column(df, "text")
    if text_col is None:
        raise ValueError("Missing required column 'text' in record data")

    out = pd.DataFrame(index=df.index)
    doc_col = _find_column(df, "document_id")
    if doc_col is not None:
        out["document_id"] = df[doc_col].astype(str)
    else:
        out["document_id"] = [str(i) for i in range(1, len(df) + 1)]

    line_col = _find_column(df, "line_number")
    out["line_number"] = pd.to_numeric(df[line_col], errors="coerce").astype("Int64") if line_col else pd.NA

    chapter_col = _find_column(df, "chapter")
    out["chapter"] = pd.to_numeric(df[chapter_col], errors="coerce").astype("Int64") if chapter_col else pd.NA

    category_col = _find_column(df, "category")
    out["category"] = df[category_col] if category_col else np.nan

    ts_col = _find_column(df, "timestamp")
    if ts_col is not None:
        out["timestamp"] = df[ts_col].apply(parse_timestamp)
        bad = int((out["timestamp"].isna() & df[ts_col].notna()).sum())
        if bad:
            logger.warning("%d records have unparseable timestamps; they are excluded from time grouping", bad)
    else:
        out["timestamp"] = None

    out["text"] = df[text_col].fillna("").astype(str)
    return out[CANONICAL_RECORD_COLUMNS].reset_index(drop=True)


def records_from_frame(raw_df: pd.DataFrame) -> list[TextRecord]:
    canonical = canonicalize_records_frame(raw_df)
    records: list[TextRecord] = []
    for row in canonical.itertuples(index=False):
        ts = row.timestamp
        records.append(
            TextRecord(
                document_id=str(row.document_id),
                text=str(row.text),
                line_number=_optional_int(row.line_number),
                chapter=_optional_int(row.chapter),
                category=_optional_str(row.category),
                timestamp=parse_timestamp(ts) if ts is not None else None,
            )
        )
    return records


def records_frame(records: Iterable[TextRecord]) -> pd.DataFrame:
    rows = [
        {
            "document_id": r.document_id,
            "line_number": r.line_number,
            "chapter": r.chapter,
            "category": r.category,
            "timestamp": r.timestamp,
            "text": r.text,
        }
        for r in records
    ]
    if not rows:
        return pd.DataFrame(columns=CANONICAL_RECORD_COLUMNS)
    return pd.DataFrame(rows, columns=CANONICAL_RECORD_COLUMNS)
