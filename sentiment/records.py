"""
Record and token types shared by the sentiment pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd


@dataclass(frozen=True)
class TextRecord:
    """A unit of raw text plus the metadata it can be grouped by."""

    document_id: str
    text: str
    line_number: Optional[int] = None
    chapter: Optional[int] = None
    category: Optional[str] = None
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class Token:
    record: TextRecord
    word: str
    position: int


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a timestamp into an aware UTC datetime, or None when it is missing
    or malformed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = pd.Timestamp(value)
    else:
        raw = str(value).strip()
        if not raw or raw.lower() in {"nan", "nat", "none"}:
            return None
        parsed = pd.to_datetime(raw, utc=False, errors="coerce")
    if parsed is None or pd.isna(parsed):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.tz_localize("UTC")
    return parsed.tz_convert("UTC").to_pydatetime().astimezone(timezone.utc)
