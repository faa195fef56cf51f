"""
Line records for plain-text novels.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from sentiment.records import TextRecord

_GUTENBERG_START = re.compile(r"\*\*\*\s*START OF (?:THE|THIS) PROJECT GUTENBERG EBOOK[^\n]*\n", re.IGNORECASE)
_GUTENBERG_END = re.compile(r"\*\*\*\s*END OF (?:THE|THIS) PROJECT GUTENBERG EBOOK", re.IGNORECASE)
_CHAPTER_HEADING = re.compile(r"^\s*chapter\s+(?:\d+|[ivxlc]+)\b", re.IGNORECASE)


def strip_gutenberg_boilerplate(text: str) -> str:
    start = _GUTENBERG_START.search(text)
    end = _GUTENBERG_END.search(text)
    if start and end and start.end() <= end.start():
        return text[start.end() : end.start()]
    if start:
        return text[start.end() :]
    return text


def records_from_novel(text: str, document_id: str, *, strip_boilerplate: bool = True) -> list[TextRecord]:
    """
    One record per line, 1-based line numbers.

    Chapter numbers count ``CHAPTER <n>`` headings seen so far, so front
    matter before the first heading is chapter 0.
    """
    body = strip_gutenberg_boilerplate(text or "") if strip_boilerplate else (text or "")
    records: list[TextRecord] = []
    chapter = 0
    for line_number, line in enumerate(body.splitlines(), start=1):
        if _CHAPTER_HEADING.match(line):
            chapter += 1
        records.append(
            TextRecord(
                document_id=document_id,
                text=line,
                line_number=line_number,
                chapter=chapter,
            )
        )
    return records


def records_from_novels(novels: Mapping[str, str], **kwargs) -> list[TextRecord]:
    out: list[TextRecord] = []
    for document_id, text in novels.items():
        out.extend(records_from_novel(text, document_id, **kwargs))
    return out


def chapter_titles(records: Iterable[TextRecord]) -> dict[tuple[str, int], str]:
    """The heading line of every chapter, keyed by (document_id, chapter)."""
    titles: dict[tuple[str, int], str] = {}
    for record in records:
        if record.chapter and _CHAPTER_HEADING.match(record.text):
            titles.setdefault((record.document_id, record.chapter), record.text.strip())
    return titles
