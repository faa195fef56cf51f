"""
Word tokenizer for text records.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, Iterator, Optional

from .records import TextRecord, Token


# Letters and digits in any script, joined by in-word apostrophes.
_WORD_RE = re.compile(r"[^\W_]+(?:'[^\W_]+)*")

# Typographic apostrophes and primes found in news leads and Gutenberg texts.
_APOSTROPHES = str.maketrans({"’": "'", "‘": "'", "ʼ": "'", "′": "'"})


def tokenize_text(text: str) -> list[str]:
    text = unicodedata.normalize("NFC", text or "").translate(_APOSTROPHES).lower()
    return _WORD_RE.findall(text)


def tokenize_records(
    records: Iterable[TextRecord],
    *,
    stopwords: Optional[set[str]] = None,
) -> Iterator[Token]:
    """
    Lazily yield one Token per word of each record.

    Positions are word offsets in the record text; stop words are skipped
    without shifting the positions of the words that follow them.
    """
    for record in records:
        for position, word in enumerate(tokenize_text(record.text)):
            if stopwords and word in stopwords:
                continue
            yield Token(record=record, word=word, position=position)
