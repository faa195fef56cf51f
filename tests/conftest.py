from __future__ import annotations

from datetime import datetime, timezone

import pytest

from data.literature import records_from_novel
from sentiment.lexicon import Lexicon
from sentiment.records import TextRecord


NOVEL_TEXT = """The Project Gutenberg eBook of A Small Novel
*** START OF THE PROJECT GUTENBERG EBOOK A SMALL NOVEL ***
A Small Novel

CHAPTER I
It was a happy morning and she was glad.
Her friends were kind and the garden was lovely.

CHAPTER II
Then came the terrible storm.
The house was cold and she was afraid and miserable.
*** END OF THE PROJECT GUTENBERG EBOOK A SMALL NOVEL ***
This trailer is not part of the book.
"""


def make_polarity_lexicon() -> Lexicon:
    return Lexicon.from_mapping(
        {
            "love": "positive",
            "wonderful": "positive",
            "happy": "positive",
            "glad": "positive",
            "kind": "positive",
            "lovely": "positive",
            "hate": "negative",
            "terrible": "negative",
            "cold": "negative",
            "afraid": "negative",
            "miserable": "negative",
            "storm": "negative",
        },
        name="polarity",
    )


def make_numeric_lexicon() -> Lexicon:
    return Lexicon.from_mapping(
        {
            "love": 3.0,
            "wonderful": 4.0,
            "happy": 3.0,
            "glad": 2.0,
            "kind": 2.0,
            "lovely": 3.0,
            "hate": -3.0,
            "terrible": -3.0,
            "cold": -1.0,
            "afraid": -2.0,
            "miserable": -3.0,
            "morning": 0.0,
        },
        name="numeric",
    )


def make_news_records() -> list[TextRecord]:
    def ts(hour: int) -> datetime:
        return datetime(2024, 3, 4, hour, 15, tzinfo=timezone.utc)

    return [
        TextRecord("a1", "Markets love the wonderful rally", category="Business", timestamp=ts(9)),
        TextRecord("a2", "Voters hate the terrible gridlock", category="Politics", timestamp=ts(9)),
        TextRecord("a3", "A happy ending for the kind team", category="Sports", timestamp=ts(14)),
        TextRecord("a4", "Officials were afraid of a cold winter", category="Politics", timestamp=ts(14)),
        TextRecord("a5", "The committee met on Tuesday", category="Business", timestamp=None),
    ]


@pytest.fixture
def polarity_lexicon() -> Lexicon:
    return make_polarity_lexicon()


@pytest.fixture
def numeric_lexicon() -> Lexicon:
    return make_numeric_lexicon()


@pytest.fixture
def novel_records() -> list[TextRecord]:
    return records_from_novel(NOVEL_TEXT, "small_novel")


@pytest.fixture
def news_records() -> list[TextRecord]:
    return make_news_records()


@pytest.fixture
def novel_text() -> str:
    return NOVEL_TEXT
