from __future__ import annotations

from datetime import datetime, timezone

import pytest

from sentiment.grouping import (
    by_category,
    by_chapter,
    by_document,
    by_hour,
    by_line_window,
    group_values,
    is_record_level,
    key_function,
    key_names,
    record_keys,
)
from sentiment.lexicon import join_lexicon
from sentiment.records import TextRecord, Token
from sentiment.tokenizer import tokenize_records


def _token(**fields) -> Token:
    record = TextRecord(document_id=fields.pop("document_id", "doc"), text="", **fields)
    return Token(record=record, word="w", position=0)


def test_line_window_keys() -> None:
    key = by_line_window(80)
    assert key(_token(line_number=0)) == ("doc", 0)
    assert key(_token(line_number=79)) == ("doc", 0)
    assert key(_token(line_number=80)) == ("doc", 1)
    assert key(_token(line_number=None)) is None

    flat = by_line_window(80, per_document=False)
    assert flat(_token(line_number=161)) == 2
    assert key_names(flat) == ("window",)


@pytest.mark.parametrize("size", [0, -5])
def test_line_window_rejects_non_positive_sizes(size) -> None:
    with pytest.raises(ValueError, match="window_size"):
        by_line_window(size)


def test_category_and_chapter_keys() -> None:
    assert by_category()(_token(category="Politics")) == "Politics"
    assert by_category()(_token(category=None)) is None
    assert by_category()(_token(category="  ")) is None
    assert by_chapter()(_token(chapter=3)) == ("doc", 3)
    assert by_chapter()(_token(chapter=None)) is None
    assert by_document()(_token(document_id="emma")) == "emma"


def test_hour_key_converts_timezone_and_skips_undated() -> None:
    ts = datetime(2024, 3, 4, 14, 30, tzinfo=timezone.utc)
    assert by_hour()(_token(timestamp=ts)) == 14
    assert by_hour("America/New_York")(_token(timestamp=ts)) == 9
    assert by_hour()(_token(timestamp=None)) is None


def test_key_function_resolves_names() -> None:
    assert key_names(key_function("window", window_size=10)) == ("document_id", "window")
    assert key_names(key_function("hour", timezone="UTC")) == ("hour",)
    with pytest.raises(ValueError, match="Unknown grouping key"):
        key_function("weekday")


def test_group_values_includes_empty_keys(news_records, polarity_lexicon) -> None:
    key = by_document()
    pairs = join_lexicon(tokenize_records(news_records), polarity_lexicon)
    grouped = group_values(pairs, key, keys=record_keys(news_records, key))

    assert set(grouped) == {"a1", "a2", "a3", "a4", "a5"}
    assert grouped["a1"] == ["positive", "positive"]
    assert grouped["a5"] == []


def test_group_values_drops_tokens_without_a_key(news_records, polarity_lexicon) -> None:
    undated = TextRecord("a6", "a wonderful surprise", category="Arts", timestamp=None)
    records = news_records + [undated]
    key = by_hour()

    grouped = group_values(join_lexicon(tokenize_records(records), polarity_lexicon), key)

    assert set(grouped) == {9, 14}
    assert sum(len(v) for v in grouped.values()) == 8

    # The same record still counts when grouping by category.
    by_cat = group_values(join_lexicon(tokenize_records(records), polarity_lexicon), by_category())
    assert by_cat["Arts"] == ["positive"]


def test_record_keys_preserve_first_seen_order(novel_records) -> None:
    assert record_keys(novel_records, by_chapter()) == [("small_novel", 0), ("small_novel", 1), ("small_novel", 2)]


def test_only_builtin_keys_are_record_level() -> None:
    assert is_record_level(by_document())
    assert is_record_level(by_hour("UTC"))
    assert not is_record_level(lambda token: token.word[:1])


def test_hour_key_rejects_unknown_timezone() -> None:
    with pytest.raises(ValueError, match="Unknown timezone 'Mars/Olympus'"):
        by_hour("Mars/Olympus")
    with pytest.raises(ValueError, match="Unknown timezone"):
        key_function("hour", timezone="Not/AZone")
