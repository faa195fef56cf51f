"""
Deterministic word-level sentiment pipeline.

tokenize -> lexicon join -> group by key -> aggregate counts
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from .aggregate import aggregate_buckets, buckets_frame
from .grouping import KeyFunction, group_values, is_record_level, key_function, key_names, record_keys
from .lexicon import Lexicon, classify, join_lexicon
from .records import TextRecord, Token
from .tokenizer import tokenize_records

logger = logging.getLogger("corpus_sentiment.pipeline")

_POLARITY_NAMES = {1: "positive", -1: "negative", 0: "neutral"}


@dataclass
class SentimentPipelineConfig:
    group_by: str = "document"
    window_size: int = 80
    per_document: bool = True
    timezone: str = "UTC"
    include_empty_groups: bool = True
    stopwords: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_params(cls, params: Optional[dict[str, Any]] = None) -> "SentimentPipelineConfig":
        params = params or {}
        return cls(
            group_by=str(params.get("group_by", cls.group_by)),
            window_size=int(params.get("window_size", cls.window_size)),
            per_document=bool(params.get("per_document", cls.per_document)),
            timezone=str(params.get("timezone", cls.timezone)),
            include_empty_groups=bool(params.get("include_empty_groups", cls.include_empty_groups)),
            stopwords=frozenset(str(w).lower() for w in params.get("stopwords", ()) or ()),
        )

    @classmethod
    def from_settings(cls, config: Any = None) -> "SentimentPipelineConfig":
        """Build from the application ``Config`` (defaults to the global one)."""
        if config is None:
            from core.config import get_config

            config = get_config()
        settings = config.pipeline
        params = settings.model_dump()
        if settings.remove_stopwords:
            params["stopwords"] = load_stopwords(config.lexicon.nltk_data_dir, config.lexicon.auto_download)
        return cls.from_params(params)

    def key_function(self) -> KeyFunction:
        return key_function(
            self.group_by,
            window_size=self.window_size,
            per_document=self.per_document,
            timezone=self.timezone,
        )


def load_stopwords(data_dir: Any = None, auto_download: bool = True) -> frozenset[str]:
    """English stop words from the NLTK stopwords corpus."""
    import nltk

    if data_dir and str(data_dir) not in nltk.data.path:
        nltk.data.path.insert(0, str(data_dir))
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        if not auto_download:
            raise
        nltk.download("stopwords", quiet=True, download_dir=str(data_dir) if data_dir else None)
    from nltk.corpus import stopwords

    return frozenset(w.lower() for w in stopwords.words("english"))


class _CountingKey:
    """Wraps a key function and counts tokens it excludes from grouping."""

    def __init__(self, key_fn: KeyFunction):
        self.key_fn = key_fn
        self.excluded = 0

    def __call__(self, token: Token):
        key = self.key_fn(token)
        if key is None:
            self.excluded += 1
        return key


def score_records(
    records: Iterable[TextRecord],
    lexicon: Lexicon,
    *,
    key_fn: Optional[KeyFunction] = None,
    config: Optional[SentimentPipelineConfig] = None,
) -> tuple[pd.DataFrame, dict[str, Any]]:
    """
    Score records against ``lexicon`` and aggregate per group.

    Returns the bucket table and a small run report. Groups that exist in the
    records but have no lexicon matches are kept (``include_empty_groups``)
    with ``total_words == 0`` and a NaN percentage.
    """
    cfg = config or SentimentPipelineConfig()
    key_fn = key_fn or cfg.key_function()
    records = list(records)

    matched_count = 0
    token_count = 0

    def _count_tokens(tokens: Iterable[Token]):
        nonlocal token_count
        for token in tokens:
            token_count += 1
            yield token

    def _count_matches(pairs):
        nonlocal matched_count
        for pair in pairs:
            matched_count += 1
            yield pair

    counting_key = _CountingKey(key_fn)
    tokens = _count_tokens(tokenize_records(records, stopwords=set(cfg.stopwords)))
    pairs = _count_matches(join_lexicon(tokens, lexicon))
    universe = record_keys(records, key_fn) if cfg.include_empty_groups and is_record_level(key_fn) else None
    grouped = group_values(pairs, counting_key, keys=universe)

    buckets = aggregate_buckets(grouped)
    table = buckets_frame(buckets, key_names(key_fn))

    meta = {
        "lexicon": lexicon.name,
        "record_count": len(records),
        "token_count": token_count,
        "matched_count": matched_count,
        "excluded_from_grouping": counting_key.excluded,
        "group_count": len(buckets),
        "empty_group_count": int((table["total_words"] == 0).sum()) if not table.empty else 0,
    }
    if counting_key.excluded:
        logger.info(
            "%d matched tokens had no group key (%s) and were left out of grouping",
            counting_key.excluded,
            "/".join(key_names(key_fn)),
        )
    logger.debug("Scored %d records with lexicon %s: %s", len(records), lexicon.name, meta)
    return table, meta


def scored_tokens_frame(
    records: Iterable[TextRecord],
    lexicon: Lexicon,
    *,
    config: Optional[SentimentPipelineConfig] = None,
) -> pd.DataFrame:
    """One row per lexicon-matched token, with its record metadata."""
    cfg = config or SentimentPipelineConfig()
    columns = [
        "document_id",
        "line_number",
        "chapter",
        "category",
        "timestamp",
        "position",
        "word",
        "value",
        "polarity",
    ]
    rows: list[dict[str, Any]] = []
    for token, value in join_lexicon(tokenize_records(records, stopwords=set(cfg.stopwords)), lexicon):
        record = token.record
        rows.append(
            {
                "document_id": record.document_id,
                "line_number": record.line_number,
                "chapter": record.chapter,
                "category": record.category,
                "timestamp": record.timestamp,
                "position": token.position,
                "word": token.word,
                "value": value,
                "polarity": _POLARITY_NAMES[classify(value)],
            }
        )
    if not rows:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(rows, columns=columns)


def word_contributions(
    records: Iterable[TextRecord],
    lexicon: Lexicon,
    *,
    top_n: int = 10,
    config: Optional[SentimentPipelineConfig] = None,
) -> pd.DataFrame:
    """Most frequent matched words on each side of the lexicon."""
    cfg = config or SentimentPipelineConfig()
    counts: dict[str, Counter] = {"positive": Counter(), "negative": Counter()}
    for token, value in join_lexicon(tokenize_records(records, stopwords=set(cfg.stopwords)), lexicon):
        side = classify(value)
        if side == 0:
            continue
        counts[_POLARITY_NAMES[side]][token.word] += 1

    rows: list[dict[str, Any]] = []
    for polarity in ("positive", "negative"):
        ranked = sorted(counts[polarity].items(), key=lambda item: (-item[1], item[0]))
        for word, count in ranked[: max(0, int(top_n))]:
            rows.append({"word": word, "polarity": polarity, "count": int(count)})
    return pd.DataFrame(rows, columns=["word", "polarity", "count"])


def _sign_agreement(left: pd.DataFrame, right: pd.DataFrame, keys: list[str]) -> dict[str, Any]:
    merged = left.merge(right, on=keys, suffixes=("_a", "_b"))
    both = merged[(merged["total_words_a"] > 0) & (merged["total_words_b"] > 0)]
    if both.empty:
        return {"compared_groups": 0, "agreeing_groups": 0, "agreement_rate": np.nan}
    agree = int((np.sign(both["net_a"]) == np.sign(both["net_b"])).sum())
    return {
        "compared_groups": int(len(both)),
        "agreeing_groups": agree,
        "agreement_rate": round(agree / len(both), 4),
    }


def compare_lexicons(
    records: Iterable[TextRecord],
    lexicons: Sequence[Lexicon],
    *,
    config: Optional[SentimentPipelineConfig] = None,
) -> tuple[pd.DataFrame, dict[str, Any]]:
    """
    Run the same grouping under several lexicons.

    Absolute counts differ between lexicons; for two of them the meta report
    carries how often the sign of ``net`` agrees across groups.
    """
    if not lexicons:
        raise ValueError("compare_lexicons needs at least one lexicon")
    cfg = config or SentimentPipelineConfig()
    records = list(records)
    key_fn = cfg.key_function()
    keys = list(key_names(key_fn))

    tables: list[pd.DataFrame] = []
    meta: dict[str, Any] = {"runs": {}}
    for lexicon in lexicons:
        table, run_meta = score_records(records, lexicon, key_fn=key_fn, config=cfg)
        meta["runs"][lexicon.name] = run_meta
        tagged = table.copy()
        tagged.insert(0, "lexicon", lexicon.name)
        tables.append(tagged)

    if len(tables) == 2:
        meta["sign_agreement"] = _sign_agreement(
            tables[0].drop(columns="lexicon"),
            tables[1].drop(columns="lexicon"),
            keys,
        )

    out = pd.concat(tables, ignore_index=True)
    return out, meta
