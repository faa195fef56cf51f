"""
Word-level lexicon sentiment scoring.
"""

from .aggregate import Bucket, aggregate_buckets, aggregate_group, buckets_frame, net_percentage
from .grouping import (
    by_category,
    by_chapter,
    by_document,
    by_hour,
    by_line_window,
    group_values,
    is_record_level,
    key_function,
    record_keys,
)
from .lexicon import BUILTIN_LEXICONS, Lexicon, classify, join_lexicon, load_lexicon
from .pipeline import (
    SentimentPipelineConfig,
    compare_lexicons,
    score_records,
    scored_tokens_frame,
    word_contributions,
)
from .records import TextRecord, Token, parse_timestamp
from .tokenizer import tokenize_records, tokenize_text

__all__ = [
    "TextRecord",
    "Token",
    "parse_timestamp",
    "tokenize_text",
    "tokenize_records",
    "Lexicon",
    "BUILTIN_LEXICONS",
    "classify",
    "join_lexicon",
    "load_lexicon",
    "by_document",
    "by_line_window",
    "by_chapter",
    "by_category",
    "by_hour",
    "key_function",
    "group_values",
    "record_keys",
    "is_record_level",
    "Bucket",
    "aggregate_group",
    "aggregate_buckets",
    "buckets_frame",
    "net_percentage",
    "SentimentPipelineConfig",
    "score_records",
    "scored_tokens_frame",
    "word_contributions",
    "compare_lexicons",
]
