"""
Corpus Sentiment - word-level lexicon scoring for text corpora

Scores a literature corpus (novels split into lines and chapters) and a news
corpus (lead paragraphs with sections and publication times):
- Tokenize records into lower-cased words
- Join words against a positive/negative lexicon
- Group by line window, chapter, document, category or hour of day
- Aggregate positive/negative counts into net and percentage sentiment
"""

__version__ = "0.1.0"
__author__ = "Corpus Sentiment"

from core.config import Config, get_config
from sentiment import Lexicon, SentimentPipelineConfig, TextRecord, score_records

__all__ = [
    "Config",
    "get_config",
    "Lexicon",
    "SentimentPipelineConfig",
    "TextRecord",
    "score_records",
]
