"""
Sentiment lexicons: read-only word -> value tables and the token join.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

import pandas as pd

from .records import Token

logger = logging.getLogger("corpus_sentiment.lexicon")

LexiconValue = Union[str, float, int]

BUILTIN_LEXICONS = {
    "bing": "Hu & Liu opinion lexicon (positive/negative labels)",
    "vader": "VADER valence scores (numeric, -4..+4)",
}

_NLTK_RESOURCES = {
    "bing": ("corpora/opinion_lexicon", "opinion_lexicon"),
    "vader": ("sentiment/vader_lexicon.zip", "vader_lexicon"),
}

_WORD_ALIASES = ["word", "term", "token"]
_VALUE_ALIASES = ["sentiment", "polarity", "value", "score", "label"]

_POSITIVE_LABELS = {"positive", "pos", "+"}
_NEGATIVE_LABELS = {"negative", "neg", "-"}


def classify(value: Any) -> int:
    """
    Map a lexicon value to +1 (positive), -1 (negative) or 0 (neutral).

    Labels compare case-insensitively; numbers classify by sign. Zero, NaN
    and unrecognised labels are neutral and count towards neither side.
    """
    if isinstance(value, str):
        label = value.strip().lower()
        if label in _POSITIVE_LABELS:
            return 1
        if label in _NEGATIVE_LABELS:
            return -1
        try:
            value = float(label)
        except ValueError:
            return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or number == 0.0:
        return 0
    return 1 if number > 0 else -1


def _find_column(df: pd.DataFrame, aliases: list[str]) -> Optional[str]:
    lowered = {str(c).strip().lower(): c for c in df.columns}
    for candidate in aliases:
        if candidate in lowered:
            return lowered[candidate]
    return None


class Lexicon:
    """Immutable word -> value mapping with O(1) lookup."""

    def __init__(self, name: str, entries: Iterable[tuple[str, LexiconValue]]):
        self.name = name
        table: dict[str, LexiconValue] = {}
        conflicts = 0
        for word, value in entries:
            key = str(word).strip().lower()
            if not key:
                continue
            if key in table:
                if table[key] != value:
                    conflicts += 1
                continue
            table[key] = value
        if conflicts:
            logger.warning("Lexicon %s: kept first value for %d conflicting duplicate words", name, conflicts)
        self._table = MappingProxyType(table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, word: object) -> bool:
        return word in self._table

    def __repr__(self) -> str:
        return f"Lexicon(name={self.name!r}, words={len(self)})"

    def get(self, word: str, default: Any = None) -> Any:
        return self._table.get(word, default)

    @property
    def entries(self) -> Mapping[str, LexiconValue]:
        return self._table

    def polarity_counts(self) -> dict[str, int]:
        counts = {"positive": 0, "negative": 0, "neutral": 0}
        for value in self._table.values():
            side = classify(value)
            counts["positive" if side > 0 else "negative" if side < 0 else "neutral"] += 1
        return counts

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, LexiconValue], name: str = "custom") -> "Lexicon":
        return cls(name, mapping.items())

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        *,
        name: str = "custom",
        word_col: Optional[str] = None,
        value_col: Optional[str] = None,
    ) -> "Lexicon":
        word_col = word_col or _find_column(df, _WORD_ALIASES)
        value_col = value_col or _find_column(df, _VALUE_ALIASES)
        if word_col is None or word_col not in df.columns:
            raise ValueError("Missing required word column in lexicon table")
        if value_col is None or value_col not in df.columns:
            raise ValueError("Missing required value column in lexicon table")

        table = df[[word_col, value_col]].dropna()
        values = table[value_col]
        numeric = pd.to_numeric(values, errors="coerce")
        if numeric.notna().all():
            values = numeric.astype(float)
        else:
            values = values.astype(str).str.strip().str.lower()
        return cls(name, zip(table[word_col].astype(str), values.tolist()))

    @classmethod
    def from_csv(cls, path: Union[str, Path], *, name: Optional[str] = None) -> "Lexicon":
        path = Path(path).expanduser()
        df = pd.read_csv(path)
        return cls.from_frame(df, name=name or path.stem)

    @classmethod
    def from_nltk(
        cls,
        name: str,
        *,
        auto_download: bool = True,
        data_dir: Optional[Union[str, Path]] = None,
    ) -> "Lexicon":
        key = (name or "").strip().lower()
        if key not in BUILTIN_LEXICONS:
            raise ValueError(f"Unknown builtin lexicon '{name}'. Available: {sorted(BUILTIN_LEXICONS)}")

        import nltk

        if data_dir is not None:
            data_path = str(Path(data_dir).expanduser())
            if data_path not in nltk.data.path:
                nltk.data.path.insert(0, data_path)
        resource, package = _NLTK_RESOURCES[key]
        try:
            nltk.data.find(resource)
        except LookupError:
            if not auto_download:
                raise
            logger.info("Downloading NLTK resource %s", package)
            nltk.download(package, quiet=True, download_dir=str(data_dir) if data_dir else None)

        if key == "bing":
            from nltk.corpus import opinion_lexicon

            entries = [(w, "positive") for w in opinion_lexicon.positive()]
            entries += [(w, "negative") for w in opinion_lexicon.negative()]
            return cls("bing", entries)

        from nltk.sentiment.vader import SentimentIntensityAnalyzer

        sia = SentimentIntensityAnalyzer()
        return cls("vader", ((w, float(v)) for w, v in sia.lexicon.items()))


def load_lexicon(
    name_or_path: Union[str, Path],
    *,
    auto_download: bool = True,
    data_dir: Optional[Union[str, Path]] = None,
) -> Lexicon:
    """Resolve a builtin lexicon name or a CSV path to a Lexicon."""
    key = str(name_or_path).strip()
    if key.lower() in BUILTIN_LEXICONS:
        return Lexicon.from_nltk(key, auto_download=auto_download, data_dir=data_dir)
    path = Path(key).expanduser()
    if path.is_file():
        return Lexicon.from_csv(path)
    raise ValueError(f"Unknown lexicon '{name_or_path}': not a builtin name or an existing file")


def join_lexicon(tokens: Iterable[Token], lexicon: Lexicon) -> Iterator[tuple[Token, LexiconValue]]:
    """Inner join: tokens whose word is not in the lexicon are dropped."""
    for token in tokens:
        value = lexicon.get(token.word)
        if value is None:
            continue
        yield token, value
