"""
Per-bucket positive/negative counts and derived net/percentage sentiment.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Hashable, Iterable, Mapping

import numpy as np
import pandas as pd

from .lexicon import classify

BUCKET_COLUMNS = ["negative_count", "positive_count", "total_words", "net", "percentage"]


@dataclass(frozen=True)
class Bucket:
    key: Hashable
    negative_count: int
    positive_count: int
    total_words: int
    net: int
    percentage: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def net_percentage(net: int, total: int) -> float:
    """
    ``round(net / total * 100, 2)``; NaN for an empty bucket instead of a
    division error.
    """
    if total == 0:
        return float("nan")
    return round(net / total * 100, 2)


def aggregate_group(key: Hashable, values: Iterable[Any]) -> Bucket:
    positive = 0
    negative = 0
    for value in values:
        side = classify(value)
        if side > 0:
            positive += 1
        elif side < 0:
            negative += 1
    total = positive + negative
    net = positive - negative
    return Bucket(
        key=key,
        negative_count=negative,
        positive_count=positive,
        total_words=total,
        net=net,
        percentage=net_percentage(net, total),
    )


def _sort_key(key: Hashable) -> tuple:
    if isinstance(key, tuple):
        return tuple(_sort_key(k) for k in key)
    if isinstance(key, bool) or key is None:
        return (2, str(key))
    if isinstance(key, (int, float, np.integer, np.floating)):
        return (0, float(key))
    return (1, str(key))


def aggregate_buckets(grouped: Mapping[Hashable, Iterable[Any]]) -> list[Bucket]:
    """Aggregate every group, in a deterministic key order."""
    return [aggregate_group(key, grouped[key]) for key in sorted(grouped, key=_sort_key)]


def buckets_frame(buckets: Iterable[Bucket], key_names: tuple[str, ...] = ("key",)) -> pd.DataFrame:
    """
    Tabulate buckets. Tuple keys are spread over ``key_names``; a single name
    holds the key as is.
    """
    rows: list[dict[str, Any]] = []
    for bucket in buckets:
        row: dict[str, Any] = {}
        if len(key_names) > 1 and isinstance(bucket.key, tuple):
            row.update(zip(key_names, bucket.key))
        else:
            row[key_names[0]] = bucket.key
        row.update(
            negative_count=bucket.negative_count,
            positive_count=bucket.positive_count,
            total_words=bucket.total_words,
            net=bucket.net,
            percentage=bucket.percentage,
        )
        rows.append(row)

    columns = list(key_names) + BUCKET_COLUMNS
    if not rows:
        return pd.DataFrame(columns=columns)
    out = pd.DataFrame(rows, columns=columns)
    for col in ["negative_count", "positive_count", "total_words", "net"]:
        out[col] = out[col].astype(int)
    out["percentage"] = out["percentage"].astype(float)
    return out
