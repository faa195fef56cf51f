"""
Grouping key functions and the windowing step of the pipeline.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Hashable, Iterable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .records import TextRecord, Token

KeyFunction = Callable[[Token], Optional[Hashable]]

GROUP_BY_CHOICES = ("document", "window", "chapter", "category", "hour")


def _describe(key_fn: KeyFunction, names: tuple[str, ...]) -> None:
    # Builtin keys depend only on the record, never on the word.
    key_fn.key_names = names  # type: ignore[attr-defined]
    key_fn.record_level = True  # type: ignore[attr-defined]


def by_document() -> KeyFunction:
    def key(token: Token) -> Optional[Hashable]:
        return token.record.document_id

    _describe(key, ("document_id",))
    return key


def by_line_window(window_size: int = 80, *, per_document: bool = True) -> KeyFunction:
    """Fixed line-count windows: ``line_number // window_size``."""
    size = int(window_size)
    if size <= 0:
        raise ValueError(f"window_size must be a positive integer, got {window_size!r}")

    def key(token: Token) -> Optional[Hashable]:
        line = token.record.line_number
        if line is None:
            return None
        window = int(line) // size
        if per_document:
            return (token.record.document_id, window)
        return window

    _describe(key, ("document_id", "window") if per_document else ("window",))
    return key


def by_chapter() -> KeyFunction:
    def key(token: Token) -> Optional[Hashable]:
        if token.record.chapter is None:
            return None
        return (token.record.document_id, int(token.record.chapter))

    _describe(key, ("document_id", "chapter"))
    return key


def by_category() -> KeyFunction:
    def key(token: Token) -> Optional[Hashable]:
        category = token.record.category
        if category is None or not str(category).strip():
            return None
        return str(category)

    _describe(key, ("category",))
    return key


def by_hour(tz: str = "UTC") -> KeyFunction:
    """Hour of day of the record timestamp in ``tz``; undated records are excluded."""
    try:
        zone = ZoneInfo(tz)
    except ZoneInfoNotFoundError as exc:
        raise ValueError(f"Unknown timezone {tz!r}") from exc

    def key(token: Token) -> Optional[Hashable]:
        ts = token.record.timestamp
        if ts is None:
            return None
        return ts.astimezone(zone).hour

    _describe(key, ("hour",))
    return key


def key_function(name: str, **params: Any) -> KeyFunction:
    choice = (name or "").strip().lower()
    if choice == "document":
        return by_document()
    if choice == "window":
        return by_line_window(
            params.get("window_size", 80),
            per_document=bool(params.get("per_document", True)),
        )
    if choice == "chapter":
        return by_chapter()
    if choice == "category":
        return by_category()
    if choice == "hour":
        return by_hour(str(params.get("timezone") or "UTC"))
    raise ValueError(f"Unknown grouping key '{name}'. Choose one of {', '.join(GROUP_BY_CHOICES)}")


def key_names(key_fn: KeyFunction) -> tuple[str, ...]:
    return tuple(getattr(key_fn, "key_names", ("key",)))


def is_record_level(key_fn: KeyFunction) -> bool:
    return bool(getattr(key_fn, "record_level", False))


def record_keys(records: Iterable[TextRecord], key_fn: KeyFunction) -> list[Hashable]:
    """
    Keys the records map to, whether or not any of their words match a lexicon.

    Only meaningful for record-level key functions.
    """
    seen: dict[Hashable, None] = {}
    for record in records:
        key = key_fn(Token(record=record, word="", position=0))
        if key is not None:
            seen.setdefault(key, None)
    return list(seen)


def group_values(
    pairs: Iterable[tuple[Token, Any]],
    key_fn: KeyFunction,
    *,
    keys: Optional[Iterable[Hashable]] = None,
) -> dict[Hashable, list[Any]]:
    """
    Bucket matched (token, value) pairs by ``key_fn``.

    Pairs whose key is None are left out. Every key in ``keys`` is present in
    the result even if no pair lands in it.
    """
    grouped: dict[Hashable, list[Any]] = defaultdict(list)
    for key in keys or ():
        grouped.setdefault(key, [])
    for token, value in pairs:
        key = key_fn(token)
        if key is None:
            continue
        grouped[key].append(value)
    return dict(grouped)
