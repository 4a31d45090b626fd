"""Immutable records decoded from FavQs API payloads."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping, Tuple


class PayloadError(ValueError):
    """Raised when a payload does not have the expected JSON shape."""


def _expect_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise PayloadError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def _get(payload: Mapping[str, Any], key: str, kind: type | tuple[type, ...], default: Any) -> Any:
    value = payload.get(key)
    if value is None:
        return default
    # bool is an int subclass; keep counters and flags apart
    if kind is int and isinstance(value, bool):
        raise PayloadError(f"field {key!r} must be int, got bool")
    if not isinstance(value, kind):
        name = kind.__name__ if isinstance(kind, type) else "/".join(k.__name__ for k in kind)
        raise PayloadError(f"field {key!r} must be {name}, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True)
class Quote:
    id: int = 0
    author: str = ""
    body: str = ""
    url: str = ""
    author_permalink: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    favorites_count: int = 0
    upvotes_count: int = 0
    downvotes_count: int = 0
    favorite: bool = False
    dialogue: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "Quote":
        data = _expect_mapping(payload, "quote")
        tags = _get(data, "tags", list, [])
        if not all(isinstance(tag, str) for tag in tags):
            raise PayloadError("field 'tags' must be a list of strings")
        return cls(
            id=_get(data, "id", int, 0),
            author=_get(data, "author", str, ""),
            body=_get(data, "body", str, ""),
            url=_get(data, "url", str, ""),
            author_permalink=_get(data, "author_permalink", str, ""),
            tags=tuple(tags),
            favorites_count=_get(data, "favorites_count", int, 0),
            upvotes_count=_get(data, "upvotes_count", int, 0),
            downvotes_count=_get(data, "downvotes_count", int, 0),
            favorite=_get(data, "favorite", bool, False),
            dialogue=_get(data, "dialogue", bool, False),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True, slots=True)
class QuoteOfDay:
    """Response of ``GET /qotd``."""

    qotd_date: str
    quote: Quote

    @classmethod
    def from_payload(cls, payload: Any) -> "QuoteOfDay":
        data = _expect_mapping(payload, "quote of the day")
        return cls(
            qotd_date=_get(data, "qotd_date", str, ""),
            quote=Quote.from_payload(data.get("quote") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"qotd_date": self.qotd_date, "quote": self.quote.to_dict()}


@dataclass(frozen=True, slots=True)
class QuotePage:
    """One page of ``GET /quotes`` results."""

    page: int
    last_page: bool
    quotes: Tuple[Quote, ...]

    @classmethod
    def from_payload(cls, payload: Any) -> "QuotePage":
        data = _expect_mapping(payload, "quote page")
        items = _get(data, "quotes", list, [])
        return cls(
            page=_get(data, "page", int, 0),
            last_page=_get(data, "last_page", bool, False),
            quotes=tuple(Quote.from_payload(item) for item in items),
        )

    def __len__(self) -> int:
        return len(self.quotes)


__all__ = ["PayloadError", "Quote", "QuoteOfDay", "QuotePage"]
