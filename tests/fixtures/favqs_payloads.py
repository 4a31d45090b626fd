"""Canned FavQs API payloads shared by the test suite."""

from __future__ import annotations

API_ROOT = "https://favqs.com/api"
API_KEY = "test-api-key-0123456789"
USER_TOKEN = "user-token-abcdef"


def quote_payload(i: int, **extra) -> dict:
    data = {
        "id": i,
        "author": f"Author {i}",
        "body": f"Body {i}",
        "tags": ["science"],
        "url": f"https://favqs.com/quotes/author/{i}",
        "favorites_count": i,
        "upvotes_count": 0,
        "downvotes_count": 0,
        "dialogue": False,
        "favorite": False,
    }
    data.update(extra)
    return data


def page_payload(count: int, *, page: int = 1, last_page: bool = True) -> dict:
    return {
        "page": page,
        "last_page": last_page,
        "quotes": [quote_payload(i) for i in range(count)],
    }
