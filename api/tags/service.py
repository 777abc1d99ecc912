"""
Favorite-tag aggregation over the caller's bookmarks.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from bookmarks import repository as bookmarks_repository
from core.store import StoreClient

TAG_DELIMITER = "|"
TOP_TAGS_LIMIT = 5


def split_tags(raw: str) -> list[str]:
    return [tag.strip() for tag in raw.split(TAG_DELIMITER) if tag.strip()]


def count_tags(tag_strings: Iterable[str], *, limit: int = TOP_TAGS_LIMIT) -> list[dict]:
    """
    Most frequent tags, highest count first.

    Ties keep the order in which tags were first seen; callers should not
    rely on that ordering.
    """
    counts: Counter[str] = Counter()
    for raw in tag_strings:
        counts.update(split_tags(raw))
    # Counter preserves insertion order and sorted() is stable.
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [{"tag": tag, "count": count} for tag, count in ranked[:limit]]


async def top_tags(store: StoreClient) -> list[dict]:
    return count_tags(await bookmarks_repository.list_tag_strings(store))
