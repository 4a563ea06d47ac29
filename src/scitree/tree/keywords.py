"""Keyword frequency summaries."""

from collections import Counter
from typing import Iterable, Sequence

from scitree.config import KEYWORD_TOP_K
from scitree.models import Article


def most_common(items: Iterable[str], k: int) -> list[str]:
    """Top-k items by descending frequency.

    Ties keep first-encountered order.
    """
    if k <= 0:
        return []
    return [item for item, _ in Counter(items).most_common(k)]


def band_keywords(articles: Sequence[Article], k: int = KEYWORD_TOP_K) -> list[str]:
    """Most frequent lower-cased keywords across a band's articles."""
    keywords = (
        keyword.lower()
        for article in articles
        if article.keywords
        for keyword in article.keywords
    )
    return most_common(keywords, k)
