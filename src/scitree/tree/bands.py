"""Presentation of the root/trunk/leaf bands."""

from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from scitree.models import Article, ArticleBand
from scitree.tree.keywords import band_keywords
from scitree.utils.hashing import encode_label

BAND_INFO: dict[ArticleBand, tuple[str, str]] = {
    ArticleBand.ROOT: (
        "Root",
        "Here you should find seminal articles from the original articles of "
        "your topic of interest.",
    ),
    ArticleBand.TRUNK: (
        "Trunk",
        "Here you should find articles where your topic of interest got a "
        "structure, these should be the first authors to discover the "
        "applicability of your topic of interest.",
    ),
    ArticleBand.LEAF: (
        "Leaves",
        "Here you should find recent articles and reviews that should "
        "condense very well your topics.",
    ),
}


@dataclass
class StarredArticle:
    article: Article
    label_key: str
    starred: bool


@dataclass
class BandView:
    """One band ready for display."""

    band: ArticleBand
    title: str
    info: str
    keywords: list[str]
    articles: list[StarredArticle] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.articles)


def order_band(articles: Sequence[Article], stars: Mapping[str, bool]) -> list[StarredArticle]:
    """Starred articles first; classification order is kept otherwise."""
    entries = []
    for article in articles:
        key = encode_label(article.label)
        entries.append(StarredArticle(article, key, bool(stars.get(key, False))))
    return sorted(entries, key=lambda entry: entry.starred, reverse=True)


def toggle_show(current: Optional[ArticleBand], band: ArticleBand) -> Optional[ArticleBand]:
    """Focus a single band, or show all again when it is already focused."""
    return None if current == band else band


def render_tree(
    sections: Mapping[ArticleBand | str, Sequence[Article]],
    stars: Mapping[str, bool],
    show: Optional[ArticleBand] = None,
) -> list[BandView]:
    """Build the band views in root, trunk, leaf order.

    Args:
        sections: Articles per band from the classification step
        stars: Star map keyed by encoded label
        show: Only render this band; all bands when None
    """
    views = []
    for band, (title, info) in BAND_INFO.items():
        if show is not None and band != show:
            continue
        articles = sections.get(band, sections.get(band.value, []))
        views.append(
            BandView(
                band=band,
                title=title,
                info=info,
                keywords=band_keywords(articles),
                articles=order_band(articles, stars),
            )
        )
    return views


def load_sections(data: Mapping[str, Sequence[dict]]) -> dict[ArticleBand, list[Article]]:
    """Parse a {band: [article dict]} mapping as produced upstream."""
    return {
        band: [Article.from_dict(item) for item in data.get(band.value, [])]
        for band in ArticleBand
    }
