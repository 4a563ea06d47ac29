"""Tests for keyword summaries and band ordering."""

from scitree.models import Article, ArticleBand
from scitree.tree import band_keywords, most_common, order_band, render_tree, toggle_show
from scitree.tree.bands import load_sections
from scitree.utils.hashing import decode_label, encode_label


def test_keywords_lowercased_and_ranked():
    articles = [Article("one", ("A", "a")), Article("two", ("B",))]
    assert band_keywords(articles, k=2) == ["a", "b"]


def test_keywords_ties_keep_first_seen():
    assert most_common(["z", "y", "x", "y", "z"], 3) == ["z", "y", "x"]


def test_keywords_default_top_five():
    articles = [Article("a", tuple("abcdefg"))]
    assert band_keywords(articles) == ["a", "b", "c", "d", "e"]


def test_keywords_empty_and_missing():
    assert band_keywords([]) == []
    assert band_keywords([Article("a"), Article("b", ())]) == []


def test_encode_label():
    assert encode_label("x") == "eA=="
    assert decode_label(encode_label("Smith, J. (2020) Trées")) == "Smith, J. (2020) Trées"


def test_order_band_starred_first_and_stable():
    articles = [Article(label) for label in ["a", "b", "c", "d"]]
    stars = {encode_label("c"): True, encode_label("a"): False, encode_label("d"): True}
    ordered = order_band(articles, stars)
    assert [entry.article.label for entry in ordered] == ["c", "d", "a", "b"]
    assert [entry.starred for entry in ordered] == [True, True, False, False]


def test_render_tree_all_bands_and_focus():
    sections = load_sections(
        {
            "root": [{"label": "r1", "keywords": ["Science"]}],
            "trunk": [{"label": "t1"}, {"label": "t2"}],
            "leaf": [],
        }
    )
    views = render_tree(sections, {})
    assert [view.title for view in views] == ["Root", "Trunk", "Leaves"]
    assert [view.count for view in views] == [1, 2, 0]
    assert views[0].keywords == ["science"]

    focused = render_tree(sections, {}, show=ArticleBand.TRUNK)
    assert [view.band for view in focused] == [ArticleBand.TRUNK]


def test_toggle_show():
    assert toggle_show(None, ArticleBand.ROOT) == ArticleBand.ROOT
    assert toggle_show(ArticleBand.ROOT, ArticleBand.ROOT) is None
    assert toggle_show(ArticleBand.ROOT, ArticleBand.LEAF) == ArticleBand.LEAF
