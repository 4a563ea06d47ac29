"""Tree view: band ordering by stars and keyword summaries."""

from scitree.tree.bands import BAND_INFO, BandView, order_band, render_tree, toggle_show
from scitree.tree.keywords import band_keywords, most_common

__all__ = [
    "BAND_INFO",
    "BandView",
    "order_band",
    "render_tree",
    "toggle_show",
    "band_keywords",
    "most_common",
]
