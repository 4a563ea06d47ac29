"""Data models for scitree."""

from scitree.models.records import Article, ArticleBand, FileRecord, TreeDocument

__all__ = ["FileRecord", "Article", "ArticleBand", "TreeDocument"]
