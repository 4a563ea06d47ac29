"""Core data models for uploads and tree articles."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from scitree.utils.hashing import content_hash

# Remote tree document: free-form fields plus an optional sparse `stars` map
# keyed by encoded article label.
TreeDocument = dict[str, Any]


class ArticleBand(str, Enum):
    """Classification band an article is assigned to upstream."""

    ROOT = "root"
    TRUNK = "trunk"
    LEAF = "leaf"


@dataclass(frozen=True)
class Article:
    """An article as delivered by the classification step."""

    label: str
    keywords: Optional[tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Article":
        keywords = data.get("keywords")
        return cls(
            label=data["label"],
            keywords=tuple(keywords) if keywords is not None else None,
        )


@dataclass
class FileRecord:
    """An uploaded bibliographic file.

    The identity is derived from the blob, so two uploads with the same
    bytes share one identity regardless of name.
    """

    name: str
    blob: bytes = field(repr=False)
    valid: bool = False
    articles: list[str] = field(default_factory=list)
    citations: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    identity: str = field(init=False)

    def __post_init__(self) -> None:
        self.identity = content_hash(self.blob)

    @property
    def size_bytes(self) -> int:
        return len(self.blob)

    @property
    def size_mib(self) -> float:
        """Blob size in mebibytes."""
        return self.size_bytes / 2**20
