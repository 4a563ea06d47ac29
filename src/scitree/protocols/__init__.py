"""Protocol definitions for extensible components."""

from scitree.protocols.source import UploadSource
from scitree.protocols.store import DocumentStore

__all__ = ["DocumentStore", "UploadSource"]
