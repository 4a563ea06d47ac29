"""Document store implementations."""

from scitree.storage.memory import MemoryDocumentStore
from scitree.storage.store import SQLiteDocumentStore, init_tree

__all__ = ["MemoryDocumentStore", "SQLiteDocumentStore", "init_tree"]
