"""Upload registry: dedup, progress and size capping."""

from scitree.registry.capping import capped
from scitree.registry.file_registry import FileRegistry
from scitree.registry.progress import ProgressTracker

__all__ = ["FileRegistry", "ProgressTracker", "capped"]
