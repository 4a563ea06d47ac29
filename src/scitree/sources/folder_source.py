"""Source for local folders of exports."""

import logging
import os
from pathlib import Path
from typing import Iterator

from scitree.models import FileRecord

logger = logging.getLogger(__name__)

SKIP_PARTS = {
    "__pycache__",
    "node_modules",
    "venv",
    "env",
    "dist",
    "build",
}


class FolderSource:
    """Every file under a folder, recursively."""

    source_type = "folder"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def records(self, source: Path) -> Iterator[FileRecord]:
        """Yield a record per file, in sorted path order.

        Args:
            source: Path to the folder

        Yields:
            Unvalidated FileRecords named by their path relative to source
        """
        for root, dirs, files in os.walk(source):
            dirs.sort()
            for filename in sorted(files):
                full_path = Path(root) / filename
                rel_path = full_path.relative_to(source)

                if self._should_skip(rel_path):
                    continue

                try:
                    blob = full_path.read_bytes()
                except OSError as e:
                    logger.warning(f"Skipping unreadable {rel_path}: {e}")
                    continue

                yield FileRecord(name=str(rel_path), blob=blob)

    def _should_skip(self, path: Path) -> bool:
        """Skip hidden files/folders and common build artifacts."""
        return any(part.startswith(".") or part in SKIP_PARTS for part in path.parts)
