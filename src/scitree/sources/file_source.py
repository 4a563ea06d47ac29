"""Source for a single export file."""

from pathlib import Path
from typing import Iterator

from scitree.models import FileRecord


class FileSource:
    """A single file on disk."""

    source_type = "file"

    def can_handle(self, source: Path) -> bool:
        return source.is_file()

    def records(self, source: Path) -> Iterator[FileRecord]:
        yield FileRecord(name=source.name, blob=source.read_bytes())
