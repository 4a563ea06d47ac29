"""Source for zip archives of exports."""

import zipfile
from pathlib import Path
from typing import Iterator

from scitree.models import FileRecord


class ZipSource:
    """Files inside a ZIP archive."""

    source_type = "zip"

    def can_handle(self, source: Path) -> bool:
        """Check if this is a zip file."""
        return source.suffix.lower() == ".zip" and source.is_file()

    def records(self, source: Path) -> Iterator[FileRecord]:
        """Yield a record per archive member, skipping directories and hidden entries."""
        with zipfile.ZipFile(source, "r") as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue
                if any(part.startswith(".") for part in Path(info.filename).parts):
                    continue
                yield FileRecord(name=info.filename, blob=zf.read(info.filename))
