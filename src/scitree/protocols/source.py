"""Protocol for upload sources."""

from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from scitree.models import FileRecord


@runtime_checkable
class UploadSource(Protocol):
    """Protocol for places uploads come from.

    Implementations handle different inputs (single file, folder, zip).
    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source type (e.g., 'zip', 'folder')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this source can read the given path."""
        ...

    def records(self, source: Path) -> Iterator[FileRecord]:
        """Yield an unvalidated FileRecord per file found."""
        ...
