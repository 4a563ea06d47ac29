"""Upload collaborator: registers files and drives them to a validated state."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from scitree.config import UPLOAD_CHUNK_SIZE
from scitree.models import FileRecord
from scitree.registry import FileRegistry
from scitree.utils.validation import scan_blob

logger = logging.getLogger(__name__)


@dataclass
class UploadResult:
    record: FileRecord
    duplicate: bool


def upload(
    registry: FileRegistry,
    record: FileRecord,
    chunk_size: int = UPLOAD_CHUNK_SIZE,
    on_progress: Optional[Callable[[str, float], None]] = None,
) -> UploadResult:
    """Register a file, scan it with progress reports, then mark it valid or not.

    A duplicate of an already registered file is returned as-is without
    a second scan.
    """
    registered = registry.add(record)
    if registered is not record:
        return UploadResult(registered, duplicate=True)

    def report(value: float) -> None:
        registry.track(record.identity, value)
        if on_progress is not None:
            on_progress(record.identity, value)

    valid = scan_blob(record.blob, chunk_size, report)
    registry.update(record.identity, valid=valid)
    if not valid:
        logger.warning(f"{record.name} does not look like a bibliographic export")
    return UploadResult(registered, duplicate=False)
