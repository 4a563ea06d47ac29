"""Upload sources: single files, folders and zip archives of exports."""

from pathlib import Path
from typing import Optional

from scitree.protocols import UploadSource
from scitree.sources.file_source import FileSource
from scitree.sources.folder_source import FolderSource
from scitree.sources.zip_source import ZipSource

# Registry of available sources, most specific first
_SOURCES: list[UploadSource] = [
    ZipSource(),
    FolderSource(),
    FileSource(),
]


def get_source(path: Path | str) -> Optional[UploadSource]:
    """Find a source that can read the given path.

    Args:
        path: A file, folder or .zip archive

    Returns:
        An UploadSource instance that can handle the path, or None
    """
    source_path = Path(path)
    for source in _SOURCES:
        if source.can_handle(source_path):
            return source
    return None


def register_source(source: UploadSource) -> None:
    """Register a custom source (for plugins/extensions).

    Args:
        source: An object implementing the UploadSource protocol
    """
    _SOURCES.append(source)


__all__ = ["get_source", "register_source", "FileSource", "FolderSource", "ZipSource"]
