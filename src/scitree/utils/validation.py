"""Upload validation: bibliographic exports must be text."""

from typing import Callable, Optional

from scitree.config import UPLOAD_CHUNK_SIZE

# printable ASCII + tab, LF, CR
_TEXT_BYTES = frozenset(range(32, 127)) | {9, 10, 13}

# Above this share of non-text bytes a window counts as binary
NON_TEXT_RATIO = 0.30


def looks_like_text(content: bytes) -> bool:
    """Check a window of bytes for text content.

    Args:
        content: Raw bytes to inspect

    Returns:
        False on any null byte or when too many bytes are non-printable
    """
    if not content:
        return True

    if b"\x00" in content:
        return False

    # UTF-8 continuation/lead bytes are fine in exports with accented names
    non_text = sum(1 for byte in content if byte not in _TEXT_BYTES and byte < 0x80)
    return (non_text / len(content)) <= NON_TEXT_RATIO


def scan_blob(
    blob: bytes,
    chunk_size: int = UPLOAD_CHUNK_SIZE,
    on_progress: Optional[Callable[[float], None]] = None,
) -> bool:
    """Validate a blob chunk by chunk, reporting fractional progress.

    Args:
        blob: Full file content
        chunk_size: Bytes inspected per step
        on_progress: Called with a value in [0, 1] after each chunk

    Returns:
        True if every chunk looks like text
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    total = len(blob)
    valid = True
    for start in range(0, total, chunk_size):
        if not looks_like_text(blob[start : start + chunk_size]):
            valid = False
        if on_progress is not None:
            on_progress(min(start + chunk_size, total) / total)

    if total == 0:
        valid = False
        if on_progress is not None:
            on_progress(1.0)
    return valid
