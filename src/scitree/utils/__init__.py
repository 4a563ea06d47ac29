"""Utility functions for scitree."""

from scitree.utils.hashing import content_hash, decode_label, encode_label
from scitree.utils.validation import looks_like_text, scan_blob

__all__ = ["content_hash", "encode_label", "decode_label", "looks_like_text", "scan_blob"]
