"""Content identities and store-safe label keys."""

import base64
import hashlib


def content_hash(blob: bytes) -> str:
    """Return the hex SHA-256 digest of the blob, used as the file identity."""
    return hashlib.sha256(blob).hexdigest()


def encode_label(label: str) -> str:
    """Encode an article label as base64 so it is usable as a document map key."""
    return base64.b64encode(label.encode("utf-8")).decode("ascii")


def decode_label(key: str) -> str:
    return base64.b64decode(key.encode("ascii")).decode("utf-8")
