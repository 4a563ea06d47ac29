"""Central settings. Everything pulls from here."""

import os
from pathlib import Path

# --- Upload budget ---
# cumulative size budget in MiB; files that push the batch past it are capped
MAX_SIZE = float(os.getenv("SCITREE_MAX_SIZE", "10"))

# progress is reported once per chunk while scanning an upload
UPLOAD_CHUNK_SIZE = 64 * 1024

# --- Tree view ---
KEYWORD_TOP_K = 5

# --- Document store ---
DEFAULT_DB_PATH = Path(os.getenv("SCITREE_DB", "scitree.db"))
