"""Per-file upload progress."""

import logging
import math

logger = logging.getLogger(__name__)


class ProgressTracker:
    """Latest reported completion per identity, in [0, 1]."""

    def __init__(self) -> None:
        self._progress: dict[str, float] = {}

    def start(self, identity: str) -> None:
        self._progress[identity] = 0.0

    def set(self, identity: str, value: float) -> bool:
        """Store the latest value for a known identity.

        Returns False if nothing was stored: the identity is not tracked, or
        the report is NaN (the previous value is kept).
        """
        if identity not in self._progress:
            return False

        if math.isnan(value):
            logger.debug(f"Ignored NaN progress for {identity[:12]}")
            return False

        clamped = min(max(float(value), 0.0), 1.0)
        if clamped != value:
            logger.debug(f"Clamped progress {value} -> {clamped} for {identity[:12]}")
        self._progress[identity] = clamped
        return True

    def discard(self, identity: str) -> None:
        self._progress.pop(identity, None)

    def get(self, identity: str) -> float | None:
        return self._progress.get(identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._progress

    def __len__(self) -> int:
        return len(self._progress)
