"""Cumulative size budget."""

from typing import Sequence

import numpy as np

MIB = 2**20


def capped(sizes_bytes: Sequence[int], budget_mib: float) -> list[bool]:
    """Flag each file whose inclusion pushes the running total over budget.

    The running total is taken in sequence order and converted to MiB.
    Entry i is capped iff sum(sizes[:i + 1]) > budget, so the file that
    tips the batch over is flagged along with everything after it.

    Args:
        sizes_bytes: File sizes in registration order
        budget_mib: Size budget in mebibytes

    Returns:
        One flag per entry, index-aligned with sizes_bytes
    """
    if len(sizes_bytes) == 0:
        return []

    running = np.cumsum(np.asarray(sizes_bytes, dtype=np.int64)) / MIB
    return [bool(flag) for flag in running > budget_mib]
