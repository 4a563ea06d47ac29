"""Authoritative set of uploaded files."""

import copy
import logging
from typing import Callable, Iterator, Optional

from scitree.config import MAX_SIZE
from scitree.models import FileRecord
from scitree.registry.capping import capped as compute_capped
from scitree.registry.progress import ProgressTracker

logger = logging.getLogger(__name__)

ValidFilesListener = Callable[[tuple[FileRecord, ...]], None]

# Fields the validation/parsing collaborators may set through update()
_MUTABLE_FIELDS = frozenset({"valid", "articles", "citations", "keywords"})


class FileRegistry:
    """Registered uploads in registration order.

    Files are deduplicated by content identity. Every structural change
    (add, remove, move) recomputes the capped flags for the whole sequence,
    since capping depends on cumulative order. Unknown identities are
    silent no-ops everywhere: uploads race against removal by nature.
    """

    def __init__(self, max_size: float | None = None):
        self.max_size = MAX_SIZE if max_size is None else max_size
        self.progress = ProgressTracker()
        self._records: list[FileRecord] = []
        self._capped: dict[str, bool] = {}
        self._valid: tuple[FileRecord, ...] = ()
        self._listeners: list[ValidFilesListener] = []

    # Structural operations

    def add(self, record: FileRecord) -> FileRecord:
        """Register a file, or return the existing record with the same content."""
        existing = self.get(record.identity)
        if existing is not None:
            logger.debug(f"Duplicate content for {record.name}, keeping {existing.name}")
            return existing

        self._records.append(record)
        self.progress.start(record.identity)
        self._recompute_capped()
        self._refresh_valid()
        return record

    def remove(self, identity: str) -> bool:
        """Drop a file and its progress entry. Returns False if unknown."""
        index = self._index_of(identity)
        if index is None:
            return False

        removed = self._records.pop(index)
        self.progress.discard(identity)
        self._recompute_capped()
        self._refresh_valid()
        logger.debug(f"Removed {removed.name}")
        return True

    def move(self, identity: str) -> bool:
        """Promote a file by one slot.

        The entry swaps places with its predecessor; the first entry swaps
        with its successor instead.
        """
        index = self._index_of(identity)
        if index is None or len(self._records) < 2:
            return False

        other = index - 1 if index > 0 else 1
        self._records[index], self._records[other] = (
            self._records[other],
            self._records[index],
        )
        self._recompute_capped()
        self._refresh_valid()
        return True

    swap = move

    # Collaborator updates

    def track(self, identity: str, value: float) -> bool:
        """Store the latest progress report for a file."""
        return self.progress.set(identity, value)

    def update(self, identity: str, **changes) -> bool:
        """Apply validation/parsing results to a registered file.

        Args:
            identity: Content identity of the file
            **changes: Any of valid, articles, citations, keywords

        Returns:
            False if the identity is not registered
        """
        unknown = set(changes) - _MUTABLE_FIELDS
        if unknown:
            raise TypeError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        record = self.get(identity)
        if record is None:
            return False

        for name, value in changes.items():
            setattr(record, name, value)
        self._refresh_valid()
        return True

    # Views

    def get(self, identity: str) -> Optional[FileRecord]:
        index = self._index_of(identity)
        return self._records[index] if index is not None else None

    def files(self) -> list[FileRecord]:
        """All registered files in registration order."""
        return list(self._records)

    def valid_files(self) -> tuple[FileRecord, ...]:
        """Registered files that passed validation.

        The same tuple is returned until its content changes.
        """
        return self._valid

    def is_capped(self, identity: str) -> bool:
        return self._capped.get(identity, False)

    @property
    def capped(self) -> dict[str, bool]:
        return dict(self._capped)

    @property
    def total_mib(self) -> float:
        return sum(record.size_mib for record in self._records)

    def subscribe(self, listener: ValidFilesListener) -> Callable[[], None]:
        """Call listener with the valid files whenever they change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        """Drop every file (session teardown)."""
        for record in list(self._records):
            self.remove(record.identity)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(list(self._records))

    def __contains__(self, identity: object) -> bool:
        return self._index_of(identity) is not None

    # Internals

    def _index_of(self, identity: object) -> Optional[int]:
        for i, record in enumerate(self._records):
            if record.identity == identity:
                return i
        return None

    def _recompute_capped(self) -> None:
        flags = compute_capped([r.size_bytes for r in self._records], self.max_size)
        self._capped = {r.identity: flag for r, flag in zip(self._records, flags)}

    def _refresh_valid(self) -> None:
        # Snapshot with copies so later in-place edits are detected
        fresh = tuple(_snapshot(r) for r in self._records if r.valid)
        if fresh == self._valid:
            return
        self._valid = fresh
        for listener in list(self._listeners):
            listener(fresh)


def _snapshot(record: FileRecord) -> FileRecord:
    # Shallow copy keeps the identity; rebuilding would rehash the blob
    clone = copy.copy(record)
    clone.articles = list(record.articles)
    clone.citations = list(record.citations)
    clone.keywords = list(record.keywords)
    return clone
