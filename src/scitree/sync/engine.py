"""Toggle-and-merge protocol for star annotations on a shared tree document."""

import logging
from enum import Enum
from typing import Callable, Optional

from scitree.errors import NotFound
from scitree.models import TreeDocument
from scitree.protocols import DocumentStore
from scitree.utils.hashing import encode_label

logger = logging.getLogger(__name__)


class SyncState(str, Enum):
    DISCONNECTED = "disconnected"
    SUBSCRIBED = "subscribed"
    TOGGLING = "toggling"


class AnnotationSyncEngine:
    """Star state for one open tree view.

    Two layers are kept apart: the remote document is the source of truth,
    and `stars` is a local projection of it. Every remote notification
    replaces the projection wholesale; a toggle only flips it optimistically
    until the next notification arrives.

    Toggles are read-modify-write of the whole document with no version
    check. Two viewers toggling different labels at the same time can lose
    one of the updates: last writer wins for the entire stars map.

    Use as an async context manager so the subscription is released on
    every exit path:

        async with AnnotationSyncEngine(store, "trees/abc") as engine:
            await engine.toggle_article("Smith 2020")
    """

    def __init__(self, store: DocumentStore, tree_path: str):
        self.store = store
        self.tree_path = tree_path
        self._stars: dict[str, bool] = {}
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._in_flight = 0

    @property
    def state(self) -> SyncState:
        if self._unsubscribe is None:
            return SyncState.DISCONNECTED
        if self._in_flight:
            return SyncState.TOGGLING
        return SyncState.SUBSCRIBED

    @property
    def stars(self) -> dict[str, bool]:
        """Copy of the local projection, keyed by encoded label."""
        return dict(self._stars)

    def is_starred(self, label_key: str) -> bool:
        return bool(self._stars.get(label_key, False))

    # Lifecycle

    async def open(self) -> None:
        """Subscribe to the tree document. No-op if already subscribed."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = await self.store.subscribe(self.tree_path, self._apply_remote)
        logger.debug(f"Watching stars on {self.tree_path}")

    def close(self) -> None:
        """Release the subscription. Safe to call more than once."""
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
            logger.debug(f"Stopped watching {self.tree_path}")

    async def __aenter__(self) -> "AnnotationSyncEngine":
        try:
            await self.open()
        except BaseException:
            self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Protocol

    def _apply_remote(self, document: Optional[TreeDocument]) -> None:
        if document is None:
            logger.warning(f"Tree document missing at {self.tree_path}")
            self._stars = {}
            return
        self._stars = dict(document.get("stars") or {})

    async def toggle_star(self, label_key: str) -> bool:
        """Flip the star stored under an encoded label.

        Args:
            label_key: Article label already passed through encode_label

        Returns:
            The value written to the remote document

        Raises:
            NotFound: If the tree document does not exist; nothing is written
        """
        self._stars[label_key] = not self._stars.get(label_key, False)
        self._in_flight += 1
        try:
            document = await self.store.get_document(self.tree_path)
            if document is None:
                logger.error(f"Cannot toggle {label_key}: no tree at {self.tree_path}")
                raise NotFound(self.tree_path)

            stars = dict(document.get("stars") or {})
            value = not bool(stars.get(label_key, False))
            stars[label_key] = value
            await self.store.set_document(self.tree_path, {**document, "stars": stars})
            return value
        finally:
            self._in_flight -= 1

    async def toggle_article(self, label: str) -> bool:
        """Encode an article label and toggle its star."""
        return await self.toggle_star(encode_label(label))
