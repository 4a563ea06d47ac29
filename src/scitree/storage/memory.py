"""Asyncio in-memory document store."""

import asyncio
import copy
from typing import Callable, Optional

from scitree.models import TreeDocument
from scitree.protocols.store import ChangeCallback
from scitree.storage.subscriptions import SubscriptionHub


class MemoryDocumentStore:
    """Document store held in a dict.

    Every call yields to the event loop once, so callers see the same
    suspension points they would with a networked store.
    """

    def __init__(self, documents: Optional[dict[str, TreeDocument]] = None):
        self._documents: dict[str, TreeDocument] = copy.deepcopy(documents or {})
        self._hub = SubscriptionHub()
        self.writes = 0

    async def get_document(self, path: str) -> Optional[TreeDocument]:
        await asyncio.sleep(0)
        document = self._documents.get(path)
        return copy.deepcopy(document) if document is not None else None

    async def set_document(self, path: str, value: TreeDocument) -> None:
        await asyncio.sleep(0)
        self._documents[path] = copy.deepcopy(value)
        self.writes += 1
        self._hub.notify(path, value)

    async def subscribe(self, path: str, on_change: ChangeCallback) -> Callable[[], None]:
        unsubscribe = self._hub.add(path, on_change)
        try:
            # Delivered without yielding so no write can slip in before it
            on_change(copy.deepcopy(self._documents.get(path)))
        except BaseException:
            unsubscribe()
            raise
        return unsubscribe

    def listener_count(self, path: str) -> int:
        return self._hub.count(path)
