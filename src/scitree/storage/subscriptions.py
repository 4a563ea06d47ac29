"""In-process change notification shared by the document stores."""

import copy
import logging
from collections import defaultdict
from typing import Callable, Optional

from scitree.models import TreeDocument
from scitree.protocols.store import ChangeCallback

logger = logging.getLogger(__name__)


class SubscriptionHub:
    """Per-path listeners, notified in registration order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[ChangeCallback]] = defaultdict(list)

    def add(self, path: str, on_change: ChangeCallback) -> Callable[[], None]:
        listeners = self._listeners[path]
        listeners.append(on_change)
        logger.debug(f"Subscribed to {path} ({len(listeners)} listeners)")

        def unsubscribe() -> None:
            if on_change in listeners:
                listeners.remove(on_change)
                logger.debug(f"Unsubscribed from {path}")

        return unsubscribe

    def notify(self, path: str, document: Optional[TreeDocument]) -> None:
        # Snapshot: a listener may unsubscribe while being notified
        for on_change in list(self._listeners.get(path, ())):
            on_change(copy.deepcopy(document))

    def count(self, path: str) -> int:
        return len(self._listeners.get(path, ()))
