"""Protocol for the shared remote document store."""

from typing import Callable, Optional, Protocol, runtime_checkable

from scitree.models import TreeDocument

ChangeCallback = Callable[[Optional[TreeDocument]], None]


@runtime_checkable
class DocumentStore(Protocol):
    """Key-addressed document store shared by every viewer of a tree.

    Writes overwrite the whole document. There are no transactions and
    no version checks: the last writer wins.
    """

    async def get_document(self, path: str) -> Optional[TreeDocument]:
        """Point read. Returns None if no document exists at path."""
        ...

    async def set_document(self, path: str, value: TreeDocument) -> None:
        """Overwrite the whole document at path."""
        ...

    async def subscribe(self, path: str, on_change: ChangeCallback) -> Callable[[], None]:
        """Register for change notifications on path.

        on_change is called once with the current document (None if
        missing) and again after every write, in write order.

        Returns: a function that cancels the subscription
        """
        ...
