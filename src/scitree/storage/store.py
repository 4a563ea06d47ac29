"""SQLite-backed document store."""

import asyncio
import json
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional

from scitree.models import TreeDocument
from scitree.protocols import DocumentStore
from scitree.protocols.store import ChangeCallback
from scitree.storage.schema import SCHEMA
from scitree.storage.subscriptions import SubscriptionHub


class SQLiteDocumentStore:
    """Documents stored as JSON, one row per path.

    Subscriptions are in-process: listeners registered on this instance
    are notified after each committed write made through it.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._hub = SubscriptionHub()
        self._initialized = False

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)
        self._initialized = True

    # Blocking primitives

    def read(self, path: str) -> Optional[TreeDocument]:
        """Load the document at path, or None."""
        self._ensure_schema()
        with self.connection() as conn:
            row = conn.execute(
                "SELECT body FROM documents WHERE path = ?", (path,)
            ).fetchone()
            return json.loads(row["body"]) if row else None

    def write(self, path: str, value: TreeDocument) -> None:
        """Replace the document at path."""
        self._ensure_schema()
        with self.connection() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO documents (path, body, updated_at)
                   VALUES (?, ?, ?)""",
                (path, json.dumps(value, sort_keys=True), datetime.now().isoformat()),
            )

    def list_paths(self, path_prefix: str = "") -> list[str]:
        """List document paths matching prefix."""
        self._ensure_schema()
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT path FROM documents WHERE path LIKE ? ORDER BY path",
                (f"{path_prefix}%",),
            )
            return [row["path"] for row in cursor]

    # DocumentStore protocol

    async def get_document(self, path: str) -> Optional[TreeDocument]:
        return await asyncio.to_thread(self.read, path)

    async def set_document(self, path: str, value: TreeDocument) -> None:
        await asyncio.to_thread(self.write, path, value)
        self._hub.notify(path, value)

    async def subscribe(self, path: str, on_change: ChangeCallback) -> Callable[[], None]:
        unsubscribe = self._hub.add(path, on_change)
        try:
            on_change(await self.get_document(path))
        except BaseException:
            unsubscribe()
            raise
        return unsubscribe

    def _ensure_schema(self) -> None:
        if not self._initialized:
            self.initialize()


async def init_tree(store: DocumentStore, path: str, **fields) -> TreeDocument:
    """Create a tree document with no stars unless one already exists.

    Returns:
        The document now stored at path
    """
    existing = await store.get_document(path)
    if existing is not None:
        return existing

    document: TreeDocument = {**fields, "stars": {}}
    await store.set_document(path, document)
    return document
