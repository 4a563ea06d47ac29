"""Tests for the document stores."""

import asyncio

from scitree.protocols import DocumentStore
from scitree.storage import MemoryDocumentStore, SQLiteDocumentStore, init_tree
from scitree.sync import AnnotationSyncEngine

TREE = "trees/abc"


def test_stores_satisfy_protocol(tmp_path):
    assert isinstance(MemoryDocumentStore(), DocumentStore)
    assert isinstance(SQLiteDocumentStore(tmp_path / "t.db"), DocumentStore)


def test_memory_store_returns_copies():
    store = MemoryDocumentStore({TREE: {"stars": {}}})

    async def scenario():
        document = await store.get_document(TREE)
        document["stars"]["eA=="] = True
        return await store.get_document(TREE)

    assert asyncio.run(scenario()) == {"stars": {}}


def test_subscribe_delivers_current_then_changes_in_order():
    store = MemoryDocumentStore({TREE: {"n": 0}})
    seen = []

    async def scenario():
        unsubscribe = await store.subscribe(TREE, seen.append)
        await store.set_document(TREE, {"n": 1})
        await store.set_document(TREE, {"n": 2})
        unsubscribe()
        await store.set_document(TREE, {"n": 3})

    asyncio.run(scenario())
    assert seen == [{"n": 0}, {"n": 1}, {"n": 2}]


def test_subscribe_missing_document_delivers_none():
    store = MemoryDocumentStore()
    seen = []

    async def scenario():
        await store.subscribe(TREE, seen.append)

    asyncio.run(scenario())
    assert seen == [None]


def test_sqlite_round_trip_persists(tmp_path):
    db = tmp_path / "trees.db"

    async def write():
        await SQLiteDocumentStore(db).set_document(TREE, {"name": "tos", "stars": {"eA==": True}})

    async def read():
        return await SQLiteDocumentStore(db).get_document(TREE)

    asyncio.run(write())
    assert asyncio.run(read()) == {"name": "tos", "stars": {"eA==": True}}


def test_sqlite_missing_document(tmp_path):
    store = SQLiteDocumentStore(tmp_path / "trees.db")
    assert asyncio.run(store.get_document(TREE)) is None


def test_sqlite_list_paths(tmp_path):
    store = SQLiteDocumentStore(tmp_path / "trees.db")
    store.write("trees/b", {})
    store.write("trees/a", {})
    store.write("other/c", {})
    assert store.list_paths("trees/") == ["trees/a", "trees/b"]


def test_sqlite_engine_toggle_notifies(tmp_path):
    store = SQLiteDocumentStore(tmp_path / "trees.db")

    async def scenario():
        await init_tree(store, TREE, name="tos")
        async with AnnotationSyncEngine(store, TREE) as engine:
            await engine.toggle_article("x")
            return engine.stars, await store.get_document(TREE)

    local, document = asyncio.run(scenario())
    assert local == {"eA==": True}
    assert document == {"name": "tos", "stars": {"eA==": True}}


def test_init_tree_keeps_existing():
    store = MemoryDocumentStore({TREE: {"stars": {"eA==": True}}})
    document = asyncio.run(init_tree(store, TREE))
    assert document == {"stars": {"eA==": True}}
    assert store.writes == 0
