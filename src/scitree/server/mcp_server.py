"""FastMCP server implementation for scitree."""

from pathlib import Path

from mcp.server.fastmcp import FastMCP

from scitree.errors import NotFound
from scitree.storage import SQLiteDocumentStore
from scitree.sync import AnnotationSyncEngine
from scitree.utils.hashing import decode_label


def create_mcp_server(db_path: Path) -> FastMCP:
    """Create an MCP server over one document store.

    Args:
        db_path: Path to the SQLite document store

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="scitree",
    )

    store = SQLiteDocumentStore(db_path)

    @mcp.tool()
    async def list_stars(tree_path: str) -> str:
        """List the starred articles of a tree.

        Args:
            tree_path: Document path of the tree (e.g., "trees/abc123")

        Returns:
            One starred article label per line
        """
        document = await store.get_document(tree_path)
        if document is None:
            return f"Error: Tree not found: {tree_path}"

        labels = starred_labels(document.get("stars") or {})
        if not labels:
            return f"No starred articles in {tree_path}"
        return "\n".join(labels)

    @mcp.tool()
    async def toggle_star(tree_path: str, article_label: str) -> str:
        """Star or unstar an article for everyone viewing the tree.

        Args:
            tree_path: Document path of the tree
            article_label: Article label exactly as shown in the tree

        Returns:
            The new star state of the article
        """
        engine = AnnotationSyncEngine(store, tree_path)
        try:
            value = await engine.toggle_article(article_label)
        except NotFound:
            return f"Error: Tree not found: {tree_path}"
        return f"{'Starred' if value else 'Unstarred'}: {article_label}"

    return mcp


def starred_labels(stars: dict[str, bool]) -> list[str]:
    """Decoded labels of starred entries, sorted by key.

    Keys that are not valid base64 UTF-8 (written by another client) are
    returned as stored.
    """
    labels = []
    for key, starred in sorted(stars.items()):
        if not starred:
            continue
        try:
            labels.append(decode_label(key))
        except ValueError:
            labels.append(key)
    return labels
