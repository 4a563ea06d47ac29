"""CLI entry point for scitree."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from scitree.config import DEFAULT_DB_PATH, MAX_SIZE
from scitree.errors import SciTreeError
from scitree.models import ArticleBand
from scitree.registry import FileRegistry
from scitree.sources import get_source
from scitree.storage import SQLiteDocumentStore, init_tree
from scitree.sync import AnnotationSyncEngine
from scitree.tree.bands import load_sections, render_tree
from scitree.uploader import upload

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def register(sources: list[str], max_size: float = MAX_SIZE) -> FileRegistry:
    """Register uploads from files, folders or zips and print their state.

    Args:
        sources: Paths to read uploads from
        max_size: Cumulative size budget in MiB
    """
    registry = FileRegistry(max_size=max_size)

    for source in sources:
        source_path = Path(source)
        reader = get_source(source_path)
        if reader is None:
            logger.error(f"Cannot read: {source}")
            logger.error("Supported inputs: files, folders, .zip files")
            sys.exit(1)

        for record in reader.records(source_path):
            result = upload(registry, record)
            if result.duplicate:
                logger.info(f"  {record.name} (same content as {result.record.name})")
            else:
                logger.info(f"  {record.name}")

    print(f"{'File':<40} {'Size':>10} {'Progress':>9}  Capped  Valid")
    for record in registry:
        progress = registry.progress.get(record.identity) or 0.0
        capped = "yes" if registry.is_capped(record.identity) else "no"
        valid = "yes" if record.valid else "no"
        print(
            f"{record.name[:40]:<40} {record.size_mib:>6.2f} MiB {progress:>8.0%}  "
            f"{capped:<6}  {valid}"
        )
    print()
    print(f"Total: {registry.total_mib:.2f} MiB of {registry.max_size:g} MiB budget")
    return registry


def init(tree_path: str, db: Path = DEFAULT_DB_PATH) -> None:
    """Create the shared tree document if it does not exist."""
    store = SQLiteDocumentStore(db)
    document = asyncio.run(init_tree(store, tree_path))
    logger.info(f"Tree {tree_path}: {len(document.get('stars') or {})} stars")


def star(tree_path: str, label: str, db: Path = DEFAULT_DB_PATH) -> bool:
    """Toggle the star on an article of a shared tree."""
    store = SQLiteDocumentStore(db)

    async def toggle() -> bool:
        async with AnnotationSyncEngine(store, tree_path) as engine:
            return await engine.toggle_article(label)

    value = asyncio.run(toggle())
    print(f"{'starred' if value else 'unstarred'}: {label}")
    return value


def tree(
    tree_path: str,
    sections_json: str,
    db: Path = DEFAULT_DB_PATH,
    show: Optional[str] = None,
) -> None:
    """Print the bands of a tree with starred articles first.

    Args:
        tree_path: Path of the shared tree document
        sections_json: JSON file with {root: [...], trunk: [...], leaf: [...]}
        db: SQLite document store
        show: Only print this band
    """
    sections = load_sections(json.loads(Path(sections_json).read_text(encoding="utf-8")))
    store = SQLiteDocumentStore(db)

    async def current_stars() -> dict[str, bool]:
        async with AnnotationSyncEngine(store, tree_path) as engine:
            return engine.stars

    stars = asyncio.run(current_stars())
    focus = ArticleBand(show) if show else None

    for view in render_tree(sections, stars, show=focus):
        print(f"== {view.title} ({view.count} articles)")
        print(f"   {view.info}")
        if view.keywords:
            print(f"   Keywords: {', '.join(view.keywords)}")
        for entry in view.articles:
            mark = "*" if entry.starred else " "
            print(f"  {mark} {entry.article.label}")
        print()


def serve(db: Path = DEFAULT_DB_PATH, transport: str = "stdio") -> None:
    """Start MCP server over a document store.

    Args:
        db: SQLite document store
        transport: Transport protocol (stdio or sse)
    """
    # Import here to avoid loading MCP unless needed
    from scitree.server import create_mcp_server

    from typing import cast, Literal

    logger.info(f"Serving {db} via {transport}")
    mcp = create_mcp_server(db)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def deck(max_size: float = MAX_SIZE) -> None:
    """Launch the upload deck TUI."""
    from scitree.upload_deck import main as upload_deck_main

    upload_deck_main(max_size=max_size)


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="scitree",
        description="scitree - Tree of Science uploads and shared stars",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # register command
    register_parser = subparsers.add_parser(
        "register",
        help="Register export files and show dedup, progress and capping",
    )
    register_parser.add_argument("sources", nargs="+", help="Files, folders or zip files")
    register_parser.add_argument(
        "--max-size",
        type=float,
        default=MAX_SIZE,
        help=f"Size budget in MiB (default: {MAX_SIZE:g})",
    )

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Create a shared tree document",
    )
    init_parser.add_argument("tree_path", help="Document path of the tree")
    init_parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="Document store file")

    # star command
    star_parser = subparsers.add_parser(
        "star",
        help="Toggle the star on an article",
    )
    star_parser.add_argument("tree_path", help="Document path of the tree")
    star_parser.add_argument("label", help="Article label")
    star_parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="Document store file")

    # tree command
    tree_parser = subparsers.add_parser(
        "tree",
        help="Show the root/trunk/leaf bands with stars",
    )
    tree_parser.add_argument("tree_path", help="Document path of the tree")
    tree_parser.add_argument("sections", help="JSON file with the classified bands")
    tree_parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="Document store file")
    tree_parser.add_argument(
        "--show",
        choices=[band.value for band in ArticleBand],
        help="Only show one band",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start MCP server for shared stars",
    )
    serve_parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH, help="Document store file")
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    # deck command
    deck_parser = subparsers.add_parser(
        "deck",
        help="Launch the upload deck TUI",
    )
    deck_parser.add_argument("--max-size", type=float, default=MAX_SIZE, help="Size budget in MiB")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if args.command == "register":
            register(args.sources, args.max_size)
        elif args.command == "init":
            init(args.tree_path, args.db)
        elif args.command == "star":
            star(args.tree_path, args.label, args.db)
        elif args.command == "tree":
            tree(args.tree_path, args.sections, args.db, args.show)
        elif args.command == "serve":
            serve(args.db, args.transport)
        elif args.command == "deck":
            deck(args.max_size)
    except SciTreeError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
