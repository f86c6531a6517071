#!/usr/bin/env python
"""Resolve a universe and print its projection.

Usage:
    uv run python scripts/inspect_universe.py
    uv run python scripts/inspect_universe.py --language zh --root 吉他
    uv run python scripts/inspect_universe.py --collapse Music --json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from universe.config import settings
from universe.exceptions import UniverseError
from universe.loading import DocumentFetcher, DocumentResolver
from universe.navigation.session import NavigationSession


def print_summary(session: NavigationSession) -> None:
    projection = session.graph()

    trail = " / ".join(node.id for node in session.breadcrumbs())
    print(f"\nUniverse: {session.title} ({session.language})")
    if trail:
        print(f"View: / {trail}")
    print("-" * 60)

    for node in projection.nodes:
        marker = "+" if node.collapsed else ("-" if node.child_count else " ")
        print(f"{'  ' * node.level}{marker} {node.id}  [group {node.group}]")

    relations = [e for e in projection.edges if e.type != "tree"]
    print(f"\nNodes: {len(projection.nodes)}, edges: {len(projection.edges)}")
    for edge in relations:
        label = f" ({edge.label})" if edge.label else ""
        print(f"  {edge.source} ~{edge.type}~> {edge.target}{label}")


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Resolve a multi-document universe and print a projection"
    )
    parser.add_argument(
        "--language",
        default=settings.default_language,
        help="Content language to load",
    )
    parser.add_argument(
        "--data-dir",
        default=settings.data_dir,
        help="Local data directory (ignored for remote data)",
    )
    parser.add_argument("--root", help="Drill-down root node id")
    parser.add_argument(
        "--collapse",
        action="append",
        default=[],
        help="Node id to collapse (repeatable)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print renderer JSON instead of a summary",
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    fetcher = DocumentFetcher(data_dir=args.data_dir)
    session = NavigationSession(DocumentResolver(fetcher), language=args.language)

    try:
        await session.load()
        if args.root and not session.navigate(args.root):
            print(f"Unknown node '{args.root}', showing the whole universe")
        for node_id in args.collapse:
            if session.toggle_collapse(node_id) is None:
                print(f"Unknown node '{node_id}', not collapsed")

        if args.json:
            print(json.dumps(session.graph().to_dict(), ensure_ascii=False, indent=2))
        else:
            print_summary(session)
    except UniverseError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        await fetcher.close()


if __name__ == "__main__":
    asyncio.run(main())
