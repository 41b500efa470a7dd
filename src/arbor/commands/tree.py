"""
arbor.commands.tree - Print the hierarchy as an indented forest.
"""

import argparse
import json

from arbor.core.models import HierarchyNode
from arbor.core.serialize import serialize_forest
from arbor.factory import index_from_args


def run(args: argparse.Namespace) -> int:
    """Run the tree command."""
    index = index_from_args(args)

    if args.format == "json":
        print(json.dumps(serialize_forest(index), indent=2))
        return 0

    roots = index.get_forest()
    if not roots:
        print("No records found")
        return 0

    for root in roots:
        for line in format_tree(root, show_ids=args.ids):
            print(line)

    if not args.quiet:
        print()
        print(f"{len(index)} nodes, {len(roots)} roots, {index.get_level_count()} levels")
    return 0


def format_tree(root: HierarchyNode, show_ids: bool = False) -> list[str]:
    """Render one root and its descendants, two spaces per level."""
    lines = []
    for node in root.walk("pre"):
        prefix = "  " * (node.level - root.level)
        text = f"{node.name} [{node.id}]" if show_ids else node.name
        lines.append(f"{prefix}{text}")
    return lines
