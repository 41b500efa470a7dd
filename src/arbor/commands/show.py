"""
arbor.commands.show - Show one node with its ancestors and children.
"""

import argparse
import json

from arbor.core.serialize import serialize_node
from arbor.factory import index_from_args


def run(args: argparse.Namespace) -> int:
    """Run the show command."""
    index = index_from_args(args)
    node = index.get_by_id(args.node_id)
    path = index.get_path(args.node_id)

    if args.format == "json":
        data = serialize_node(node, recursive=False)
        data["path"] = [p.id for p in path]
        print(json.dumps(data, indent=2))
        return 0

    print(f"{node.id}: {node.name}")
    print(f"  Label:    {node.label}")
    print(f"  Level:    {node.level}")
    if node.parent_id and node.is_root:
        print(f"  Parent:   {node.parent_id} (not linked)")
    elif node.parent:
        print(f"  Parent:   {node.parent.id}")
    print(f"  Path:     {' > '.join(p.name for p in path)}")
    if node.extras:
        for key, value in node.extras.items():
            print(f"  {key}: {value}")
    if node.children:
        print(f"  Children ({len(node.children)}):")
        for child in node.children:
            print(f"    - {child.id}: {child.name}")
    return 0
