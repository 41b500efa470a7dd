"""
arbor.commands.levels - Show nodes grouped by depth.

- `arbor levels` - Node count per level
- `arbor levels --level K` - Members of one level
"""

import argparse
import json

from arbor.core.serialize import serialize_levels
from arbor.factory import index_from_args


def run(args: argparse.Namespace) -> int:
    """Run the levels command."""
    index = index_from_args(args)

    if args.level is not None:
        nodes = index.get_level(args.level)
        if args.format == "json":
            print(json.dumps([node.id for node in nodes], indent=2))
        else:
            for node in nodes:
                print(f"{node.id}\t{node.name}")
        return 0

    if args.format == "json":
        print(json.dumps(serialize_levels(index), indent=2))
        return 0

    count = index.get_level_count()
    if count == 0:
        print("No records found")
        return 0

    print(f"Levels ({count}):")
    for depth, nodes in enumerate(index.get_levels()):
        print(f"  {depth}: {len(nodes)} nodes")
    return 0
