"""
arbor.commands.export - Export the hierarchy as CSV or JSON.
"""

import argparse
import json
import sys
from pathlib import Path

from arbor.core.serialize import serialize_index, to_csv
from arbor.factory import index_from_args


def run(args: argparse.Namespace) -> int:
    """Run the export command."""
    index = index_from_args(args)

    if args.format == "csv":
        content = to_csv(index)
    else:
        content = json.dumps(serialize_index(index), indent=2) + "\n"

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        if not args.quiet:
            print(f"Wrote {len(index)} nodes to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(content)
    return 0
