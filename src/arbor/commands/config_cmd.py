"""
arbor.commands.config_cmd - Inspect and create configuration files.

- `arbor config show` - Print the effective configuration
- `arbor config path` - Print the config file location
- `arbor config init` - Write a default .arbor.toml
"""

import argparse
import json
import sys
from pathlib import Path

from arbor.config import CONFIG_FILENAME, find_config_file, get_config, render_default_config


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)

    if action == "show":
        config = get_config(args.config)
        print(json.dumps(config, indent=2))
        return 0
    elif action == "path":
        path = args.config or find_config_file(Path.cwd())
        if path is None:
            print(f"No {CONFIG_FILENAME} found (using defaults)", file=sys.stderr)
            return 1
        if not Path(path).is_file():
            print(f"Config file not found: {path}", file=sys.stderr)
            return 1
        print(path)
        return 0
    elif action == "init":
        return _init(args)
    else:
        print("Usage: arbor config <show|path|init>", file=sys.stderr)
        return 1


def _init(args: argparse.Namespace) -> int:
    target = Path.cwd() / CONFIG_FILENAME
    if target.exists() and not args.force:
        print(f"{target} already exists (use --force to overwrite)", file=sys.stderr)
        return 1
    target.write_text(render_default_config(), encoding="utf-8")
    print(f"Created {target}")
    return 0
