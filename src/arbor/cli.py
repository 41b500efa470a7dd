"""
arbor.cli - Command-line interface.

Main entry point for the arbor CLI tool.
"""

import argparse
import logging
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from arbor import __version__
from arbor.commands import config_cmd, export, levels, show, tree


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="arbor",
        description="Build and query hierarchies from flat parent/child tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  arbor --source items.csv tree          # Indented forest
  arbor tree --format json               # Nested JSON
  arbor levels                           # Node count per level
  arbor levels --level 1                 # Nodes on level 1
  arbor show 42                          # One node with its path
  arbor export --format csv -o out.csv   # Flat export with levels

Configuration:
  arbor config init             # Create .arbor.toml in current directory
  arbor config path             # Show config file location
  arbor config show             # View all settings

For detailed command help: arbor <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"arbor {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--source",
        type=Path,
        help="CSV file with the records (overrides [source].path)",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # tree command
    tree_parser = subparsers.add_parser("tree", help="Print the hierarchy as an indented forest")
    tree_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    tree_parser.add_argument(
        "--ids",
        action="store_true",
        help="Show node ids next to names",
    )

    # levels command
    levels_parser = subparsers.add_parser("levels", help="Show nodes grouped by depth")
    levels_parser.add_argument(
        "--level",
        type=int,
        help="Only list the nodes of this level (0 = roots)",
        metavar="K",
    )
    levels_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # show command
    show_parser = subparsers.add_parser("show", help="Show one node by id")
    show_parser.add_argument("node_id", help="Node id (case-insensitive)", metavar="ID")
    show_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # export command
    export_parser = subparsers.add_parser("export", help="Export flat entries with levels")
    export_parser.add_argument(
        "--format",
        choices=["csv", "json"],
        default="csv",
        help="Output format (default: csv)",
    )
    export_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write to file instead of stdout",
        metavar="PATH",
    )

    # config command
    config_parser = subparsers.add_parser("config", help="Inspect or create configuration")
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("show", help="Print the effective configuration")
    config_subparsers.add_parser("path", help="Print the config file location")
    init_parser = config_subparsers.add_parser("init", help="Write a default .arbor.toml")
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing file",
    )

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Generate shell completion scripts",
    )
    completion_parser.add_argument(
        "--shell",
        choices=["bash", "zsh", "fish", "tcsh"],
        help="Shell to generate the script for",
    )

    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send library log records to stderr at a level set by -v/-q."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install arbor[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        if args.command == "tree":
            return tree.run(args)
        elif args.command == "levels":
            return levels.run(args)
        elif args.command == "show":
            return show.run(args)
        elif args.command == "export":
            return export.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        elif args.command == "completion":
            return completion_command(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


def completion_command(args: argparse.Namespace) -> int:
    """Handle completion command - generate shell completion scripts."""
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        print("Error: argcomplete not installed.", file=sys.stderr)
        print("Install with: pip install arbor[completion]", file=sys.stderr)
        return 1

    shell = args.shell

    if shell:
        cmd = ["register-python-argcomplete"]
        if shell in ("fish", "tcsh"):
            cmd.append(f"--shell={shell}")
        cmd.append("arbor")

        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            print("Error: register-python-argcomplete not found.", file=sys.stderr)
            print("Make sure argcomplete is properly installed.", file=sys.stderr)
            return 1
        if result.returncode != 0:
            print(f"Error generating completion script: {result.stderr}", file=sys.stderr)
            return 1
        print(result.stdout)
        return 0

    print("""
Shell Completion Setup for arbor
================================

Bash (add to ~/.bashrc):
  eval "$(register-python-argcomplete arbor)"

Zsh (add to ~/.zshrc):
  autoload -U bashcompinit
  bashcompinit
  eval "$(register-python-argcomplete arbor)"

Fish (add to ~/.config/fish/config.fish):
  register-python-argcomplete --shell fish arbor | source

Generate script for a specific shell:
  arbor completion --shell bash
""")
    return 0


if __name__ == "__main__":
    sys.exit(main())
