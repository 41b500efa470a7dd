"""Index Factory - Shared utility for building a HierarchyIndex from config.

Commands use this single entry point instead of opening sources and
reading configuration on their own.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from arbor.config import find_config_file, get_config, get_hierarchy_config
from arbor.core.errors import ConfigError
from arbor.core.hierarchy import HierarchyIndex
from arbor.core.sources import CsvSource


def resolve_source_path(
    config: dict[str, Any],
    source_path: Path | None = None,
    config_path: Path | None = None,
) -> Path:
    """Work out which CSV file to read.

    An explicit source path wins. Otherwise [source].path is used,
    resolved relative to the config file's directory when relative.

    Raises:
        ConfigError: If no source path is configured
    """
    if source_path is not None:
        return Path(source_path)

    configured = config.get("source", {}).get("path", "")
    if not configured:
        raise ConfigError("No record source configured (use --source or [source].path)")

    path = Path(configured)
    if not path.is_absolute() and config_path is not None:
        path = Path(config_path).resolve().parent / path
    return path


def build_index(
    config: dict[str, Any] | None = None,
    source_path: Path | None = None,
    config_path: Path | None = None,
    eager: bool = True,
) -> HierarchyIndex:
    """Build a HierarchyIndex over a CSV source.

    Args:
        config: Configuration dict (loaded from config_path or discovered if None)
        source_path: CSV file overriding [source].path
        config_path: Explicit config file path
        eager: Derive all views before returning

    Returns:
        The HierarchyIndex

    Raises:
        ConfigError: If the source is not configured or cannot be read
        MissingColumnError: If a configured column is absent (eager only)
    """
    if config is None:
        if config_path is None:
            config_path = find_config_file()
        config = get_config(config_path)

    path = resolve_source_path(config, source_path, config_path)
    source_config = config.get("source", {})
    try:
        source = CsvSource(
            path,
            delimiter=source_config.get("delimiter", ","),
            encoding=source_config.get("encoding", "utf-8-sig"),
        )
    except OSError as e:
        raise ConfigError(f"Cannot read record source {path}: {e}") from e

    return HierarchyIndex(source, get_hierarchy_config(config), eager=eager)


def index_from_args(args: Any) -> HierarchyIndex:
    """Build an index from the global CLI options (--config, --source)."""
    return build_index(
        source_path=getattr(args, "source", None),
        config_path=getattr(args, "config", None),
    )
