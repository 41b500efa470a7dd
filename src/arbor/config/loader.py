"""
arbor.config.loader - Locate, parse and merge configuration files.

Configuration lives in a `.arbor.toml` file discovered by walking up
from the working directory. File values are merged over DEFAULT_CONFIG
and can be overridden by ARBOR_<SECTION>_<KEY> environment variables.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit
from tomlkit.exceptions import TOMLKitError

from arbor.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX
from arbor.core.config import HierarchyConfig
from arbor.core.errors import ConfigError


def parse_toml(content: str) -> Dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Args:
        content: TOML document text

    Returns:
        Nested dict with plain str/int/bool/list values

    Raises:
        ConfigError: If the text is not valid TOML
    """
    return parse_toml_document(content).unwrap()


def parse_toml_document(content: str) -> tomlkit.TOMLDocument:
    """Parse TOML text keeping comments and layout for round-trips."""
    try:
        return tomlkit.parse(content)
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest config file at or above a directory.

    Args:
        start_dir: Directory to start from (default: current directory)

    Returns:
        Path to the config file, or None if not found
    """
    current = Path(start_dir or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two config dicts.

    Nested dicts are merged key by key; any other override value
    replaces the base value. Neither input is modified.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable value.

    JSON arrays and objects are decoded, 'true'/'false' become booleans,
    anything else (including malformed JSON) is returned unchanged.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply ARBOR_<SECTION>_<KEY> environment variables in place.

    ARBOR_HIERARCHY_TEXT_SEPARATOR=/ sets config["hierarchy"]["text_separator"].
    Missing sections are created.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        rest = name[len(ENV_PREFIX):].lower()
        if "_" not in rest:
            continue
        section, key = rest.split("_", 1)
        if not section or not key:
            continue
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = _try_parse_env_value(raw)
    return config


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load a config file merged over the defaults.

    Args:
        config_path: Path to a `.arbor.toml` file

    Returns:
        Complete configuration dict

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        content = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e

    user_config = parse_toml(content)
    config = merge_configs(DEFAULT_CONFIG, user_config)
    return _apply_env_overrides(config)


def get_config(
    config_path: Optional[Path] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Resolve the effective configuration.

    Uses the explicit path if given, otherwise the nearest discovered
    config file, otherwise the defaults. Environment overrides always
    apply.
    """
    if config_path is None:
        config_path = find_config_file(start_dir)
    if config_path is None:
        return _apply_env_overrides(copy.deepcopy(DEFAULT_CONFIG))
    return load_config(config_path)


def get_hierarchy_config(config: Dict[str, Any]) -> HierarchyConfig:
    """Build a HierarchyConfig from the [hierarchy] section."""
    return HierarchyConfig.from_dict(config.get("hierarchy", {}))


def render_default_config() -> str:
    """Render DEFAULT_CONFIG as a commented TOML document."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("arbor configuration"))
    doc.add(tomlkit.nl())

    for section, values in DEFAULT_CONFIG.items():
        table = tomlkit.table()
        for key, value in values.items():
            if isinstance(value, list):
                array = tomlkit.array()
                array.extend(value)
                table.add(key, array)
            else:
                table.add(key, value)
        doc.add(section, table)

    return tomlkit.dumps(doc)
