"""
arbor.config - Configuration loading and defaults
"""

from arbor.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from arbor.config.loader import (
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    get_hierarchy_config,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
    render_default_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "get_hierarchy_config",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "render_default_config",
]
