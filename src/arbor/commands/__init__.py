"""
arbor.commands - CLI command implementations
"""

__all__ = [
    "config_cmd",
    "export",
    "levels",
    "show",
    "tree",
]
