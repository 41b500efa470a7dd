"""
arbor.config.defaults - Built-in configuration values.
"""

CONFIG_FILENAME = ".arbor.toml"

ENV_PREFIX = "ARBOR_"

DEFAULT_CONFIG = {
    "hierarchy": {
        "id_column": "id",
        "text_column": "label",
        "relationship_column": "parent",
        "text_separator": "|",
        "additional_columns": [],
        "prefix_additional_columns": True,
        "strict_cycles": False,
    },
    "source": {
        "path": "",
        "delimiter": ",",
        "encoding": "utf-8-sig",
    },
}
