"""
arbor.core.config - Settings consumed by the hierarchy index.

Provides HierarchyConfig dataclass describing which source columns hold
ids, labels and parent references, and how labels encode their path.
"""

from dataclasses import dataclass, field
from typing import Any

from arbor.core.errors import ConfigError


def _suffix_list(value: Any) -> list[str]:
    """Coerce an additional_columns setting to a list of suffixes.

    A single string (as set from an environment variable) is one suffix.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    raise ConfigError(
        f"additional_columns must be a string or a list of strings, got {type(value).__name__}"
    )


@dataclass
class HierarchyConfig:
    """
    Column mapping and policy for building a hierarchy.

    Attributes:
        id_column: Column holding the record id (default: "id")
        text_column: Column holding the label (default: "label")
        relationship_column: Column holding the parent id (default: "parent")
        text_separator: Separator between path segments in labels (default: "|")
        additional_columns: Extra column suffixes merged into each entry
        prefix_additional_columns: Look extra columns up as
            text_column + suffix rather than by the bare suffix (default: True)
        strict_cycles: Raise on cyclic parent chains instead of
            promoting a cycle member to root (default: False)
    """

    id_column: str = "id"
    text_column: str = "label"
    relationship_column: str = "parent"
    text_separator: str = "|"
    additional_columns: list[str] = field(default_factory=list)
    prefix_additional_columns: bool = True
    strict_cycles: bool = False

    def additional_column_key(self, suffix: str) -> str:
        """Return the source column name for an extra column suffix."""
        if self.prefix_additional_columns:
            return f"{self.text_column}{suffix}"
        return suffix

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HierarchyConfig":
        """
        Create HierarchyConfig from configuration dictionary.

        Args:
            data: Dictionary from [hierarchy] config section

        Returns:
            HierarchyConfig instance with values from data or defaults

        Raises:
            ConfigError: If additional_columns is neither a string nor a list
        """
        return cls(
            id_column=data.get("id_column", "id"),
            text_column=data.get("text_column", "label"),
            relationship_column=data.get("relationship_column", "parent"),
            text_separator=data.get("text_separator", "|"),
            additional_columns=_suffix_list(data.get("additional_columns", [])),
            prefix_additional_columns=data.get("prefix_additional_columns", True),
            strict_cycles=data.get("strict_cycles", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id_column": self.id_column,
            "text_column": self.text_column,
            "relationship_column": self.relationship_column,
            "text_separator": self.text_separator,
            "additional_columns": list(self.additional_columns),
            "prefix_additional_columns": self.prefix_additional_columns,
            "strict_cycles": self.strict_cycles,
        }
