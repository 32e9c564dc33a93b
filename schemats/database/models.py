"""Catalog metadata models for schema introspection."""

from dataclasses import dataclass, replace
from typing import Dict, List


@dataclass(frozen=True)
class ColumnDefinition:
    """Represents a database column as read from the catalog.

    ``sql_type`` is the lower-cased catalog type (or the synthesized enum name
    for inline enumerations). ``column_type`` carries the full MySQL column
    type and is empty for PostgreSQL. ``ts_type`` is filled by a TypeMapper.
    """
    sql_type: str
    column_type: str = ""
    nullable: bool = True
    ts_type: str = ""

    @property
    def is_mapped(self) -> bool:
        return bool(self.ts_type)

    def with_ts_type(self, ts_type: str) -> "ColumnDefinition":
        """Return a copy of this column carrying its TypeScript type."""
        if self.is_mapped:
            raise ValueError(f"Column of type [{self.sql_type}] is already mapped to [{self.ts_type}]")
        if not ts_type:
            raise ValueError(f"Empty TypeScript type for column of type [{self.sql_type}]")
        return replace(self, ts_type=ts_type)


# Column name (catalog-exact) -> column, in catalog order
TableDefinition = Dict[str, ColumnDefinition]

# Enum name -> labels, in emission order
EnumDefinition = Dict[str, List[str]]
