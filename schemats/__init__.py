"""schemats - TypeScript declarations from SQL database schemas."""

from .errors import (
    SchematsError,
    ConfigError,
    DatabaseConnectionError,
    CatalogQueryError,
    EnumConflictError,
    UnsupportedDatabaseError,
)
from .options import Options, NameTransformer
from .schema_generator import generate, typescript_of_schema

__all__ = [
    "SchematsError",
    "ConfigError",
    "DatabaseConnectionError",
    "CatalogQueryError",
    "EnumConflictError",
    "UnsupportedDatabaseError",
    "Options",
    "NameTransformer",
    "generate",
    "typescript_of_schema",
]
