"""Error types for schemats."""

import json
from typing import Optional, Dict, Any, List


class SchematsError(Exception):
    """Base exception for schemats errors."""

    def __init__(self, message: str, code: str = "SCHEMATS_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured reporting."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class DatabaseConnectionError(SchematsError):
    """Cannot reach or authenticate to the database."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class CatalogQueryError(SchematsError):
    """A catalog query failed or returned rows of an unexpected shape."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CATALOG_QUERY_ERROR", details=details)


class ConfigError(SchematsError):
    """Config file or settings cannot be loaded."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIG_ERROR", details=details)


class UnsupportedDatabaseError(SchematsError):
    """Connection string names a database we have no introspector for."""

    def __init__(self, scheme: str):
        super().__init__(
            f"Unsupported database type: {scheme or '<none>'}",
            code="UNSUPPORTED_DATABASE",
            details={"scheme": scheme},
        )


class EnumConflictError(SchematsError):
    """Two enumerations synthesized under the same name disagree on labels."""

    def __init__(
        self,
        enum_name: str,
        column_name: str,
        existing: List[str],
        conflicting: List[str],
    ):
        message = (
            "Multiple enums with the same name and contradicting types were found: "
            f"{column_name}: {_json_list(existing)} and {_json_list(conflicting)}"
        )
        super().__init__(
            message,
            code="ENUM_CONFLICT",
            details={
                "enum_name": enum_name,
                "column_name": column_name,
                "existing": list(existing),
                "conflicting": list(conflicting),
            },
        )
        self.enum_name = enum_name
        self.column_name = column_name
        self.existing = list(existing)
        self.conflicting = list(conflicting)


def _json_list(values: List[str]) -> str:
    return json.dumps(list(values), separators=(",", ":"))
