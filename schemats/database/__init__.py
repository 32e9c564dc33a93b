"""Database introspection module for schemats.

This module provides a dialect-independent catalog contract with
implementations for PostgreSQL and MySQL.
"""

from urllib.parse import urlparse

from ..errors import UnsupportedDatabaseError
from .models import ColumnDefinition, TableDefinition, EnumDefinition
from .base import Database
from .type_mappers import TypeMapper, PostgresTypeMapper, MysqlTypeMapper
from .postgres import PostgresDatabase
from .mysql import MysqlDatabase

DATABASES = {
    "postgres": PostgresDatabase,
    "postgresql": PostgresDatabase,
    "mysql": MysqlDatabase,
}


def get_database(connection_string: str) -> Database:
    """Create the introspector matching a connection string's scheme.

    The connection is not opened until the first query or ``connect()``.
    """
    scheme = urlparse(connection_string).scheme.lower()
    database_class = DATABASES.get(scheme)
    if database_class is None:
        raise UnsupportedDatabaseError(scheme)
    return database_class(connection_string)


__all__ = [
    # Data models
    "ColumnDefinition",
    "TableDefinition",
    "EnumDefinition",
    # Base classes
    "Database",
    # Type mappers
    "TypeMapper",
    "PostgresTypeMapper",
    "MysqlTypeMapper",
    # Introspectors
    "PostgresDatabase",
    "MysqlDatabase",
    "get_database",
]
