"""Abstract base class for database introspection."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Collection, Dict, List, Optional, Sequence

from ..errors import CatalogQueryError, DatabaseConnectionError
from ..options import NameTransformer
from .models import EnumDefinition, TableDefinition
from .type_mappers import TypeMapper

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


class Database(ABC):
    """Abstract base class for catalog introspection.

    Subclasses provide the driver connection and the dialect-specific
    catalog queries; ``get_table_types`` is shared. A single connection is
    owned per instance and queries on it are serialized.
    """

    # Override in subclasses with the dialect's type mapper
    type_mapper: TypeMapper

    def __init__(self, connection_string: str):
        self.connection_string = connection_string
        self._connection = None
        self._lock = threading.Lock()
        self._closed = False

    @abstractmethod
    def connect(self):
        """Establish the connection to the database.

        Raises:
            DatabaseConnectionError: If the database cannot be reached
        """
        pass

    @abstractmethod
    def _execute(self, sql: str, params: Sequence[Any]) -> List[Row]:
        """Run a query on the open connection and return rows as dicts."""
        pass

    @abstractmethod
    def get_default_schema(self) -> str:
        """Schema used when none is given explicitly."""
        pass

    @abstractmethod
    def get_enum_types(self, schema: Optional[str] = None) -> EnumDefinition:
        """Get every enumeration visible in the catalog.

        Args:
            schema: Optional schema to restrict the lookup to

        Returns:
            Mapping of enum name to its ordered labels
        """
        pass

    @abstractmethod
    def get_table_definition(self, table_name: str, table_schema: str) -> TableDefinition:
        """Get the raw (unmapped) column metadata for a table.

        Args:
            table_name: Table name
            table_schema: Schema name

        Returns:
            Column name to ColumnDefinition, in catalog order
        """
        pass

    @abstractmethod
    def get_schema_tables(self, schema_name: str) -> List[str]:
        """Get all table names in a schema, ordered by name."""
        pass

    def close(self):
        """Close the database connection.

        Waits for an in-flight query. A closed source never reconnects.
        """
        with self._lock:
            self._closed = True
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    def _check_open(self):
        if self._closed:
            raise DatabaseConnectionError(
                "Connection has already been closed",
                details={"scheme": self.connection_string.split(":", 1)[0]},
            )

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> List[Row]:
        """Execute a catalog query.

        Raises:
            CatalogQueryError: If the driver rejects the query
            DatabaseConnectionError: If the source has been closed
        """
        logger.debug("Catalog query: %s %s", sql, list(params or []))
        with self._lock:
            self._check_open()
            self.connect()
            try:
                rows = self._execute(sql, list(params or []))
            except CatalogQueryError:
                raise
            except Exception as e:
                raise CatalogQueryError(
                    f"Catalog query failed: {e}",
                    details={"sql": sql, "params": list(params or [])},
                ) from e
        return [_decode_row(row) for row in rows]

    def get_table_types(
        self,
        table_name: str,
        table_schema: str,
        transformer: NameTransformer,
        custom_types: Optional[Collection[str]] = None,
    ) -> TableDefinition:
        """Get a table definition with TypeScript types resolved.

        Args:
            table_name: Table name
            table_schema: Schema name
            transformer: Naming used for custom type references
            custom_types: Known enum names; fetched from the schema when omitted

        Returns:
            TableDefinition with every column mapped
        """
        if custom_types is None:
            custom_types = list(self.get_enum_types(table_schema))
        table = self.get_table_definition(table_name, table_schema)
        return self.type_mapper.map_table(table, custom_types, transformer)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def require(row: Row, *keys: str) -> List[Any]:
    """Return the values of ``keys`` from a catalog row.

    Raises:
        CatalogQueryError: If a key is missing from the row
    """
    missing = [key for key in keys if key not in row]
    if missing:
        raise CatalogQueryError(
            f"Malformed catalog row, missing {', '.join(missing)}",
            details={"row": {k: str(v) for k, v in row.items()}, "missing": missing},
        )
    return [row[key] for key in keys]


def _decode_row(row: Row) -> Row:
    # MySQL 8 may hand back information_schema text as bytes
    return {
        key: value.decode("utf-8") if isinstance(value, (bytes, bytearray)) else value
        for key, value in dict(row).items()
    }
