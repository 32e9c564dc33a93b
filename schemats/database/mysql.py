"""MySQL database introspector."""

import re
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import parse_qs, unquote, urlparse

from ..errors import DatabaseConnectionError, EnumConflictError
from .base import Database, Row, require
from .models import ColumnDefinition, EnumDefinition, TableDefinition
from .type_mappers import MysqlTypeMapper

ENUM_DATA_TYPES = ("enum", "set")

_ENUM_WRAPPER = re.compile(r"(^(enum|set)\('|'\)$)", re.IGNORECASE)


def parse_mysql_enumeration(column_type: str) -> List[str]:
    """Parse ``enum('a','b')`` / ``set('a','b')`` into ``['a', 'b']``."""
    return _ENUM_WRAPPER.sub("", column_type).split("','")


def enum_name_from_column(data_type: str, column_name: str) -> str:
    """Name given to the inline enumeration of a column, e.g. ``enum_status``."""
    return f"{data_type}_{column_name}"


class MysqlDatabase(Database):
    """Client for introspecting a MySQL catalog.

    MySQL has no named enum objects; every ``enum``/``set`` column defines
    its own label list, exposed here as ``<data_type>_<column_name>``.
    """

    DEFAULT_PORT = 3306
    FALLBACK_SCHEMA = "public"

    type_mapper = MysqlTypeMapper()

    def __init__(self, connection_string: str):
        super().__init__(connection_string)
        self._url = urlparse(connection_string)
        database = self._url.path.lstrip("/")
        self._default_schema = unquote(database) if database else self.FALLBACK_SCHEMA

    def connection_params(self) -> Dict[str, Any]:
        """PyMySQL keyword arguments parsed from the connection URL."""
        params: Dict[str, Any] = {
            "host": self._url.hostname or "localhost",
            "port": self._url.port or self.DEFAULT_PORT,
        }
        if self._url.username:
            params["user"] = unquote(self._url.username)
        if self._url.password:
            params["password"] = unquote(self._url.password)
        database = self._url.path.lstrip("/")
        if database:
            params["database"] = unquote(database)
        query = parse_qs(self._url.query)
        if "charset" in query:
            params["charset"] = query["charset"][-1]
        return params

    def connect(self):
        """Connect to MySQL."""
        self._check_open()
        if self._connection is not None:
            return self._connection

        try:
            import pymysql
        except ImportError:
            raise ImportError(
                "PyMySQL is required for MySQL connections. "
                "Install it with: pip install PyMySQL"
            )

        try:
            self._connection = pymysql.connect(
                cursorclass=pymysql.cursors.DictCursor,
                **self.connection_params(),
            )
        except pymysql.MySQLError as e:
            self._connection = None
            raise DatabaseConnectionError(
                f"Error connecting to MySQL: {e}",
                details={"dialect": "mysql", "host": self._url.hostname},
            ) from e
        return self._connection

    def _execute(self, sql: str, params: Sequence[Any]) -> List[Row]:
        cursor = self._connection.cursor()
        try:
            cursor.execute(sql, params or None)
            return list(cursor.fetchall())
        finally:
            cursor.close()

    def get_default_schema(self) -> str:
        return self._default_schema

    def get_enum_types(self, schema: Optional[str] = None) -> EnumDefinition:
        """Collect inline enum/set column definitions.

        Raises:
            EnumConflictError: If two columns yield the same enum name with
                different labels
        """
        params = []
        sql = (
            "SELECT column_name AS column_name, column_type AS column_type, data_type AS data_type "
            "FROM information_schema.columns "
            "WHERE data_type IN ('enum', 'set')"
        )
        if schema:
            sql += " AND table_schema = %s"
            params.append(schema)
        sql += " ORDER BY table_name, ordinal_position"

        enums: EnumDefinition = {}
        for row in self.query(sql, params):
            column_name, column_type, data_type = require(row, "column_name", "column_type", "data_type")
            enum_name = enum_name_from_column(data_type.lower(), column_name)
            values = parse_mysql_enumeration(column_type)

            existing = enums.get(enum_name)
            if existing is not None and existing != values:
                raise EnumConflictError(enum_name, column_name, existing, values)
            enums[enum_name] = values
        return enums

    def get_table_definition(self, table_name: str, table_schema: str) -> TableDefinition:
        rows = self.query(
            "SELECT column_name AS column_name, data_type AS data_type, "
            "column_type AS column_type, is_nullable AS is_nullable "
            "FROM information_schema.columns "
            "WHERE table_name = %s AND table_schema = %s "
            "ORDER BY ordinal_position",
            [table_name, table_schema],
        )

        table: TableDefinition = {}
        for row in rows:
            column_name, data_type, column_type, is_nullable = require(
                row, "column_name", "data_type", "column_type", "is_nullable"
            )
            data_type = data_type.lower()
            if data_type in ENUM_DATA_TYPES:
                sql_type = enum_name_from_column(data_type, column_name)
            else:
                sql_type = data_type
            table[column_name] = ColumnDefinition(
                sql_type=sql_type,
                column_type=column_type,
                nullable=(is_nullable == "YES"),
            )
        return table

    def get_schema_tables(self, schema_name: str) -> List[str]:
        rows = self.query(
            "SELECT table_name AS table_name "
            "FROM information_schema.tables "
            "WHERE table_schema = %s "
            "ORDER BY table_name",
            [schema_name],
        )
        return [require(row, "table_name")[0] for row in rows]
