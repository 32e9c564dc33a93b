"""PostgreSQL database introspector."""

from typing import Any, List, Optional, Sequence

from ..errors import DatabaseConnectionError
from .base import Database, Row, require
from .models import ColumnDefinition, EnumDefinition, TableDefinition
from .type_mappers import PostgresTypeMapper


class PostgresDatabase(Database):
    """Client for introspecting a PostgreSQL catalog.

    Enumerations are first-class ``pg_enum`` types, so columns already carry
    the enum's type name in ``udt_name``.
    """

    DEFAULT_SCHEMA = "public"

    type_mapper = PostgresTypeMapper()

    def connect(self):
        """Connect to PostgreSQL using the connection string as DSN."""
        self._check_open()
        if self._connection is not None:
            return self._connection

        try:
            import psycopg2
        except ImportError:
            raise ImportError(
                "psycopg2 is required for PostgreSQL connections. "
                "Install it with: pip install psycopg2-binary"
            )

        try:
            self._connection = psycopg2.connect(self.connection_string)
            self._connection.set_session(readonly=True, autocommit=True)
        except psycopg2.Error as e:
            self._connection = None
            raise DatabaseConnectionError(
                f"Error connecting to PostgreSQL: {e}",
                details={"dialect": "postgres"},
            ) from e
        return self._connection

    def _execute(self, sql: str, params: Sequence[Any]) -> List[Row]:
        from psycopg2.extras import RealDictCursor

        cursor = self._connection.cursor(cursor_factory=RealDictCursor)
        try:
            cursor.execute(sql, params or None)
            return cursor.fetchall()
        finally:
            cursor.close()

    def get_default_schema(self) -> str:
        return self.DEFAULT_SCHEMA

    def get_enum_types(self, schema: Optional[str] = None) -> EnumDefinition:
        """Get pg_enum types grouped by type name, labels sorted ascending."""
        params = []
        where = ""
        if schema:
            where = "WHERE n.nspname = %s"
            params.append(schema)

        rows = self.query(f"""
            SELECT n.nspname AS schema, t.typname AS name, e.enumlabel AS value
            FROM pg_type t
            JOIN pg_enum e ON t.oid = e.enumtypid
            JOIN pg_catalog.pg_namespace n ON n.oid = t.typnamespace
            {where}
            ORDER BY t.typname ASC, e.enumlabel ASC
        """, params)

        enums: EnumDefinition = {}
        for row in rows:
            name, value = require(row, "name", "value")
            enums.setdefault(name, []).append(value)
        return enums

    def get_table_definition(self, table_name: str, table_schema: str) -> TableDefinition:
        rows = self.query("""
            SELECT column_name, udt_name, is_nullable
            FROM information_schema.columns
            WHERE table_name = %s AND table_schema = %s
            ORDER BY ordinal_position
        """, [table_name, table_schema])

        table: TableDefinition = {}
        for row in rows:
            column_name, udt_name, is_nullable = require(row, "column_name", "udt_name", "is_nullable")
            table[column_name] = ColumnDefinition(
                sql_type=udt_name,
                column_type="",
                nullable=(is_nullable == "YES"),
            )
        return table

    def get_schema_tables(self, schema_name: str) -> List[str]:
        rows = self.query("""
            SELECT table_name
            FROM information_schema.columns
            WHERE table_schema = %s
            GROUP BY table_name
            ORDER BY table_name
        """, [schema_name])
        return [require(row, "table_name")[0] for row in rows]
