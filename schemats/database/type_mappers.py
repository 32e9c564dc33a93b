"""Database-specific type mapping strategies."""

import logging
from abc import ABC
from types import MappingProxyType
from typing import Collection, Dict, Iterable, Mapping

from ..options import NameTransformer
from .models import ColumnDefinition, TableDefinition

logger = logging.getLogger(__name__)


def _bucket(ts_type: str, sql_types: Iterable[str]) -> Dict[str, str]:
    return {sql_type: ts_type for sql_type in sql_types}


class TypeMapper(ABC):
    """Abstract base class for SQL type to TypeScript type mapping.

    Subclasses provide ``TYPE_MAP``. Types missing from it resolve to a
    custom type (enum) declaration when known, otherwise to ``any``.
    """

    TYPE_MAP: Mapping[str, str] = MappingProxyType({})
    ANY_TYPE = "any"

    def map_column(
        self,
        column: ColumnDefinition,
        custom_types: Collection[str],
        transformer: NameTransformer,
    ) -> str:
        """Return the TypeScript type for a column."""
        ts_type = self.TYPE_MAP.get(column.sql_type)
        if ts_type is not None:
            return ts_type
        if column.sql_type in custom_types:
            return transformer.transform_type_name(column.sql_type)
        logger.warning(
            "Type [%s] has been mapped to [%s] because no specific type has been found.",
            column.sql_type,
            self.ANY_TYPE,
        )
        return self.ANY_TYPE

    def map_table(
        self,
        table: TableDefinition,
        custom_types: Collection[str],
        transformer: NameTransformer,
    ) -> TableDefinition:
        """Return a new table definition with every column's ``ts_type`` set."""
        custom_types = frozenset(custom_types)
        return {
            name: column.with_ts_type(self.map_column(column, custom_types, transformer))
            for name, column in table.items()
        }


class PostgresTypeMapper(TypeMapper):
    """Type mapper for PostgreSQL ``udt_name`` values."""

    TYPE_MAP = MappingProxyType({
        **_bucket("string", [
            "bpchar", "char", "varchar", "text", "citext", "uuid", "bytea",
            "inet", "time", "timetz", "interval", "name",
        ]),
        **_bucket("number", [
            "int2", "int4", "int8", "float4", "float8", "numeric", "money", "oid",
        ]),
        "bool": "boolean",
        **_bucket("Object", ["json", "jsonb"]),
        **_bucket("Date", ["date", "timestamp", "timestamptz"]),
        # Array types are prefixed with an underscore in pg_type
        **_bucket("Array<number>", [
            "_int2", "_int4", "_int8", "_float4", "_float8", "_numeric", "_money",
        ]),
        "_bool": "Array<boolean>",
        **_bucket("Array<string>", ["_varchar", "_text", "_citext", "_uuid", "_bytea"]),
        **_bucket("Array<Object>", ["_json", "_jsonb"]),
        "_timestamptz": "Array<Date>",
    })


class MysqlTypeMapper(TypeMapper):
    """Type mapper for MySQL ``data_type`` values.

    Follows the mysqljs type conversions where sensible.
    """

    TYPE_MAP = MappingProxyType({
        # set and enum stay strings unless resolved to a custom type first
        **_bucket("string", [
            "char", "varchar", "text", "tinytext", "mediumtext", "longtext",
            "time", "geometry", "set", "enum",
        ]),
        **_bucket("number", [
            "integer", "int", "smallint", "mediumint", "bigint", "double",
            "decimal", "numeric", "float", "year", "tinyint",
        ]),
        "json": "Object",
        **_bucket("Date", ["date", "datetime", "timestamp"]),
        **_bucket("Buffer", [
            "tinyblob", "mediumblob", "longblob", "blob", "binary", "varbinary", "bit",
        ]),
    })

    BOOLEAN_COLUMN_TYPE = "tinyint(1)"

    def map_column(
        self,
        column: ColumnDefinition,
        custom_types: Collection[str],
        transformer: NameTransformer,
    ) -> str:
        if (
            column.sql_type == "tinyint"
            and column.column_type == self.BOOLEAN_COLUMN_TYPE
            and not column.nullable
        ):
            return "boolean"
        return super().map_column(column, custom_types, transformer)
