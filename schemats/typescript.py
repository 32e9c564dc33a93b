"""TypeScript declaration generator for introspected tables."""

from typing import List

from .database.models import EnumDefinition, TableDefinition
from .options import NameTransformer

RESERVED_KEYWORDS = frozenset([
    # Reserved words
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with",
    # Strict mode reserved words
    "as", "implements", "interface", "let", "package", "private",
    "protected", "public", "static", "yield",
    # Contextual keywords
    "any", "boolean", "constructor", "declare", "get", "module", "require",
    "number", "set", "string", "symbol", "type", "from", "of",
])

RESERVED_SUFFIX = "_"

INDENT = "  "


def is_reserved_keyword(name: str) -> bool:
    return name in RESERVED_KEYWORDS


def normalize_name(name: str) -> str:
    """Escape identifiers that collide with TypeScript keywords."""
    if is_reserved_keyword(name):
        return name + RESERVED_SUFFIX
    return name


def quote(value: str) -> str:
    """Render a single-quoted TypeScript string literal."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


class TypeScriptGenerator:
    """Generates TypeScript declarations from typed table definitions.

    Each table yields an interface whose members reference type aliases in a
    ``<Table>Fields`` namespace. Keyword escaping goes through
    ``normalize_name`` in both places so the references resolve.
    """

    def __init__(self, transformer: NameTransformer):
        self.transformer = transformer

    def generate_table_interface(self, table_name: str, table: TableDefinition) -> str:
        """Generate ``export interface <Table>`` for a table."""
        type_name = self.transformer.transform_type_name(table_name)

        lines = [f"export interface {normalize_name(type_name)} {{"]
        for column_name_raw in table:
            column_name = self.transformer.transform_column_name(column_name_raw)
            lines.append(f"{INDENT}{column_name}: {type_name}Fields.{normalize_name(column_name)};")
        lines.append("}")
        return "\n".join(lines)

    def generate_table_types(self, table_name: str, table: TableDefinition) -> str:
        """Generate the ``<Table>Fields`` namespace with one alias per column."""
        type_name = self.transformer.transform_type_name(table_name)

        lines = [f"export namespace {type_name}Fields {{"]
        for column_name_raw, column in table.items():
            column_name = self.transformer.transform_column_name(column_name_raw)
            nullable = "| null" if column.nullable else ""
            lines.append(f"{INDENT}export type {normalize_name(column_name)} = {column.ts_type}{nullable};")
        lines.append("}")
        return "\n".join(lines)

    def generate_enum_types(self, enums: EnumDefinition) -> str:
        """Generate one string-literal union type per enumeration."""
        lines: List[str] = []
        for enum_name_raw, values in enums.items():
            enum_name = self.transformer.transform_type_name(enum_name_raw)
            union = " | ".join(quote(v) for v in values)
            lines.append(f"export type {enum_name} = {union};")
        return "\n".join(lines)

    def generate_table_meta(self, table_name: str, table: TableDefinition) -> str:
        """Generate a ``<Table>Meta`` constant describing the catalog types."""
        type_name = self.transformer.transform_type_name(table_name)

        lines = [f"export const {type_name}Meta = {{"]
        lines.append(f"{INDENT}tableName: {quote(table_name)},")
        lines.append(f"{INDENT}columns: {{")
        for column_name_raw, column in table.items():
            nullable = "true" if column.nullable else "false"
            lines.append(
                f"{INDENT * 2}{quote(column_name_raw)}: "
                f"{{ sqlType: {quote(column.sql_type)}, nullable: {nullable} }},"
            )
        lines.append(f"{INDENT}}},")
        lines.append("} as const;")
        return "\n".join(lines)
