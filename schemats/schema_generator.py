"""Schema-to-TypeScript generation.

Drives one generation run: resolve the schema and its tables, read the
schema's enumerations once, then fetch, map and render every table. Table
work runs on executor threads bounded by ``max_concurrency``; output keeps
the table-listing order regardless of completion order.
"""

import asyncio
import functools
import logging
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional, Sequence
from urllib.parse import urlparse, urlunparse

from .database import Database, TableDefinition, get_database
from .options import NameTransformer, Options
from .typescript import TypeScriptGenerator

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4

PASSWORD_MASK = "***"


def get_package_version() -> str:
    """Get the installed schemats version."""
    try:
        return version("schemats")
    except PackageNotFoundError:
        return "unknown"


def mask_connection_string(connection_string: str) -> str:
    """Replace the password of a connection URL with ``***``."""
    url = urlparse(connection_string)
    if not url.password:
        return connection_string
    userinfo, host = url.netloc.rsplit("@", 1)
    username = userinfo.split(":", 1)[0]
    return urlunparse(url._replace(netloc=f"{username}:{PASSWORD_MASK}@{host}"))


def build_header(
    connection_string: str,
    tables: Sequence[str],
    schema: str,
    options: Options,
    generated_at: Optional[datetime] = None,
) -> str:
    """Build the comment block written at the top of generated files."""
    generated_at = generated_at or datetime.now(timezone.utc)

    command = ["schemats", "generate", "-c", mask_connection_string(connection_string)]
    for table in tables:
        command.extend(["-t", table])
    command.extend(["-s", schema])
    if options.camel_case:
        command.append("-C")
    if options.singular_table_names:
        command.append("--singular")
    if options.meta:
        command.append("-m")

    return "\n".join([
        "/**",
        f" * AUTO-GENERATED FILE @ {generated_at:%Y-%m-%d %H:%M:%S} - DO NOT EDIT!",
        " *",
        f" * This file was automatically generated by schemats v.{get_package_version()}",
        f" * $ {' '.join(command)}",
        " *",
        " */",
    ])


def render_table(
    generator: TypeScriptGenerator,
    table_name: str,
    table: TableDefinition,
    options: Options,
) -> str:
    """Render the field namespace, interface and optional meta for one table."""
    blocks = [
        generator.generate_table_types(table_name, table),
        generator.generate_table_interface(table_name, table),
    ]
    if options.meta:
        blocks.append(generator.generate_table_meta(table_name, table))
    return "\n\n".join(blocks)


async def typescript_of_schema(
    db: Database,
    tables: Optional[Sequence[str]] = None,
    schema: Optional[str] = None,
    options: Optional[Options] = None,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> str:
    """Generate TypeScript declarations for tables of a schema.

    Args:
        db: Catalog source, already configured for the target database
        tables: Tables to generate (default: every table in the schema)
        schema: Schema name (default: ``db.get_default_schema()``)
        options: Naming and output options
        max_concurrency: Maximum number of tables processed at once

    Returns:
        The complete declaration text
    """
    options = options or Options()
    transformer = NameTransformer(options)
    generator = TypeScriptGenerator(transformer)
    loop = asyncio.get_running_loop()

    schema = schema or db.get_default_schema()
    if not tables:
        tables = await loop.run_in_executor(None, db.get_schema_tables, schema)
    tables = list(tables)
    logger.info("Generating declarations for %d table(s) in schema %s", len(tables), schema)

    # Enum names must be known before any column is mapped
    enums = await loop.run_in_executor(None, db.get_enum_types, schema)
    custom_types = frozenset(enums)

    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def table_declarations(table_name: str) -> str:
        async with semaphore:
            table = await loop.run_in_executor(
                None,
                functools.partial(db.get_table_types, table_name, schema, transformer, custom_types),
            )
        logger.debug("Mapped %d column(s) of %s", len(table), table_name)
        return render_table(generator, table_name, table, options)

    # Let every table settle before failing so no worker outlives the run
    results = await asyncio.gather(*(table_declarations(t) for t in tables), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    fragments: List[str] = list(results)

    sections = []
    if options.write_header:
        sections.append(build_header(db.connection_string, tables, schema, options))
    sections.extend(fragments)
    enum_types = generator.generate_enum_types(enums)
    if enum_types:
        sections.append(enum_types)
    return "\n\n".join(sections) + "\n"


async def generate(
    connection_string: str,
    tables: Optional[Sequence[str]] = None,
    schema: Optional[str] = None,
    options: Optional[Options] = None,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> str:
    """Connect to a database and generate its TypeScript declarations.

    Raises:
        UnsupportedDatabaseError: If the connection string scheme is unknown
        DatabaseConnectionError: If the database cannot be reached
        CatalogQueryError: If a catalog query fails
        EnumConflictError: If two inline enumerations clash
    """
    db = get_database(connection_string)
    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, db.connect)
        return await typescript_of_schema(
            db,
            tables=tables,
            schema=schema,
            options=options,
            max_concurrency=max_concurrency,
        )
    finally:
        db.close()
