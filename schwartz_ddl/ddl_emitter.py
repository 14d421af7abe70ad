"""Emit DDL SQL for a schema graph in a target dialect.

Each table of the graph is translated into SQLAlchemy Core schema objects in
a fresh MetaData, then compiled with the dialect's DDL compiler. No engine is
created and no database is contacted; the dialect object only decides type
spellings and statement syntax.

Script layout, per table in graph order:
    CREATE TABLE ... (columns, PRIMARY KEY, CONSTRAINT FK_... FOREIGN KEY);
    CREATE INDEX ...;

Usage:
    from schwartz_ddl.ddl_emitter import emit, render
    sql_text = render(graph, "postgresql")
    emit(graph, "oracle", Path("quartz_oracle.sql"))
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column as SAColumn,
    ForeignKeyConstraint,
    Index as SAIndex,
    Integer,
    LargeBinary,
    MetaData,
    Numeric,
    PrimaryKeyConstraint,
    SmallInteger,
    String,
    Table as SATable,
)
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import CreateIndex, CreateTable, DropTable
from sqlalchemy.sql.elements import quoted_name
from sqlalchemy.types import TypeEngine

from schwartz_ddl.dialects import get_sqlalchemy_dialect
from schwartz_ddl.schema_builder import Column, SchemaGraph, Table
from schwartz_ddl.schema_spec import ColumnType

STATEMENT_DELIMITER = ";"


# =============================================================================
# Type mapping
# =============================================================================


def column_type(column: Column) -> TypeEngine:
    """Map a built column to its SQLAlchemy type.

    STRING -> variable-length character of the column length
    BLOB -> binary large object
    BOOLEAN -> boolean (no CHECK constraint on dialects without one)
    INTEGER / BIGINT / SMALLINT -> 32 / 64 / 16-bit integers
    DECIMAL -> exact numeric of the column precision and scale
    """
    if column.type is ColumnType.STRING:
        return String(column.length)
    if column.type is ColumnType.DECIMAL:
        return Numeric(column.precision, column.scale)
    if column.type is ColumnType.BLOB:
        return LargeBinary()
    if column.type is ColumnType.BOOLEAN:
        return Boolean(create_constraint=False)
    if column.type is ColumnType.INTEGER:
        return Integer()
    if column.type is ColumnType.BIGINT:
        return BigInteger()
    if column.type is ColumnType.SMALLINT:
        return SmallInteger()
    raise ValueError(f"Unknown column type: {column.type!r}")


def _name(value: str, dialect: Optional[Dialect] = None) -> quoted_name:
    # Unquoted identifiers, so each database applies its own case folding;
    # words the target dialect reserves are quoted as written
    if dialect is not None and value.lower() in dialect.identifier_preparer.reserved_words:
        return quoted_name(value, quote=True)
    return quoted_name(value, quote=False)


# =============================================================================
# Graph -> SQLAlchemy metadata
# =============================================================================


def to_sqlalchemy_table(
    table: Table, metadata: MetaData, dialect: Optional[Dialect] = None
) -> SATable:
    """Translate one graph table into a SQLAlchemy Table on metadata.

    Referenced tables must already be on metadata. With dialect, names that
    are reserved words there get quoted.
    """
    columns = [
        SAColumn(_name(col.name, dialect), column_type(col), nullable=col.nullable)
        for col in table.columns
    ]
    constraints = [
        PrimaryKeyConstraint(*[_name(col.name, dialect) for col in table.primary_key_columns])
    ]

    fk = table.foreign_key
    if fk is not None:
        referenced = metadata.tables[fk.referenced_table]
        constraints.append(
            ForeignKeyConstraint(
                [_name(col.name, dialect) for col in fk.local_columns],
                [referenced.c[col.name] for col in fk.referenced_columns],
                name=_name(fk.name, dialect),
            )
        )

    sa_table = SATable(_name(table.name, dialect), metadata, *columns, *constraints)

    for index in table.indexes:
        SAIndex(_name(index.name, dialect), *[sa_table.c[col.name] for col in index.columns])

    return sa_table


def to_metadata(
    graph: SchemaGraph, dialect: Optional[Dialect] = None
) -> tuple[MetaData, list[SATable]]:
    """Translate the whole graph, keeping graph order."""
    metadata = MetaData()
    sa_tables = [to_sqlalchemy_table(table, metadata, dialect) for table in graph.values()]
    return metadata, sa_tables


# =============================================================================
# Rendering
# =============================================================================


def _statement(ddl, dialect: Dialect) -> str:
    return str(ddl.compile(dialect=dialect)).strip() + STATEMENT_DELIMITER


def table_statements(table: Table, sa_table: SATable, dialect: Dialect) -> list[str]:
    """CREATE TABLE plus CREATE INDEX statements for one table."""
    statements = [_statement(CreateTable(sa_table), dialect)]
    # SATable.indexes is a set; follow the graph's index order instead
    sa_indexes = {index.name: index for index in sa_table.indexes}
    for index in table.indexes:
        statements.append(_statement(CreateIndex(sa_indexes[index.name]), dialect))
    return statements


def render(graph: SchemaGraph, dialect: str, include_drops: bool = False) -> str:
    """Render the DDL script for graph in dialect.

    Args:
        graph: Schema graph from schema_builder.build()
        dialect: Dialect selector (canonical name, alias, URL or Hibernate name)
        include_drops: Prepend DROP TABLE statements, children first

    Returns:
        The complete script text; identical input gives identical output

    Raises:
        DialectUnsupportedError: If dialect is not supported
    """
    sa_dialect = get_sqlalchemy_dialect(dialect)
    _, sa_tables = to_metadata(graph, sa_dialect)

    statements: list[str] = []
    if include_drops:
        for sa_table in reversed(sa_tables):
            statements.append(_statement(DropTable(sa_table), sa_dialect))

    for table, sa_table in zip(graph.values(), sa_tables):
        statements.extend(table_statements(table, sa_table, sa_dialect))

    return "\n\n".join(statements) + "\n"


def emit(
    graph: SchemaGraph,
    dialect: str,
    destination: Union[str, Path],
    include_drops: bool = False,
) -> Path:
    """Render the DDL script and write it to destination.

    Existing content is overwritten; missing parent directories are created.

    Returns:
        Path of the written script

    Raises:
        DialectUnsupportedError: If dialect is not supported
        OSError: If destination cannot be written
    """
    return write_script(render(graph, dialect, include_drops=include_drops), destination)


def write_script(sql_text: str, destination: Union[str, Path]) -> Path:
    """Write an already rendered script, overwriting destination."""
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as handle:
        handle.write(sql_text)

    return path
