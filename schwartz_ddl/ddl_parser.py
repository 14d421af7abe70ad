"""Parse emitted DDL scripts back and verify them against a schema graph.

This module reads a generated script with sqlglot, in the dialect it was
emitted for, and compares what it declares with the schema graph it was
rendered from. It is the self-check behind `schwartz-ddl --verify`.

Features:
- Type normalization to column type families for cross-dialect comparison
- DDL parsing for CREATE TABLE (columns, PRIMARY KEY, FOREIGN KEY) and
  CREATE INDEX
- Dataclasses for representing parsed tables
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

import sqlglot
from sqlglot import exp

from schwartz_ddl.dialects import sqlglot_dialect
from schwartz_ddl.schema_builder import SchemaGraph, Table
from schwartz_ddl.schema_spec import ColumnType


# =============================================================================
# Dataclasses for parsed DDL
# =============================================================================


@dataclass
class ForeignKeyReference:
    """Represents a FOREIGN KEY constraint from DDL."""

    columns: list[str]  # Local column names
    referenced_table: str
    referenced_columns: list[str]

    def __post_init__(self):
        self.columns = [col.upper() for col in self.columns]
        self.referenced_table = self.referenced_table.upper()
        self.referenced_columns = [col.upper() for col in self.referenced_columns]


@dataclass
class ParsedColumn:
    name: str
    type_family: str  # Normalized type (e.g., STRING, BIGINT, DECIMAL)
    raw_type: str  # Type as written in the script
    is_nullable: bool = True

    def __post_init__(self):
        self.name = self.name.upper()


@dataclass
class ParsedTable:
    """Complete table declaration read back from a DDL script."""

    name: str
    columns: dict[str, ParsedColumn] = field(default_factory=dict)
    primary_keys: list[str] = field(default_factory=list)
    foreign_keys: list[ForeignKeyReference] = field(default_factory=list)
    indexes: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self):
        self.name = self.name.upper()


# =============================================================================
# Type normalization
# =============================================================================

TYPE_FAMILIES = {
    # Character types
    "VARCHAR": "STRING",
    "NVARCHAR": "STRING",
    "VARCHAR2": "STRING",
    "NVARCHAR2": "STRING",
    "CHAR": "STRING",
    "NCHAR": "STRING",
    "TEXT": "STRING",
    # Binary types
    "VARBINARY": "BLOB",
    "BINARY": "BLOB",
    "BLOB": "BLOB",
    "TINYBLOB": "BLOB",
    "MEDIUMBLOB": "BLOB",
    "LONGBLOB": "BLOB",
    "BYTEA": "BLOB",
    "IMAGE": "BLOB",
    # Boolean types
    "BOOLEAN": "BOOLEAN",
    "BOOL": "BOOLEAN",
    "BIT": "BOOLEAN",
    # Integer types
    "INT": "INTEGER",
    "INTEGER": "INTEGER",
    "BIGINT": "BIGINT",
    "SMALLINT": "SMALLINT",
    "TINYINT": "SMALLINT",
    # Exact numeric types
    "DECIMAL": "DECIMAL",
    "NUMERIC": "DECIMAL",
    "NUMBER": "DECIMAL",
}

# Families a column type may read back as. Dialects without a native type
# fall back to a wider one (Oracle stores BIGINT as NUMBER(19) and BOOLEAN
# as SMALLINT).
ACCEPTED_FAMILIES = {
    ColumnType.STRING: {"STRING"},
    ColumnType.BLOB: {"BLOB"},
    ColumnType.BOOLEAN: {"BOOLEAN", "SMALLINT"},
    ColumnType.INTEGER: {"INTEGER", "DECIMAL"},
    ColumnType.BIGINT: {"BIGINT", "DECIMAL"},
    ColumnType.SMALLINT: {"SMALLINT"},
    ColumnType.DECIMAL: {"DECIMAL"},
}


def normalize_type(dtype: exp.DataType | str | None) -> str:
    """Normalize a data type to its column type family.

    Args:
        dtype: A sqlglot DataType, a type string, or None

    Returns:
        Family name (e.g. "STRING", "BLOB", "DECIMAL"), the bare type name
        when it has no family, or "UNKNOWN"
    """
    if dtype is None:
        return "UNKNOWN"

    if isinstance(dtype, exp.DataType) and isinstance(dtype.this, exp.DataType.Type):
        base = dtype.this.name
    else:
        # VARCHAR(255) -> VARCHAR, DECIMAL(10,2) -> DECIMAL
        base = str(dtype).upper().split("(")[0].strip()

    return TYPE_FAMILIES.get(base, base)


# =============================================================================
# DDL parsing helper functions
# =============================================================================


def _identifier_names(nodes: Iterable[exp.Expression]) -> list[str]:
    """Names of identifier-like nodes (Identifier, Column, Ordered column)."""
    names = []
    for node in nodes:
        identifier = node if isinstance(node, exp.Identifier) else node.find(exp.Identifier)
        if identifier is not None:
            names.append(identifier.name.upper())
    return names


def _is_nullable(col_expr: exp.ColumnDef) -> bool:
    """A column is nullable unless it carries a NOT NULL constraint."""
    for constraint in col_expr.args.get("constraints") or []:
        kind = constraint.args.get("kind") if isinstance(constraint, exp.ColumnConstraint) else constraint
        if isinstance(kind, exp.NotNullColumnConstraint) and not kind.args.get("allow_null"):
            return False
    return True


def _parse_foreign_key(fk: exp.ForeignKey) -> Optional[ForeignKeyReference]:
    reference = fk.args.get("reference")
    if reference is None:
        return None
    ref_table = reference.find(exp.Table)
    if ref_table is None:
        return None
    ref_columns = reference.this.expressions if isinstance(reference.this, exp.Schema) else []
    return ForeignKeyReference(
        columns=_identifier_names(fk.expressions),
        referenced_table=ref_table.name,
        referenced_columns=_identifier_names(ref_columns),
    )


def _parse_create_table(schema_node: exp.Schema) -> ParsedTable:
    table = ParsedTable(name=schema_node.this.name)

    for col_expr in schema_node.expressions:
        if isinstance(col_expr, exp.ColumnDef):
            kind = col_expr.args.get("kind")
            column = ParsedColumn(
                name=col_expr.name,
                type_family=normalize_type(kind),
                raw_type=kind.sql() if kind is not None else "",
                is_nullable=_is_nullable(col_expr),
            )
            table.columns[column.name] = column

    for pk in schema_node.find_all(exp.PrimaryKey):
        table.primary_keys = _identifier_names(pk.expressions)

    for fk in schema_node.find_all(exp.ForeignKey):
        reference = _parse_foreign_key(fk)
        if reference is not None:
            table.foreign_keys.append(reference)

    return table


# =============================================================================
# DDL parsing main functions
# =============================================================================


def parse_ddl_script(sql_text: str, dialect: str) -> dict[str, ParsedTable]:
    """Parse CREATE TABLE and CREATE INDEX statements of a script.

    Args:
        sql_text: The script text
        dialect: Dialect the script was emitted for

    Returns:
        Dictionary mapping uppercase table names to ParsedTable objects, in
        script order

    Raises:
        DialectUnsupportedError: If dialect is not supported
        sqlglot.errors.ParseError: If the script cannot be parsed
    """
    tables: dict[str, ParsedTable] = {}

    for statement in sqlglot.parse(sql_text, read=sqlglot_dialect(dialect)):
        if not isinstance(statement, exp.Create):
            continue
        kind = (statement.args.get("kind") or "").upper()

        if kind == "TABLE" and isinstance(statement.this, exp.Schema):
            table = _parse_create_table(statement.this)
            tables[table.name] = table

        elif kind == "INDEX" and isinstance(statement.this, exp.Index):
            index = statement.this
            table_expr = index.args.get("table") or index.find(exp.Table)
            if table_expr is None:
                continue
            table = tables.setdefault(table_expr.name.upper(), ParsedTable(table_expr.name))
            table.indexes[index.name.upper()] = [
                column.name.upper() for column in index.find_all(exp.Column)
            ]

    return tables


def _compare_table(table: Table, parsed: ParsedTable) -> list[str]:
    errors: list[str] = []
    name = table.name

    expected_columns = [col.name.upper() for col in table.columns]
    if list(parsed.columns) != expected_columns:
        errors.append(
            f"{name}: columns {list(parsed.columns)} != expected {expected_columns}"
        )

    for col in table.columns:
        parsed_col = parsed.columns.get(col.name.upper())
        if parsed_col is None:
            continue
        if parsed_col.type_family not in ACCEPTED_FAMILIES[col.type]:
            errors.append(
                f"{name}.{col.name}: type {parsed_col.raw_type} does not store {col.type.value}"
            )
        if parsed_col.is_nullable != col.nullable:
            errors.append(
                f"{name}.{col.name}: nullable={parsed_col.is_nullable}, expected {col.nullable}"
            )

    expected_pk = [col.upper() for col in table.primary_key_names]
    if parsed.primary_keys != expected_pk:
        errors.append(f"{name}: primary key {parsed.primary_keys} != expected {expected_pk}")

    fk = table.foreign_key
    if fk is not None:
        expected = ForeignKeyReference(
            columns=[col.name for col in fk.local_columns],
            referenced_table=fk.referenced_table,
            referenced_columns=[col.name for col in fk.referenced_columns],
        )
        if expected not in parsed.foreign_keys:
            errors.append(f"{name}: missing foreign key to {fk.referenced_table}")
    elif parsed.foreign_keys:
        errors.append(f"{name}: unexpected foreign key(s) {parsed.foreign_keys}")

    for index in table.indexes:
        expected_cols = [col.name.upper() for col in index.columns]
        parsed_cols = parsed.indexes.get(index.name.upper())
        if parsed_cols is None:
            errors.append(f"{name}: missing index {index.name}")
        elif parsed_cols != expected_cols:
            errors.append(
                f"{name}: index {index.name} columns {parsed_cols} != expected {expected_cols}"
            )

    return errors


def verify_script(graph: SchemaGraph, sql_text: str, dialect: str) -> list[str]:
    """Compare a DDL script with the schema graph it should declare.

    Returns:
        Mismatch descriptions; empty when the script matches the graph
    """
    parsed_tables = parse_ddl_script(sql_text, dialect)
    errors: list[str] = []

    expected_order = [name.upper() for name in graph]
    declared_order = [name for name in parsed_tables if name in expected_order]
    if declared_order != [name for name in expected_order if name in parsed_tables]:
        errors.append(f"Tables declared out of order: {declared_order}")

    for table in graph.values():
        parsed = parsed_tables.get(table.name.upper())
        if parsed is None or not parsed.columns:
            errors.append(f"{table.name}: no CREATE TABLE statement")
            continue
        errors.extend(_compare_table(table, parsed))

    return errors
