"""Build a validated schema graph from declarative table specs.

The builder walks the table specs in declaration order and produces a
SchemaGraph: an ordered mapping of final (prefixed) table name to Table.
Later tables may reference earlier ones through their foreign key, never
the reverse, so the graph order is also a safe DDL emission order.

Usage:
    from schwartz_ddl.schema_builder import build
    graph = build(QUARTZ_TABLES, "QRTZ_")
    graph["QRTZ_TRIGGERS"].foreign_key.referenced_table
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from schwartz_ddl.schema_spec import ColumnSpec, ColumnType, IndexSpec, TableSpec


# =============================================================================
# Errors
# =============================================================================


class SchemaBuildError(Exception):
    """A table spec violates a schema invariant."""

    def __init__(self, message: str, table: Optional[str] = None):
        super().__init__(message)
        self.table = table


class UnresolvedReferenceError(SchemaBuildError):
    """A foreign key names a table that has not been built yet."""

    def __init__(self, table: str, target: str):
        super().__init__(
            f"Table {table} references {target}, which is not declared before it",
            table=table,
        )
        self.target = target


class UnresolvedColumnError(SchemaBuildError):
    """An index or foreign key names a column the table does not have."""

    def __init__(self, table: str, column: str, index: Optional[str] = None):
        owner = f"index {index}" if index else "foreign key"
        super().__init__(
            f"Column {column} in {owner} does not exist on table {table}",
            table=table,
        )
        self.column = column
        self.index = index


# =============================================================================
# Schema graph records
# =============================================================================


@dataclass(frozen=True)
class Column:
    """A built column with its physical type attributes."""

    name: str
    type: ColumnType
    nullable: bool
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None


@dataclass(frozen=True)
class ForeignKey:
    """Foreign key mirroring the referenced table's primary key."""

    name: str
    referenced_table: str
    referenced_columns: tuple[Column, ...]
    local_columns: tuple[Column, ...]


@dataclass(frozen=True)
class Index:
    name: str
    columns: tuple[Column, ...]

    @property
    def column_span(self) -> int:
        return len(self.columns)


@dataclass
class Table:
    """A built table node of the schema graph."""

    name: str
    columns: list[Column] = field(default_factory=list)
    primary_key_columns: tuple[Column, ...] = ()
    foreign_key: Optional[ForeignKey] = None
    indexes: list[Index] = field(default_factory=list)

    def column(self, name: str) -> Optional[Column]:
        """Find a column by exact name."""
        for col in self.columns:
            if col.name == name:
                return col
        return None

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]

    @property
    def primary_key_names(self) -> list[str]:
        return [col.name for col in self.primary_key_columns]


# Final table name -> Table, in declaration order
SchemaGraph = dict[str, Table]


# =============================================================================
# Column construction
# =============================================================================


def _check_attributes(table: Table, spec: ColumnSpec) -> None:
    errors = spec.attribute_errors()
    if errors:
        raise SchemaBuildError(
            f"Invalid column {spec.name} on table {table.name}: {'; '.join(errors)}",
            table=table.name,
        )


def _add_column(table: Table, column: Column) -> Column:
    if table.column(column.name) is not None:
        raise SchemaBuildError(
            f"Duplicate column {column.name} on table {table.name}", table=table.name
        )
    table.columns.append(column)
    return column


def add_varchar(table: Table, name: str, length: Optional[int], nullable: bool) -> Column:
    if length is None or length <= 0:
        raise SchemaBuildError(
            f"Invalid column {name} on table {table.name}: "
            f"STRING column requires length > 0 (got {length})",
            table=table.name,
        )
    return _add_column(table, Column(name, ColumnType.STRING, nullable, length=length))


def add_decimal(table: Table, spec: ColumnSpec) -> Column:
    _check_attributes(table, spec)
    return _add_column(
        table,
        Column(
            spec.name,
            ColumnType.DECIMAL,
            spec.nullable,
            precision=spec.precision,
            scale=spec.scale,
        ),
    )


def add_simple(table: Table, spec: ColumnSpec) -> Column:
    return _add_column(table, Column(spec.name, spec.type, spec.nullable))


def add_column(table: Table, spec: ColumnSpec) -> Column:
    """Add a regular column, choosing its representation from spec.type."""
    if spec.type is ColumnType.STRING:
        return add_varchar(table, spec.name, spec.length, spec.nullable)
    if spec.type is ColumnType.DECIMAL:
        return add_decimal(table, spec)
    return add_simple(table, spec)


# =============================================================================
# Keys and indexes
# =============================================================================


def build_primary_key(table: Table, pk_specs: Iterable[ColumnSpec]) -> None:
    """Add the key columns in declared order and make them the primary key.

    Key columns are always non-nullable strings of the declared length,
    whatever type the ColumnSpec declares.
    """
    key_columns = [
        add_varchar(table, spec.name, spec.length, nullable=False) for spec in pk_specs
    ]
    if not key_columns:
        raise SchemaBuildError(f"Table {table.name} has an empty primary key", table=table.name)
    table.primary_key_columns = tuple(key_columns)


def build_foreign_key(table: Table, referenced: Table) -> ForeignKey:
    """Create the foreign key from table to referenced's primary key."""
    local_columns = []
    for ref_col in referenced.primary_key_columns:
        local = table.column(ref_col.name)
        if local is None:
            raise UnresolvedColumnError(table.name, ref_col.name)
        local_columns.append(local)

    foreign_key = ForeignKey(
        name=f"FK_{table.name}",
        referenced_table=referenced.name,
        referenced_columns=referenced.primary_key_columns,
        local_columns=tuple(local_columns),
    )
    table.foreign_key = foreign_key
    return foreign_key


def build_index(table: Table, spec: IndexSpec) -> Index:
    if not spec.column_names:
        raise SchemaBuildError(
            f"Index {spec.name} on table {table.name} has no columns", table=table.name
        )

    seen: set[str] = set()
    columns = []
    for column_name in spec.column_names:
        if column_name in seen:
            raise SchemaBuildError(
                f"Index {spec.name} on table {table.name} lists column {column_name} twice",
                table=table.name,
            )
        seen.add(column_name)
        column = table.column(column_name)
        if column is None:
            raise UnresolvedColumnError(table.name, column_name, index=spec.name)
        columns.append(column)

    index = Index(spec.name, tuple(columns))
    if index.column_span != len(spec.column_names):
        raise SchemaBuildError(
            f"Index {spec.name} on table {table.name} resolved {index.column_span} "
            f"of {len(spec.column_names)} columns",
            table=table.name,
        )
    table.indexes.append(index)
    return index


# =============================================================================
# Main entry point
# =============================================================================


def build(table_specs: Iterable[TableSpec], name_prefix: str = "") -> SchemaGraph:
    """Build the schema graph for table_specs.

    Args:
        table_specs: Table specs in declaration order; a foreign key may only
            name a table declared before it
        name_prefix: Prepended to every table name (and foreign key target)

    Returns:
        Ordered mapping of final table name to Table

    Raises:
        SchemaBuildError: On any invariant violation (duplicate names, empty
            primary key, invalid column attributes)
        UnresolvedReferenceError: If a foreign key target is not built yet
        UnresolvedColumnError: If an index or foreign key column is missing
    """
    tables: SchemaGraph = {}
    index_names: set[str] = set()

    for spec in table_specs:
        table = Table(name=name_prefix + spec.name)
        if table.name in tables:
            raise SchemaBuildError(f"Duplicate table name {table.name}", table=table.name)
        tables[table.name] = table

        build_primary_key(table, spec.pk)

        for col_spec in spec.columns:
            add_column(table, col_spec)

        if spec.fk:
            referenced = tables.get(name_prefix + spec.fk)
            if referenced is None or referenced is table:
                raise UnresolvedReferenceError(table.name, name_prefix + spec.fk)
            build_foreign_key(table, referenced)

        for index_spec in spec.indexes:
            if index_spec.name in index_names:
                raise SchemaBuildError(
                    f"Duplicate index name {index_spec.name} on table {table.name}",
                    table=table.name,
                )
            index_names.add(index_spec.name)
            build_index(table, index_spec)

    return tables
