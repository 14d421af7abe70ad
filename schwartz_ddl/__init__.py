"""Quartz job store DDL generation.

This package turns a declarative table list into dialect-specific DDL:

- schema_spec: Declarative descriptors (ColumnType, ColumnSpec, TableSpec, IndexSpec)
- schema_builder: Builds and validates the schema graph
- ddl_emitter: Renders the schema graph as a SQL script for a dialect
- ddl_parser: Parses emitted scripts back and verifies them
- dialects: Supported dialects and selector resolution
- quartz_tables: The Quartz 2.x JDBC job store tables
- generate_ddl: generate() entry point and command line
"""
from schwartz_ddl.schema_spec import (
    ColumnType,
    ColumnSpec,
    IndexSpec,
    TableSpec,
)
from schwartz_ddl.schema_builder import (
    # Schema graph
    Column,
    ForeignKey,
    Index,
    Table,
    SchemaGraph,
    build,
    # Errors
    SchemaBuildError,
    UnresolvedReferenceError,
    UnresolvedColumnError,
)
from schwartz_ddl.dialects import (
    SUPPORTED_DIALECTS,
    DialectUnsupportedError,
    resolve_dialect,
)
from schwartz_ddl.ddl_emitter import emit, render, write_script
from schwartz_ddl.ddl_parser import parse_ddl_script, verify_script
from schwartz_ddl.quartz_tables import QUARTZ_TABLES, DEFAULT_TABLE_PREFIX

__all__ = [
    # schema_spec exports
    "ColumnType",
    "ColumnSpec",
    "IndexSpec",
    "TableSpec",
    # schema_builder exports
    "Column",
    "ForeignKey",
    "Index",
    "Table",
    "SchemaGraph",
    "build",
    "SchemaBuildError",
    "UnresolvedReferenceError",
    "UnresolvedColumnError",
    # dialects exports
    "SUPPORTED_DIALECTS",
    "DialectUnsupportedError",
    "resolve_dialect",
    # ddl_emitter / ddl_parser exports
    "emit",
    "write_script",
    "render",
    "parse_ddl_script",
    "verify_script",
    # quartz_tables exports
    "QUARTZ_TABLES",
    "DEFAULT_TABLE_PREFIX",
]
