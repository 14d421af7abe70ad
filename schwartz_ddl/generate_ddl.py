"""Generate the Quartz job store DDL script for a SQL dialect.

This script builds the schema graph for the Quartz tables (or any other
table spec list), renders CREATE TABLE / CREATE INDEX statements for the
chosen dialect and writes them to a single SQL file.

Features:
- Dialect from --dialect, SCHWARTZ_DIALECT or the default (postgresql);
  accepts aliases, SQLAlchemy URLs and Hibernate dialect class names
- Configurable table name prefix (default QRTZ_)
- Optional DROP TABLE block ahead of the CREATE statements
- Dry-run mode to preview the script
- Verify mode that parses the script back and checks it against the model

Usage:
    schwartz-ddl --dialect postgresql --output quartz_postgres.sql
    schwartz-ddl --dialect org.hibernate.dialect.Oracle12cDialect -o quartz_oracle.sql
    schwartz-ddl --dialect mysql --prefix SCHED_ --drop --verify
    schwartz-ddl --dialect mssql --dry-run  # Preview output
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from sqlglot.errors import ParseError

from schwartz_ddl.config import get_dialect, get_include_drops, get_output_file, get_table_prefix
from schwartz_ddl.ddl_emitter import render, write_script
from schwartz_ddl.ddl_parser import verify_script
from schwartz_ddl.dialects import SUPPORTED_DIALECTS, DialectUnsupportedError, resolve_dialect
from schwartz_ddl.quartz_tables import QUARTZ_TABLES
from schwartz_ddl.schema_builder import SchemaBuildError, SchemaGraph, build
from schwartz_ddl.schema_spec import TableSpec

LOG_PREFIX = "[schwartz-ddl]"


class DdlVerificationError(Exception):
    """The emitted script does not declare what the schema graph holds."""

    def __init__(self, mismatches: list[str]):
        super().__init__(f"Generated DDL failed verification ({len(mismatches)} mismatches)")
        self.mismatches = mismatches


@dataclass
class GenerationResult:
    dialect: str
    prefix: str
    graph: SchemaGraph
    sql: str
    destination: Optional[Path] = None
    mismatches: list[str] = field(default_factory=list)

    @property
    def table_count(self) -> int:
        return len(self.graph)

    @property
    def index_count(self) -> int:
        return sum(len(table.indexes) for table in self.graph.values())


def generate(
    destination: Union[str, Path, None] = None,
    dialect: Optional[str] = None,
    prefix: Optional[str] = None,
    tables: Optional[Sequence[TableSpec]] = None,
    include_drops: Optional[bool] = None,
    verify: bool = False,
    dry_run: bool = False,
) -> GenerationResult:
    """Build the schema graph and write its DDL script.

    Main entry point for DDL generation. Unset arguments fall back to
    configuration (see schwartz_ddl.config).

    Args:
        destination: Script path (default: SCHWARTZ_DDL_OUTPUT)
        dialect: Dialect selector (default: SCHWARTZ_DIALECT)
        prefix: Table name prefix (default: SCHWARTZ_TABLE_PREFIX)
        tables: Table specs in declaration order (default: the Quartz tables)
        include_drops: Prepend DROP TABLE statements (default: SCHWARTZ_DDL_DROPS)
        verify: Parse the script back and compare it with the graph
        dry_run: Render only; nothing is written

    Returns:
        GenerationResult with the graph, the script text and the written path

    Raises:
        SchemaBuildError: If the table specs are invalid
        DialectUnsupportedError: If the dialect is not supported
        DdlVerificationError: If verify finds mismatches
        OSError: If the destination cannot be written
    """
    dialect_name = resolve_dialect(dialect or get_dialect())
    table_prefix = get_table_prefix() if prefix is None else prefix
    drops = get_include_drops() if include_drops is None else include_drops
    specs = QUARTZ_TABLES if tables is None else tables

    graph = build(specs, table_prefix)

    sql_text = render(graph, dialect_name, include_drops=drops)
    result = GenerationResult(dialect=dialect_name, prefix=table_prefix, graph=graph, sql=sql_text)

    # A script that fails verification is never written
    if verify:
        try:
            result.mismatches = verify_script(graph, sql_text, dialect_name)
        except ParseError as e:
            raise DdlVerificationError([f"Script could not be parsed: {e}"]) from e
        if result.mismatches:
            raise DdlVerificationError(result.mismatches)

    if not dry_run:
        path = Path(destination) if destination is not None else get_output_file()
        result.destination = write_script(sql_text, path)

    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line interface for Quartz DDL generation."""
    parser = argparse.ArgumentParser(
        description="Generate Quartz job store DDL for a SQL dialect",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # PostgreSQL script with the default QRTZ_ prefix
    schwartz-ddl --dialect postgresql --output quartz_postgres.sql

    # Dialect taken from a Hibernate configuration value
    schwartz-ddl --dialect org.hibernate.dialect.SQLServer2012Dialect -o quartz_mssql.sql

    # Drop and recreate, check the script parses back to the same tables
    schwartz-ddl --dialect mysql --drop --verify

    # Preview without writing
    schwartz-ddl --dialect oracle --dry-run
        """,
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Path of the SQL script to write (default: SCHWARTZ_DDL_OUTPUT or quartz_tables.sql)",
    )
    parser.add_argument(
        "--dialect",
        help="Target dialect (default: SCHWARTZ_DIALECT or postgresql)",
    )
    parser.add_argument(
        "--prefix",
        help="Table name prefix (default: SCHWARTZ_TABLE_PREFIX or QRTZ_)",
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        default=None,
        help="Start the script with DROP TABLE statements",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the script instead of writing it",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Parse the generated script back and check it against the table model",
    )
    parser.add_argument(
        "--list-dialects",
        action="store_true",
        help="List supported dialects and exit",
    )
    args = parser.parse_args(argv)

    if args.list_dialects:
        for name in SUPPORTED_DIALECTS:
            print(name)
        return 0

    try:
        result = generate(
            destination=args.output,
            dialect=args.dialect,
            prefix=args.prefix,
            include_drops=args.drop,
            verify=args.verify,
            dry_run=args.dry_run,
        )
    except DdlVerificationError as e:
        print(f"{LOG_PREFIX} ERROR: {e}")
        for mismatch in e.mismatches:
            print(f"  - {mismatch}")
        return 1
    except (SchemaBuildError, DialectUnsupportedError, OSError) as e:
        print(f"{LOG_PREFIX} ERROR: {e}")
        return 1

    if args.dry_run:
        print(f"{LOG_PREFIX} Would write {result.table_count} table(s) for {result.dialect}")
        print("-" * 60)
        print(result.sql)
    else:
        print(
            f"{LOG_PREFIX} Created: {result.destination} "
            f"({result.table_count} tables, {result.index_count} indexes, {result.dialect})"
        )
    if args.verify:
        print(f"{LOG_PREFIX} OK: script verified against {result.table_count} tables")
    return 0


if __name__ == "__main__":
    sys.exit(main())
