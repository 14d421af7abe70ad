"""Pytest configuration and fixtures for schwartz_ddl tests."""
from __future__ import annotations

import pytest

from schwartz_ddl.quartz_tables import DEFAULT_TABLE_PREFIX, QUARTZ_TABLES
from schwartz_ddl.schema_builder import build
from schwartz_ddl.schema_spec import ColumnSpec, ColumnType, IndexSpec, TableSpec


@pytest.fixture
def job_trigger_specs() -> list[TableSpec]:
    """Two tables: JOB and TRIGGER referencing it, with one index."""
    return [
        TableSpec(
            "JOB",
            pk=[ColumnSpec("id", ColumnType.STRING, nullable=False, length=36)],
            columns=[ColumnSpec("name", ColumnType.STRING, nullable=False, length=80)],
        ),
        TableSpec(
            "TRIGGER",
            pk=[ColumnSpec("id", ColumnType.STRING, nullable=False, length=36)],
            columns=[ColumnSpec("jobId", ColumnType.STRING, length=36)],
            fk="JOB",
            indexes=[IndexSpec("idx_trigger_job", ["jobId"])],
        ),
    ]


@pytest.fixture
def all_types_spec() -> TableSpec:
    """A table declaring one column of every ColumnType."""
    return TableSpec(
        "ALL_TYPES",
        pk=[ColumnSpec("ID", length=20)],
        columns=[
            ColumnSpec("C_BIGINT", ColumnType.BIGINT, nullable=False),
            ColumnSpec("C_BLOB", ColumnType.BLOB),
            ColumnSpec("C_BOOLEAN", ColumnType.BOOLEAN, nullable=False),
            ColumnSpec("C_INTEGER", ColumnType.INTEGER),
            ColumnSpec("C_SMALLINT", ColumnType.SMALLINT),
            ColumnSpec("C_DECIMAL", ColumnType.DECIMAL, precision=13, scale=4),
            ColumnSpec("C_STRING", ColumnType.STRING, length=512),
        ],
    )


@pytest.fixture
def quartz_graph():
    """The Quartz job store schema graph with the default prefix."""
    return build(QUARTZ_TABLES, DEFAULT_TABLE_PREFIX)
