"""Tests for the Quartz job store table list."""
from __future__ import annotations

from schwartz_ddl.quartz_tables import DEFAULT_TABLE_PREFIX, QUARTZ_TABLES
from schwartz_ddl.schema_builder import build
from schwartz_ddl.schema_spec import ColumnType


class TestQuartzTables:
    """Tests for the declared Quartz tables."""

    def test_table_order(self):
        assert [spec.name for spec in QUARTZ_TABLES] == [
            "JOB_DETAILS",
            "TRIGGERS",
            "SIMPLE_TRIGGERS",
            "CRON_TRIGGERS",
            "SIMPROP_TRIGGERS",
            "BLOB_TRIGGERS",
            "CALENDARS",
            "PAUSED_TRIGGER_GRPS",
            "FIRED_TRIGGERS",
            "SCHEDULER_STATE",
            "LOCKS",
        ]

    def test_every_table_keyed_by_scheduler(self):
        for spec in QUARTZ_TABLES:
            assert spec.pk[0].name == "SCHED_NAME"
            assert spec.pk[0].length == 120

    def test_default_prefix(self):
        assert DEFAULT_TABLE_PREFIX == "QRTZ_"


class TestQuartzGraph:
    """Tests for the built Quartz schema graph."""

    def test_builds(self, quartz_graph):
        assert len(quartz_graph) == 11
        assert all(name.startswith("QRTZ_") for name in quartz_graph)

    def test_index_count(self, quartz_graph):
        assert sum(len(t.indexes) for t in quartz_graph.values()) == 20
        assert len(quartz_graph["QRTZ_TRIGGERS"].indexes) == 12
        assert len(quartz_graph["QRTZ_FIRED_TRIGGERS"].indexes) == 6

    def test_foreign_key_targets(self, quartz_graph):
        targets = {
            name: table.foreign_key.referenced_table
            for name, table in quartz_graph.items()
            if table.foreign_key is not None
        }
        assert targets == {
            "QRTZ_TRIGGERS": "QRTZ_JOB_DETAILS",
            "QRTZ_SIMPLE_TRIGGERS": "QRTZ_TRIGGERS",
            "QRTZ_CRON_TRIGGERS": "QRTZ_TRIGGERS",
            "QRTZ_SIMPROP_TRIGGERS": "QRTZ_TRIGGERS",
            "QRTZ_BLOB_TRIGGERS": "QRTZ_TRIGGERS",
        }

    def test_triggers_reference_job_by_job_columns(self, quartz_graph):
        fk = quartz_graph["QRTZ_TRIGGERS"].foreign_key
        assert [c.name for c in fk.local_columns] == ["SCHED_NAME", "JOB_NAME", "JOB_GROUP"]

    def test_simprop_decimal_columns(self, quartz_graph):
        table = quartz_graph["QRTZ_SIMPROP_TRIGGERS"]
        for name in ("DEC_PROP_1", "DEC_PROP_2"):
            column = table.column(name)
            assert column.type is ColumnType.DECIMAL
            assert (column.precision, column.scale) == (13, 4)

    def test_custom_prefix(self):
        graph = build(QUARTZ_TABLES, "SCHED_")
        assert "SCHED_TRIGGERS" in graph
        assert graph["SCHED_TRIGGERS"].foreign_key.referenced_table == "SCHED_JOB_DETAILS"
