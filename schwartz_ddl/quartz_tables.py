"""Table specs for the Quartz 2.x JDBC job store.

Tables are declared parents first: TRIGGERS references JOB_DETAILS and the
trigger detail tables reference TRIGGERS, always through the parent's
primary key columns.
"""
from __future__ import annotations

from schwartz_ddl.schema_spec import (
    ColumnType,
    IndexSpec,
    TableSpec,
    decimal_column,
    key_column,
    simple_column,
    string_column,
)

DEFAULT_TABLE_PREFIX = "QRTZ_"

SCHED_NAME = key_column("SCHED_NAME", 120)
TRIGGER_KEY = (
    SCHED_NAME,
    key_column("TRIGGER_NAME", 200),
    key_column("TRIGGER_GROUP", 200),
)


def _trigger_detail(name: str, *columns) -> TableSpec:
    return TableSpec(name, pk=TRIGGER_KEY, columns=columns, fk="TRIGGERS")


QUARTZ_TABLES: list[TableSpec] = [
    TableSpec(
        "JOB_DETAILS",
        pk=(SCHED_NAME, key_column("JOB_NAME", 200), key_column("JOB_GROUP", 200)),
        columns=(
            string_column("DESCRIPTION", 250),
            string_column("JOB_CLASS_NAME", 250, nullable=False),
            simple_column("IS_DURABLE", ColumnType.BOOLEAN, nullable=False),
            simple_column("IS_NONCONCURRENT", ColumnType.BOOLEAN, nullable=False),
            simple_column("IS_UPDATE_DATA", ColumnType.BOOLEAN, nullable=False),
            simple_column("REQUESTS_RECOVERY", ColumnType.BOOLEAN, nullable=False),
            simple_column("JOB_DATA", ColumnType.BLOB),
        ),
        indexes=(
            IndexSpec("idx_qrtz_j_req_recovery", ["SCHED_NAME", "REQUESTS_RECOVERY"]),
            IndexSpec("idx_qrtz_j_grp", ["SCHED_NAME", "JOB_GROUP"]),
        ),
    ),
    TableSpec(
        "TRIGGERS",
        pk=TRIGGER_KEY,
        columns=(
            string_column("JOB_NAME", 200, nullable=False),
            string_column("JOB_GROUP", 200, nullable=False),
            string_column("DESCRIPTION", 250),
            simple_column("NEXT_FIRE_TIME", ColumnType.BIGINT),
            simple_column("PREV_FIRE_TIME", ColumnType.BIGINT),
            simple_column("PRIORITY", ColumnType.INTEGER),
            string_column("TRIGGER_STATE", 16, nullable=False),
            string_column("TRIGGER_TYPE", 8, nullable=False),
            simple_column("START_TIME", ColumnType.BIGINT, nullable=False),
            simple_column("END_TIME", ColumnType.BIGINT),
            string_column("CALENDAR_NAME", 200),
            simple_column("MISFIRE_INSTR", ColumnType.SMALLINT),
            simple_column("JOB_DATA", ColumnType.BLOB),
        ),
        fk="JOB_DETAILS",
        indexes=(
            IndexSpec("idx_qrtz_t_j", ["SCHED_NAME", "JOB_NAME", "JOB_GROUP"]),
            IndexSpec("idx_qrtz_t_jg", ["SCHED_NAME", "JOB_GROUP"]),
            IndexSpec("idx_qrtz_t_c", ["SCHED_NAME", "CALENDAR_NAME"]),
            IndexSpec("idx_qrtz_t_g", ["SCHED_NAME", "TRIGGER_GROUP"]),
            IndexSpec("idx_qrtz_t_state", ["SCHED_NAME", "TRIGGER_STATE"]),
            IndexSpec(
                "idx_qrtz_t_n_state",
                ["SCHED_NAME", "TRIGGER_NAME", "TRIGGER_GROUP", "TRIGGER_STATE"],
            ),
            IndexSpec("idx_qrtz_t_n_g_state", ["SCHED_NAME", "TRIGGER_GROUP", "TRIGGER_STATE"]),
            IndexSpec("idx_qrtz_t_next_fire_time", ["SCHED_NAME", "NEXT_FIRE_TIME"]),
            IndexSpec("idx_qrtz_t_nft_st", ["SCHED_NAME", "TRIGGER_STATE", "NEXT_FIRE_TIME"]),
            IndexSpec("idx_qrtz_t_nft_misfire", ["SCHED_NAME", "MISFIRE_INSTR", "NEXT_FIRE_TIME"]),
            IndexSpec(
                "idx_qrtz_t_nft_st_misfire",
                ["SCHED_NAME", "MISFIRE_INSTR", "NEXT_FIRE_TIME", "TRIGGER_STATE"],
            ),
            IndexSpec(
                "idx_qrtz_t_nft_st_misfire_grp",
                ["SCHED_NAME", "MISFIRE_INSTR", "NEXT_FIRE_TIME", "TRIGGER_GROUP", "TRIGGER_STATE"],
            ),
        ),
    ),
    _trigger_detail(
        "SIMPLE_TRIGGERS",
        simple_column("REPEAT_COUNT", ColumnType.BIGINT, nullable=False),
        simple_column("REPEAT_INTERVAL", ColumnType.BIGINT, nullable=False),
        simple_column("TIMES_TRIGGERED", ColumnType.BIGINT, nullable=False),
    ),
    _trigger_detail(
        "CRON_TRIGGERS",
        string_column("CRON_EXPRESSION", 120, nullable=False),
        string_column("TIME_ZONE_ID", 80),
    ),
    _trigger_detail(
        "SIMPROP_TRIGGERS",
        string_column("STR_PROP_1", 512),
        string_column("STR_PROP_2", 512),
        string_column("STR_PROP_3", 512),
        simple_column("INT_PROP_1", ColumnType.INTEGER),
        simple_column("INT_PROP_2", ColumnType.INTEGER),
        simple_column("LONG_PROP_1", ColumnType.BIGINT),
        simple_column("LONG_PROP_2", ColumnType.BIGINT),
        decimal_column("DEC_PROP_1", 13, 4),
        decimal_column("DEC_PROP_2", 13, 4),
        simple_column("BOOL_PROP_1", ColumnType.BOOLEAN),
        simple_column("BOOL_PROP_2", ColumnType.BOOLEAN),
    ),
    _trigger_detail(
        "BLOB_TRIGGERS",
        simple_column("BLOB_DATA", ColumnType.BLOB),
    ),
    TableSpec(
        "CALENDARS",
        pk=(SCHED_NAME, key_column("CALENDAR_NAME", 200)),
        columns=(simple_column("CALENDAR", ColumnType.BLOB, nullable=False),),
    ),
    TableSpec(
        "PAUSED_TRIGGER_GRPS",
        pk=(SCHED_NAME, key_column("TRIGGER_GROUP", 200)),
    ),
    TableSpec(
        "FIRED_TRIGGERS",
        pk=(SCHED_NAME, key_column("ENTRY_ID", 95)),
        columns=(
            string_column("TRIGGER_NAME", 200, nullable=False),
            string_column("TRIGGER_GROUP", 200, nullable=False),
            string_column("INSTANCE_NAME", 200, nullable=False),
            simple_column("FIRED_TIME", ColumnType.BIGINT, nullable=False),
            simple_column("SCHED_TIME", ColumnType.BIGINT, nullable=False),
            simple_column("PRIORITY", ColumnType.INTEGER, nullable=False),
            string_column("STATE", 16, nullable=False),
            string_column("JOB_NAME", 200),
            string_column("JOB_GROUP", 200),
            simple_column("IS_NONCONCURRENT", ColumnType.BOOLEAN),
            simple_column("REQUESTS_RECOVERY", ColumnType.BOOLEAN),
        ),
        indexes=(
            IndexSpec("idx_qrtz_ft_trig_inst_name", ["SCHED_NAME", "INSTANCE_NAME"]),
            IndexSpec(
                "idx_qrtz_ft_inst_job_req_rcvry",
                ["SCHED_NAME", "INSTANCE_NAME", "REQUESTS_RECOVERY"],
            ),
            IndexSpec("idx_qrtz_ft_j_g", ["SCHED_NAME", "JOB_NAME", "JOB_GROUP"]),
            IndexSpec("idx_qrtz_ft_jg", ["SCHED_NAME", "JOB_GROUP"]),
            IndexSpec("idx_qrtz_ft_t_g", ["SCHED_NAME", "TRIGGER_NAME", "TRIGGER_GROUP"]),
            IndexSpec("idx_qrtz_ft_tg", ["SCHED_NAME", "TRIGGER_GROUP"]),
        ),
    ),
    TableSpec(
        "SCHEDULER_STATE",
        pk=(SCHED_NAME, key_column("INSTANCE_NAME", 200)),
        columns=(
            simple_column("LAST_CHECKIN_TIME", ColumnType.BIGINT, nullable=False),
            simple_column("CHECKIN_INTERVAL", ColumnType.BIGINT, nullable=False),
        ),
    ),
    TableSpec(
        "LOCKS",
        pk=(SCHED_NAME, key_column("LOCK_NAME", 40)),
    ),
]
