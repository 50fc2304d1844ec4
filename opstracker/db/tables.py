"""Table metadata for the persisted schema.

Each table stores rows owned by a single user. ``owner_column`` names the
field holding the owner's external identity; ``indexes`` lists the lookups
the schema is expected to support.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class TableDef:
    name: str
    label: str
    owner_column: str = "user_id"
    indexes: Tuple[Tuple[str, ...], ...] = field(default_factory=tuple)


USERS = TableDef(
    "users",
    "User",
    owner_column="clerk_id",
    indexes=(("clerk_id",), ("clerk_subscription_id",)),
)
BUSINESS_INFO = TableDef("business_info", "Business info", indexes=(("user_id",),))
USER_GOALS = TableDef("user_goals", "Goal", indexes=(("user_id",),))
USER_TOOLS = TableDef("user_tools", "Tool", indexes=(("user_id",),))
DAILY_LOGS = TableDef(
    "daily_logs",
    "Log",
    indexes=(("user_id",), ("user_id", "date")),
)
APPOINTMENTS = TableDef(
    "appointments",
    "Appointment",
    indexes=(("daily_log_id",), ("user_id", "daily_log_id")),
)
OUTREACH_ENTRIES = TableDef(
    "outreach_entries",
    "Outreach entry",
    indexes=(("daily_log_id",), ("user_id", "daily_log_id")),
)
COMPLETED_JOBS = TableDef(
    "completed_jobs",
    "Job",
    indexes=(("daily_log_id",), ("user_id", "daily_log_id")),
)
LEADS = TableDef("leads", "Lead", indexes=(("user_id",),))
FOLLOW_UPS = TableDef("follow_ups", "Follow up", indexes=(("user_id",),))
CUSTOMERS = TableDef("customers", "Customer", indexes=(("user_id",),))
FINANCIAL_ENTRIES = TableDef(
    "financial_entries",
    "Financial entry",
    indexes=(("user_id",), ("user_id", "date"), ("user_id", "type")),
)
SCRIPTS = TableDef("scripts", "Script", indexes=(("user_id",),))
OBJECTION_HANDLERS = TableDef("objection_handlers", "Handler", indexes=(("user_id",),))

# Workflow bookkeeping; not user-owned data, so never part of the cascade.
DELETION_JOBS = TableDef("deletion_jobs", "Deletion job", owner_column="clerk_id", indexes=(("clerk_id",),))
DELETION_JOB_STEPS = TableDef(
    "deletion_job_steps",
    "Deletion step",
    owner_column="job_id",
    indexes=(("job_id",), ("job_id", "table_name")),
)

# Every table holding user-owned rows, in cascade order.
OWNED_TABLES: Tuple[TableDef, ...] = (
    USERS,
    BUSINESS_INFO,
    USER_GOALS,
    USER_TOOLS,
    DAILY_LOGS,
    APPOINTMENTS,
    OUTREACH_ENTRIES,
    COMPLETED_JOBS,
    LEADS,
    FOLLOW_UPS,
    CUSTOMERS,
    FINANCIAL_ENTRIES,
    SCRIPTS,
    OBJECTION_HANDLERS,
)

TABLES: Dict[str, TableDef] = {
    table_def.name: table_def for table_def in OWNED_TABLES + (DELETION_JOBS, DELETION_JOB_STEPS)
}


def get_table(name: str) -> TableDef:
    try:
        return TABLES[name]
    except KeyError:
        raise KeyError(f"Unknown table: {name}") from None


def index_name(table_def: TableDef, columns: Tuple[str, ...]) -> str:
    return f"idx_{table_def.name}_" + "_".join(columns)


def index_statements(tables: Iterable[TableDef] = ()) -> List[str]:
    """Return ``CREATE INDEX`` statements for the declared lookups, in table order."""

    statements = []
    for table_def in tables or TABLES.values():
        for columns in table_def.indexes:
            statements.append(
                f"CREATE INDEX IF NOT EXISTS {index_name(table_def, columns)} "
                f"ON public.{table_def.name} (" + ", ".join(columns) + ");"
            )
    return statements


__all__ = [
    "TableDef",
    "TABLES",
    "OWNED_TABLES",
    "get_table",
    "index_name",
    "index_statements",
    "USERS",
    "BUSINESS_INFO",
    "USER_GOALS",
    "USER_TOOLS",
    "DAILY_LOGS",
    "APPOINTMENTS",
    "OUTREACH_ENTRIES",
    "COMPLETED_JOBS",
    "LEADS",
    "FOLLOW_UPS",
    "CUSTOMERS",
    "FINANCIAL_ENTRIES",
    "SCRIPTS",
    "OBJECTION_HANDLERS",
    "DELETION_JOBS",
    "DELETION_JOB_STEPS",
]
