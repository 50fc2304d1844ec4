"""Tests for the table catalogue and the index DDL derived from it."""

from __future__ import annotations

import pytest

from opstracker.db import OWNED_TABLES, TABLES, get_table, index_statements


def test_every_table_has_an_index_leading_with_its_owner() -> None:
    for table_def in TABLES.values():
        assert any(columns[0] == table_def.owner_column for columns in table_def.indexes), table_def.name


def test_compound_lookups_are_indexed() -> None:
    assert ("user_id", "date") in get_table("daily_logs").indexes
    assert ("user_id", "date") in get_table("financial_entries").indexes
    for name in ("appointments", "outreach_entries", "completed_jobs"):
        assert ("user_id", "daily_log_id") in get_table(name).indexes


def test_index_statements_for_selected_tables() -> None:
    statements = index_statements([get_table("daily_logs")])

    assert statements == [
        "CREATE INDEX IF NOT EXISTS idx_daily_logs_user_id ON public.daily_logs (user_id);",
        "CREATE INDEX IF NOT EXISTS idx_daily_logs_user_id_date ON public.daily_logs (user_id, date);",
    ]


def test_index_statements_cover_the_whole_catalogue() -> None:
    statements = index_statements()

    assert len(statements) == sum(len(table_def.indexes) for table_def in TABLES.values())
    assert len({statement.split()[5] for statement in statements}) == len(statements)


def test_owned_tables_are_the_fourteen_cascade_targets() -> None:
    assert len(OWNED_TABLES) == 14
    assert "deletion_jobs" not in {table_def.name for table_def in OWNED_TABLES}


def test_unknown_table_raises() -> None:
    with pytest.raises(KeyError):
        get_table("nope")
