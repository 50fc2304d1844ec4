"""Tests for the cascading deletion workflow."""

from __future__ import annotations

import pytest

from opstracker.db import OWNED_TABLES
from opstracker.services import daily_logs, scripts
from opstracker.workflows.deletion import (
    RetryPolicy,
    execute_branch,
    finalize_deletion_job,
    list_steps,
    start_deletion_job,
)


@pytest.fixture
def populated(db, user_id, other_user_id):
    log = daily_logs.create_log(db, user_id, date="2024-06-03", main_goal="Work")
    daily_logs.add_outreach(db, user_id, daily_log_id=log["id"], time="9", method="call", person="Kim")
    scripts.add_script(db, user_id, title="Mine", content="")
    scripts.add_script(db, other_user_id, title="Theirs", content="")
    return user_id


def _run_all(db, job_id, clerk_id, policy):
    return [
        execute_branch(db, job_id, clerk_id, table_def.name, attempt=1, policy=policy).to_dict()
        for table_def in OWNED_TABLES
    ]


def test_retry_policy_backoff() -> None:
    policy = RetryPolicy(max_attempts=5, initial_backoff_ms=500, max_backoff_seconds=60)

    assert [policy.backoff_seconds(attempt) for attempt in range(1, 5)] == [0.5, 1.0, 2.0, 4.0]
    assert policy.backoff_seconds(12) == 60
    assert policy.should_retry(4) is True
    assert policy.should_retry(5) is False


def test_retry_policy_from_config(monkeypatch: pytest.MonkeyPatch) -> None:
    from opstracker.config import reload_config

    monkeypatch.setenv("DELETION_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("DELETION_INITIAL_BACKOFF_MS", "250")
    reload_config()

    policy = RetryPolicy.from_config()

    assert policy.max_attempts == 3
    assert policy.backoff_seconds(1) == 0.25


def test_start_deletion_job_records_a_step_per_table(db) -> None:
    job = start_deletion_job(db, "user_123")

    steps = list_steps(db, job["id"])
    assert job["status"] == "running"
    assert len(steps) == 14
    assert {step["table_name"] for step in steps} == {table_def.name for table_def in OWNED_TABLES}
    assert all(step["status"] == "pending" for step in steps)


def test_full_run_deletes_only_the_users_rows(db, populated, other_user_id) -> None:
    job = start_deletion_job(db, populated)

    results = _run_all(db, job["id"], populated, RetryPolicy())
    status = finalize_deletion_job(db, job["id"], results)

    assert status == "complete"
    for table_def in OWNED_TABLES:
        assert db.select_rows(table_def.name, {table_def.owner_column: populated}) == []
    assert len(db.select_rows("scripts", {"user_id": other_user_id})) == 1
    assert db.get_user_by_clerk_id(other_user_id) is not None
    assert db.get_row("deletion_jobs", job["id"])["status"] == "complete"
    assert all(step["status"] == "succeeded" for step in list_steps(db, job["id"]))


def test_transient_failure_asks_for_retry(db, populated) -> None:
    job = start_deletion_job(db, populated)
    db.failures["scripts"] = 1

    result = execute_branch(db, job["id"], populated, "scripts", attempt=1, policy=RetryPolicy())

    assert result.needs_retry
    assert result.retry_in == 0.5
    step = db.find_one("deletion_job_steps", {"job_id": job["id"], "table_name": "scripts"})
    assert step["status"] == "pending"
    assert step["attempts"] == 1
    assert "scripts" in step["last_error"]

    retried = execute_branch(db, job["id"], populated, "scripts", attempt=2, policy=RetryPolicy())
    assert retried.status == "succeeded"
    assert retried.deleted_count == 1


def test_exhausted_branch_fails_without_stopping_siblings(db, populated) -> None:
    job = start_deletion_job(db, populated)
    db.failures["outreach_entries"] = -1
    policy = RetryPolicy(max_attempts=1)

    results = _run_all(db, job["id"], populated, policy)
    status = finalize_deletion_job(db, job["id"], results)

    assert status == "partial_failure"
    failed = [result for result in results if result["status"] == "failed"]
    assert [result["table"] for result in failed] == ["outreach_entries"]
    assert len(db.rows("outreach_entries")) == 1
    assert db.get_user_by_clerk_id(populated) is None
    assert db.get_row("deletion_jobs", job["id"])["status"] == "partial_failure"


def test_unexpected_error_fails_immediately(db, populated, monkeypatch: pytest.MonkeyPatch) -> None:
    job = start_deletion_job(db, populated)

    def boom(table, filters):
        raise RuntimeError("schema drift")

    monkeypatch.setattr(db, "delete_rows", boom)

    result = execute_branch(db, job["id"], populated, "leads", attempt=1, policy=RetryPolicy())

    assert result.status == "failed"
    assert result.needs_retry is False
    assert result.error == "schema drift"
