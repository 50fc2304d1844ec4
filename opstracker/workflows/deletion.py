"""Cascading deletion of everything a user owns.

A job row tracks the overall run and one step row per owned table records
that branch's status, attempt count and last error. Branches run in
parallel on the worker; a branch that keeps failing is marked ``failed``
without stopping the others, and the job finishes as ``complete`` or
``partial_failure``. Nothing is rolled back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..config import CONFIG
from ..db import OWNED_TABLES, DatabaseClient, get_table
from ..errors import StoreError
from ..logger import log

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    RUNNING = "running"
    COMPLETE = "complete"
    PARTIAL_FAILURE = "partial_failure"


class StepStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class RetryPolicy:
    """Uniform bounded retry with exponential backoff."""

    max_attempts: int = 5
    initial_backoff_ms: int = 500
    max_backoff_seconds: float = 60.0

    @classmethod
    def from_config(cls) -> "RetryPolicy":
        return cls(
            max_attempts=CONFIG.deletion_max_attempts,
            initial_backoff_ms=CONFIG.deletion_initial_backoff_ms,
            max_backoff_seconds=float(CONFIG.deletion_max_backoff_seconds),
        )

    def backoff_seconds(self, attempt: int) -> float:
        """Delay before the attempt that follows ``attempt`` (1-based)."""
        delay = self.initial_backoff_ms / 1000 * (2 ** max(attempt - 1, 0))
        return min(delay, self.max_backoff_seconds)

    def should_retry(self, attempt: int) -> bool:
        return attempt < self.max_attempts


@dataclass
class BranchResult:
    table: str
    status: str
    attempts: int
    deleted_count: int = 0
    error: Optional[str] = None
    retry_in: Optional[float] = None

    @property
    def needs_retry(self) -> bool:
        return self.retry_in is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "table": self.table,
            "status": self.status,
            "attempts": self.attempts,
            "deleted_count": self.deleted_count,
            "error": self.error,
        }


# ----------------------------------------------------------------------
# Job bookkeeping
# ----------------------------------------------------------------------
def start_deletion_job(
    db: DatabaseClient,
    clerk_id: str,
    tables: Sequence[str] = tuple(table_def.name for table_def in OWNED_TABLES),
) -> Dict[str, Any]:
    """Record a running job with one pending step per table."""

    job = db.insert_row(
        "deletion_jobs",
        {"clerk_id": clerk_id, "status": JobStatus.RUNNING.value, "created_at": _utcnow()},
    )
    for table in tables:
        db.insert_row(
            "deletion_job_steps",
            {
                "job_id": job["id"],
                "table_name": table,
                "status": StepStatus.PENDING.value,
                "attempts": 0,
                "deleted_count": 0,
                "last_error": None,
                "updated_at": _utcnow(),
            },
        )
    log("Deletion job started", job_id=job["id"], tables=len(tables))
    return job


def record_step(db: DatabaseClient, job_id: str, table: str, **updates: Any) -> None:
    step = db.find_one("deletion_job_steps", {"job_id": job_id, "table_name": table})
    if not step:
        logger.warning("No step row for %s in deletion job %s", table, job_id)
        return
    db.update_row("deletion_job_steps", step["id"], {**updates, "updated_at": _utcnow()})


def list_steps(db: DatabaseClient, job_id: str) -> List[Dict[str, Any]]:
    return db.select_rows("deletion_job_steps", {"job_id": job_id})


def reopen_failed_steps(db: DatabaseClient, job_id: str) -> List[str]:
    """Put a finished job's failed steps back to pending and return their tables."""

    tables = []
    for step in list_steps(db, job_id):
        if step.get("status") != StepStatus.FAILED.value:
            continue
        db.update_row(
            "deletion_job_steps",
            step["id"],
            {"status": StepStatus.PENDING.value, "attempts": 0, "updated_at": _utcnow()},
        )
        tables.append(step["table_name"])
    if tables:
        db.update_row("deletion_jobs", job_id, {"status": JobStatus.RUNNING.value, "finished_at": None})
    return tables


def delete_user_rows(db: DatabaseClient, table: str, clerk_id: str) -> int:
    """Delete every row of ``table`` owned by ``clerk_id``."""

    table_def = get_table(table)
    return db.delete_rows(table, {table_def.owner_column: clerk_id})


# ----------------------------------------------------------------------
# One branch
# ----------------------------------------------------------------------
def _record_quietly(db: DatabaseClient, job_id: str, table: str, **updates: Any) -> None:
    # The store may be the thing that is failing; a lost status write must not
    # change the branch outcome.
    try:
        record_step(db, job_id, table, **updates)
    except StoreError as exc:
        logger.warning("Could not record step %s for job %s: %s", table, job_id, exc)


def execute_branch(
    db: DatabaseClient,
    job_id: str,
    clerk_id: str,
    table: str,
    *,
    attempt: int,
    policy: RetryPolicy,
) -> BranchResult:
    """Run one delete attempt and decide whether the branch retries, succeeds or fails.

    Only ``StoreError`` is retried. Any other error fails the branch at once.
    """

    try:
        deleted = delete_user_rows(db, table, clerk_id)
    except StoreError as exc:
        error = str(exc)
        if policy.should_retry(attempt):
            delay = policy.backoff_seconds(attempt)
            logger.warning(
                "Deleting %s for job %s failed (attempt %s/%s), retrying in %.1fs",
                table,
                job_id,
                attempt,
                policy.max_attempts,
                delay,
            )
            _record_quietly(db, job_id, table, attempts=attempt, last_error=error)
            return BranchResult(table, StepStatus.PENDING.value, attempt, error=error, retry_in=delay)
        logger.error("Deleting %s for job %s gave up after %s attempts", table, job_id, attempt)
        _record_quietly(db, job_id, table, status=StepStatus.FAILED.value, attempts=attempt, last_error=error)
        return BranchResult(table, StepStatus.FAILED.value, attempt, error=error)
    except Exception as exc:
        logger.exception("Deleting %s for job %s failed permanently", table, job_id)
        error = str(exc) or exc.__class__.__name__
        _record_quietly(db, job_id, table, status=StepStatus.FAILED.value, attempts=attempt, last_error=error)
        return BranchResult(table, StepStatus.FAILED.value, attempt, error=error)

    _record_quietly(
        db,
        job_id,
        table,
        status=StepStatus.SUCCEEDED.value,
        attempts=attempt,
        deleted_count=deleted,
        last_error=None,
    )
    return BranchResult(table, StepStatus.SUCCEEDED.value, attempt, deleted_count=deleted)


# ----------------------------------------------------------------------
# Finalize
# ----------------------------------------------------------------------
def failed_tables(results: Iterable[Mapping[str, Any]]) -> List[str]:
    return [
        str(result.get("table"))
        for result in results
        if result.get("status") != StepStatus.SUCCEEDED.value
    ]


def finalize_deletion_job(
    db: DatabaseClient,
    job_id: str,
    results: Iterable[Mapping[str, Any]],
) -> str:
    """Close the job once every branch has settled and return its final status."""

    results = list(results)
    failed = failed_tables(results)
    status = JobStatus.PARTIAL_FAILURE if failed else JobStatus.COMPLETE
    db.update_row("deletion_jobs", job_id, {"status": status.value, "finished_at": _utcnow()})

    if failed:
        logger.error("Deletion job %s finished with failed tables: %s", job_id, ", ".join(failed))
    else:
        deleted = sum(int(result.get("deleted_count") or 0) for result in results)
        log("Deletion job complete", job_id=job_id, deleted_rows=deleted)
    return status.value
