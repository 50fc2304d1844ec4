"""Celery tasks for the cascading user-data deletion.

One ``deletion.delete_table_rows`` task runs per owned table, all launched
together as the header of a chord. ``deletion.finalize`` is the chord
callback and only runs after every branch has returned, which is why an
exhausted branch returns a ``failed`` result instead of raising.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from celery import chord
from celery.utils.log import get_task_logger

from ..db import DatabaseClient, get_database_client
from ..workflows.deletion import (
    RetryPolicy,
    execute_branch,
    finalize_deletion_job,
    list_steps,
    reopen_failed_steps,
    start_deletion_job,
)

from .celery_app import celery_app


logger = get_task_logger(__name__)


@celery_app.task(bind=True, name="deletion.delete_table_rows", max_retries=None)
def delete_table_rows(self, job_id: str, clerk_id: str, table: str) -> Dict[str, Any]:
    """Delete one table's rows for ``clerk_id``, retrying transient store errors."""

    policy = RetryPolicy.from_config()
    attempt = self.request.retries + 1
    result = execute_branch(
        get_database_client(),
        job_id,
        clerk_id,
        table,
        attempt=attempt,
        policy=policy,
    )
    if result.needs_retry:
        raise self.retry(countdown=result.retry_in, max_retries=policy.max_attempts)
    return result.to_dict()


@celery_app.task(name="deletion.finalize")
def finalize_deletion(results: List[Dict[str, Any]], job_id: str) -> Dict[str, Any]:
    status = finalize_deletion_job(get_database_client(), job_id, results or [])
    return {"job_id": job_id, "status": status}


def _dispatch(job_id: str, clerk_id: str, tables: List[str]) -> int:
    header = [delete_table_rows.s(job_id, clerk_id, table) for table in tables]
    chord(header)(finalize_deletion.s(job_id))
    logger.info("Dispatched %s deletion branches for job %s", len(header), job_id)
    return len(header)


def enqueue_user_data_deletion(clerk_id: str, db: Optional[DatabaseClient] = None) -> str:
    """Record a deletion job and dispatch its branches. Returns the job id."""

    db = db or get_database_client()
    job = start_deletion_job(db, clerk_id)
    tables = [step["table_name"] for step in list_steps(db, job["id"])]
    _dispatch(job["id"], clerk_id, tables)
    return job["id"]


def redispatch_failed_branches(job_id: str, db: Optional[DatabaseClient] = None) -> List[str]:
    """Run the failed tables of a finished job again. Returns the tables dispatched."""

    db = db or get_database_client()
    job = db.get_row("deletion_jobs", job_id)
    if not job:
        raise ValueError(f"Unknown deletion job {job_id}")
    tables = reopen_failed_steps(db, job_id)
    if tables:
        _dispatch(job_id, job["clerk_id"], tables)
    return tables


__all__ = [
    "delete_table_rows",
    "enqueue_user_data_deletion",
    "finalize_deletion",
    "redispatch_failed_branches",
]
