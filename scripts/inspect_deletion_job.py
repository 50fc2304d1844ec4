"""Utility to inspect a user-data deletion job and optionally rerun its failed tables.

Run with:

    python -m scripts.inspect_deletion_job --job-id <uuid>
    python -m scripts.inspect_deletion_job --job-id <uuid> --retry-failed

Requires SUPABASE_URL/SUPABASE_SERVICE_ROLE_KEY, and CELERY_BROKER_URL for
--retry-failed.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict


def get_database():
    from opstracker.db import get_database_client  # Lazy import to ensure env is loaded

    return get_database_client()


def dump(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, indent=2, sort_keys=True, default=str)


def inspect_job(job_id: str, *, retry_failed: bool = False) -> int:
    from opstracker.workflows.deletion import list_steps

    db = get_database()
    job = db.get_row("deletion_jobs", job_id)
    if not job:
        print("No deletion job found", file=sys.stderr)
        return 1

    print("Job record:\n" + dump(job))
    for step in sorted(list_steps(db, job_id), key=lambda row: row.get("table_name") or ""):
        print(
            f"  {step.get('table_name'):<20} {step.get('status'):<10} "
            f"attempts={step.get('attempts')} deleted={step.get('deleted_count')} "
            f"error={step.get('last_error') or '-'}"
        )

    if retry_failed:
        from opstracker.worker.tasks import redispatch_failed_branches

        tables = redispatch_failed_branches(job_id, db)
        if tables:
            print("\nRedispatched: " + ", ".join(tables))
        else:
            print("\nNo failed tables to rerun")

    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Inspect a user-data deletion job")
    parser.add_argument("--job-id", required=True, help="Deletion job UUID")
    parser.add_argument("--retry-failed", action="store_true", help="Rerun tables whose branch failed")
    args = parser.parse_args()

    return inspect_job(args.job_id, retry_failed=args.retry_failed)


if __name__ == "__main__":
    raise SystemExit(main())
