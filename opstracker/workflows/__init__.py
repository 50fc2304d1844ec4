"""Long-running background workflows."""

from .deletion import (
    BranchResult,
    JobStatus,
    RetryPolicy,
    StepStatus,
    delete_user_rows,
    execute_branch,
    finalize_deletion_job,
    start_deletion_job,
)

__all__ = [
    "BranchResult",
    "JobStatus",
    "RetryPolicy",
    "StepStatus",
    "delete_user_rows",
    "execute_branch",
    "finalize_deletion_job",
    "start_deletion_job",
]
