"""Background worker components for the operations tracker."""

from .celery_app import celery_app
from .tasks import delete_table_rows, enqueue_user_data_deletion, finalize_deletion

__all__ = ["celery_app", "delete_table_rows", "enqueue_user_data_deletion", "finalize_deletion"]
