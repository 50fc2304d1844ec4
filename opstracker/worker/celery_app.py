"""Celery application that runs the user-data deletion branches."""

from __future__ import annotations

import os

from celery import Celery

from ..config import CONFIG, load_envs

if os.getenv("ENV", "dev").lower() == "dev" and os.path.isfile(".env"):
    load_envs()


def build_celery_app() -> Celery:
    app = Celery(
        "opstracker",
        broker=CONFIG.celery_broker_url,
        backend=CONFIG.celery_result_backend,
        include=["opstracker.worker.tasks"],
    )
    app.conf.update(
        task_default_queue=CONFIG.celery_default_queue,
        task_always_eager=CONFIG.celery_task_always_eager,
        # Branch deletions are idempotent; redeliver them if a worker dies mid-run.
        task_acks_late=True,
        task_reject_on_worker_lost=True,
        worker_prefetch_multiplier=1,
        broker_connection_retry_on_startup=True,
        result_expires=CONFIG.celery_result_expires,
        enable_utc=True,
    )
    return app


celery_app = build_celery_app()


__all__ = ["build_celery_app", "celery_app"]
