"""Environment-driven runtime settings for the operations tracker."""

from __future__ import annotations

import os
from types import SimpleNamespace
from typing import Optional, Tuple


def _env_str(
    name: str,
    default: Optional[str] = None,
    *,
    alias: Optional[str] = None,
    empty_to_none: bool = True,
) -> Optional[str]:
    raw = os.getenv(name)
    if raw is None and alias:
        raw = os.getenv(alias)
    if raw is None:
        return default
    value = raw.strip()
    if not value and empty_to_none:
        return None if default is None else default
    return value if value else default


def _env_bool(name: str, default: bool, *, alias: Optional[str] = None) -> bool:
    raw = os.getenv(name)
    if raw is None and alias:
        raw = os.getenv(alias)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_tuple(name: str, default: Tuple[str, ...] = ()) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if not raw:
        return tuple(default)
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or tuple(default)


class Settings(SimpleNamespace):
    """Simple attribute container used throughout the codebase."""


CONFIG = Settings()


def _compute_values() -> dict[str, object]:
    # -----------------------------------------------------------------------
    # RUNTIME ENVIRONMENT
    # -----------------------------------------------------------------------
    environment = _env_str("ENV", "prod", empty_to_none=False).lower()
    if environment not in {"dev", "test", "prod"}:
        environment = "prod"
    log_level = (_env_str("LOG_LEVEL", "INFO") or "INFO").upper()

    # -----------------------------------------------------------------------
    # SUPABASE (document store)
    # -----------------------------------------------------------------------
    supabase_url = _env_str("SUPABASE_URL")
    supabase_service_role_key = _env_str("SUPABASE_SERVICE_ROLE_KEY")
    supabase_anon_key = _env_str("SUPABASE_ANON_KEY")

    # -----------------------------------------------------------------------
    # CLERK (identity + billing provider)
    # -----------------------------------------------------------------------
    clerk_jwt_key = _env_str("CLERK_JWT_KEY")
    if clerk_jwt_key:
        # PEM keys are often stored on a single line with escaped newlines.
        clerk_jwt_key = clerk_jwt_key.replace("\\n", "\n")
    clerk_jwks_url = _env_str("CLERK_JWKS_URL")
    clerk_issuer = _env_str("CLERK_ISSUER")
    clerk_authorized_parties = _env_tuple("CLERK_AUTHORIZED_PARTIES")
    clerk_webhook_secret = _env_str("CLERK_WEBHOOK_SECRET")
    clerk_billing_webhook_secret = _env_str("CLERK_BILLING_WEBHOOK_SECRET")

    # -----------------------------------------------------------------------
    # API
    # -----------------------------------------------------------------------
    api_title = _env_str("API_TITLE", "Operations Tracker API")
    api_version = _env_str("API_VERSION", "1.0.0")
    api_cors_origins = _env_tuple("API_CORS_ORIGINS")

    # -----------------------------------------------------------------------
    # WORKER / DELETION WORKFLOW
    # -----------------------------------------------------------------------
    celery_broker_url = _env_str("CELERY_BROKER_URL", "redis://localhost:6379/0")
    celery_result_backend = _env_str("CELERY_RESULT_BACKEND", celery_broker_url)
    celery_default_queue = _env_str("CELERY_DEFAULT_QUEUE", "opstracker")
    celery_task_always_eager = _env_bool("CELERY_TASK_ALWAYS_EAGER", False)
    celery_result_expires = max(_env_int("CELERY_RESULT_EXPIRES", 86400), 0)
    deletion_max_attempts = max(_env_int("DELETION_MAX_ATTEMPTS", 5), 1)
    deletion_initial_backoff_ms = max(_env_int("DELETION_INITIAL_BACKOFF_MS", 500), 0)
    deletion_max_backoff_seconds = max(_env_int("DELETION_MAX_BACKOFF_SECONDS", 60), 1)

    # -----------------------------------------------------------------------
    # PLAN LIMITS (free tier)
    # -----------------------------------------------------------------------
    free_plan_financial_entry_limit = _env_int("FREE_PLAN_FINANCIAL_ENTRY_LIMIT", 50)
    free_plan_script_limit = _env_int("FREE_PLAN_SCRIPT_LIMIT", 3)
    free_plan_handler_limit = _env_int("FREE_PLAN_HANDLER_LIMIT", 5)

    return {
        "environment": environment,
        "is_development": environment == "dev",
        "log_level": log_level,
        "supabase_url": supabase_url,
        "supabase_service_role_key": supabase_service_role_key,
        "supabase_anon_key": supabase_anon_key,
        "clerk_jwt_key": clerk_jwt_key,
        "clerk_jwks_url": clerk_jwks_url,
        "clerk_issuer": clerk_issuer,
        "clerk_authorized_parties": clerk_authorized_parties,
        "clerk_webhook_secret": clerk_webhook_secret,
        "clerk_billing_webhook_secret": clerk_billing_webhook_secret,
        "api_title": api_title,
        "api_version": api_version,
        "api_cors_origins": api_cors_origins,
        "celery_broker_url": celery_broker_url,
        "celery_result_backend": celery_result_backend,
        "celery_default_queue": celery_default_queue,
        "celery_task_always_eager": celery_task_always_eager,
        "celery_result_expires": celery_result_expires,
        "deletion_max_attempts": deletion_max_attempts,
        "deletion_initial_backoff_ms": deletion_initial_backoff_ms,
        "deletion_max_backoff_seconds": deletion_max_backoff_seconds,
        "free_plan_financial_entry_limit": free_plan_financial_entry_limit,
        "free_plan_script_limit": free_plan_script_limit,
        "free_plan_handler_limit": free_plan_handler_limit,
    }


def reload_config() -> None:
    CONFIG.__dict__.update(_compute_values())


def load_envs(path: Optional[str] = None) -> None:
    """Load variables from a ``.env`` file and recompute ``CONFIG``."""
    from dotenv import load_dotenv

    load_dotenv(path)
    reload_config()


# Load once on import so downstream modules can use CONFIG immediately.
reload_config()
