"""FastAPI dependencies shared across the public API."""

from __future__ import annotations

from typing import Optional

from fastapi import Header

from ..auth import require_auth, resolve_identity
from ..db import DatabaseClient, get_database_client


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """Resolve the caller from the Clerk session token or fail with 401."""

    return require_auth(authorization)


def get_optional_user_id(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Resolve the caller if possible. Query endpoints answer ``null`` without one."""

    return resolve_identity(authorization)


def get_database() -> DatabaseClient:
    """Return the shared database client instance."""

    return get_database_client()
