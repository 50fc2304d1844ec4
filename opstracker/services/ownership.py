"""Caller identity and row ownership checks."""

from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

from ..db import DatabaseClient, get_table
from ..errors import AuthenticationRequired, NotFoundError


def require_identity(user_id: Optional[str]) -> str:
    """Mutations fail closed when no caller identity was resolved."""

    if not user_id:
        raise AuthenticationRequired()
    return user_id


def _is_row_id(value: Any) -> bool:
    try:
        uuid.UUID(str(value))
    except (TypeError, ValueError):
        return False
    return True


def get_owned_or_raise(
    db: DatabaseClient,
    table: str,
    row_id: Any,
    user_id: str,
) -> Dict[str, Any]:
    """Fetch a row and confirm the caller owns it.

    Malformed ids, missing rows and rows owned by another user all raise the
    same ``NotFoundError``.
    """

    table_def = get_table(table)
    if not _is_row_id(row_id):
        raise NotFoundError.for_label(table_def.label)

    row = db.get_row(table, str(row_id))
    if not row or row.get(table_def.owner_column) != user_id:
        raise NotFoundError.for_label(table_def.label)
    return row
