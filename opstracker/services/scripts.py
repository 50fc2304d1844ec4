"""Sales scripts and objection handlers."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..billing import BillingManager
from ..db import DatabaseClient
from .ownership import get_owned_or_raise, require_identity
from .validation import pick_fields, require_text

SCRIPT_FIELDS = ("title", "content")
HANDLER_FIELDS = ("objection", "response")


def get_scripts_and_handlers(db: DatabaseClient, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return both libraries plus the caller's plan so the UI can show upgrade prompts."""

    if not user_id:
        return None
    user = db.get_user_by_clerk_id(user_id)
    if not user:
        return None

    filters = {"user_id": user_id}
    return {
        "scripts": db.select_rows("scripts", filters),
        "objection_handlers": db.select_rows("objection_handlers", filters),
        "plan": BillingManager(db).get_plan_context(user_id).plan.value,
    }


def add_script(db: DatabaseClient, user_id: Optional[str], *, title: str, content: str) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    payload = {
        "user_id": user_id,
        "title": require_text(title, "title"),
        "content": str(content or ""),
    }
    BillingManager(db).ensure_can_create(user_id, "scripts")
    return db.insert_row("scripts", payload)


def update_script(db: DatabaseClient, user_id: Optional[str], script_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    updates = pick_fields(fields, SCRIPT_FIELDS)
    if "title" in updates:
        updates["title"] = require_text(updates["title"], "title")
    script = get_owned_or_raise(db, "scripts", script_id, user_id)
    if not updates:
        return script
    return db.update_row("scripts", script["id"], updates) or {**script, **updates}


def delete_script(db: DatabaseClient, user_id: Optional[str], script_id: str) -> None:
    user_id = require_identity(user_id)
    script = get_owned_or_raise(db, "scripts", script_id, user_id)
    db.delete_row("scripts", script["id"])


def add_handler(db: DatabaseClient, user_id: Optional[str], *, objection: str, response: str) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    payload = {
        "user_id": user_id,
        "objection": require_text(objection, "objection"),
        "response": str(response or ""),
    }
    BillingManager(db).ensure_can_create(user_id, "objection_handlers")
    return db.insert_row("objection_handlers", payload)


def update_handler(db: DatabaseClient, user_id: Optional[str], handler_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    updates = pick_fields(fields, HANDLER_FIELDS)
    if "objection" in updates:
        updates["objection"] = require_text(updates["objection"], "objection")
    handler = get_owned_or_raise(db, "objection_handlers", handler_id, user_id)
    if not updates:
        return handler
    return db.update_row("objection_handlers", handler["id"], updates) or {**handler, **updates}


def delete_handler(db: DatabaseClient, user_id: Optional[str], handler_id: str) -> None:
    user_id = require_identity(user_id)
    handler = get_owned_or_raise(db, "objection_handlers", handler_id, user_id)
    db.delete_row("objection_handlers", handler["id"])
