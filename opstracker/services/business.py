"""Business profile, milestone goals and setup tools."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional

from ..db import DatabaseClient
from .ownership import get_owned_or_raise, require_identity
from .validation import pick_fields, require_text

BUSINESS_INFO_FIELDS = (
    "business_name",
    "dba_registration_date",
    "services_offered",
    "pricing_structure",
    "business_email",
    "business_phone",
    "target_customer",
)


def _now_ms() -> int:
    return int(time.time() * 1000)


def get_business_info(db: DatabaseClient, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
    if not user_id:
        return None
    return db.find_one("business_info", {"user_id": user_id})


def update_business_info(
    db: DatabaseClient,
    user_id: Optional[str],
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """Patch the caller's business profile, creating it if the seed row is missing."""

    user_id = require_identity(user_id)
    updates = pick_fields(fields, BUSINESS_INFO_FIELDS)
    updates["business_name"] = require_text(updates.get("business_name"), "business_name")

    existing = db.find_one("business_info", {"user_id": user_id})
    if not existing:
        return db.insert_row("business_info", {"user_id": user_id, **updates})
    return db.update_row("business_info", existing["id"], updates) or {**existing, **updates}


def get_goals(db: DatabaseClient, user_id: Optional[str]) -> Optional[List[Dict[str, Any]]]:
    if not user_id:
        return None
    return db.select_rows("user_goals", {"user_id": user_id})


def get_tools(db: DatabaseClient, user_id: Optional[str]) -> Optional[List[Dict[str, Any]]]:
    if not user_id:
        return None
    return db.select_rows("user_tools", {"user_id": user_id})


def toggle_goal(db: DatabaseClient, user_id: Optional[str], goal_id: str, is_achieved: bool) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    goal = get_owned_or_raise(db, "user_goals", goal_id, user_id)
    updates = {
        "is_achieved": bool(is_achieved),
        "achieved_date": _now_ms() if is_achieved else None,
    }
    return db.update_row("user_goals", goal["id"], updates) or {**goal, **updates}


def toggle_tool(db: DatabaseClient, user_id: Optional[str], tool_id: str, is_set_up: bool) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    tool = get_owned_or_raise(db, "user_tools", tool_id, user_id)
    updates = {"is_set_up": bool(is_set_up)}
    return db.update_row("user_tools", tool["id"], updates) or {**tool, **updates}
