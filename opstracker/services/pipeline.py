"""Sales pipeline: leads, follow-ups and customers."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Tuple

from ..db import DatabaseClient
from .ownership import get_owned_or_raise, require_identity
from .validation import parse_iso_date, pick_fields, require_non_negative, require_text

LEAD_FIELDS = ("name", "contact", "service_interest", "source", "date_added", "status", "next_action")
FOLLOW_UP_FIELDS = ("customer_name", "last_contact", "reason", "follow_up_date", "notes")
CUSTOMER_FIELDS = (
    "name",
    "contact",
    "first_job_date",
    "last_job_date",
    "total_jobs",
    "total_revenue",
    "referrals_given",
)

_DATE_FIELDS = ("date_added", "last_contact", "follow_up_date", "first_job_date", "last_job_date")
_COUNTER_FIELDS = ("total_jobs", "total_revenue", "referrals_given")


def _normalize(updates: Dict[str, Any]) -> Dict[str, Any]:
    for field in _DATE_FIELDS:
        if updates.get(field):
            updates[field] = parse_iso_date(updates[field], field)
    for field in _COUNTER_FIELDS:
        if field in updates:
            number = require_non_negative(updates[field], field)
            updates[field] = number if field == "total_revenue" else int(number)
    return updates


def get_pipeline(db: DatabaseClient, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
    if not user_id:
        return None
    filters = {"user_id": user_id}
    return {
        "leads": db.select_rows("leads", filters),
        "follow_ups": db.select_rows("follow_ups", filters),
        "customers": db.select_rows("customers", filters),
    }


def _add(db: DatabaseClient, user_id: Optional[str], table: str, allowed: Tuple[str, ...], fields: Mapping[str, Any], required: str) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    payload = _normalize(pick_fields(fields, allowed))
    payload[required] = require_text(payload.get(required), required)
    return db.insert_row(table, {"user_id": user_id, **payload})


def _update(db: DatabaseClient, user_id: Optional[str], table: str, allowed: Tuple[str, ...], row_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    updates = _normalize(pick_fields(fields, allowed))
    row = get_owned_or_raise(db, table, row_id, user_id)
    if not updates:
        return row
    return db.update_row(table, row["id"], updates) or {**row, **updates}


def _delete(db: DatabaseClient, user_id: Optional[str], table: str, row_id: str) -> None:
    user_id = require_identity(user_id)
    row = get_owned_or_raise(db, table, row_id, user_id)
    db.delete_row(table, row["id"])


# --- Leads ---
def add_lead(db: DatabaseClient, user_id: Optional[str], fields: Mapping[str, Any]) -> Dict[str, Any]:
    return _add(db, user_id, "leads", LEAD_FIELDS, fields, "name")


def update_lead(db: DatabaseClient, user_id: Optional[str], lead_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    return _update(db, user_id, "leads", LEAD_FIELDS, lead_id, fields)


def delete_lead(db: DatabaseClient, user_id: Optional[str], lead_id: str) -> None:
    _delete(db, user_id, "leads", lead_id)


# --- Follow-ups ---
def add_follow_up(db: DatabaseClient, user_id: Optional[str], fields: Mapping[str, Any]) -> Dict[str, Any]:
    return _add(db, user_id, "follow_ups", FOLLOW_UP_FIELDS, fields, "customer_name")


def update_follow_up(db: DatabaseClient, user_id: Optional[str], follow_up_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    return _update(db, user_id, "follow_ups", FOLLOW_UP_FIELDS, follow_up_id, fields)


def delete_follow_up(db: DatabaseClient, user_id: Optional[str], follow_up_id: str) -> None:
    _delete(db, user_id, "follow_ups", follow_up_id)


# --- Customers ---
def add_customer(db: DatabaseClient, user_id: Optional[str], fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Add a customer with starting counters; the counters are maintained by hand afterwards."""

    base = pick_fields(fields, ("name", "contact", "first_job_date"))
    first_job_date = parse_iso_date(base.get("first_job_date"), "first_job_date")
    payload = {
        **base,
        "first_job_date": first_job_date,
        "last_job_date": first_job_date,
        "total_jobs": 1,
        "total_revenue": 0,
        "referrals_given": 0,
    }
    return _add(db, user_id, "customers", CUSTOMER_FIELDS, payload, "name")


def update_customer(db: DatabaseClient, user_id: Optional[str], customer_id: str, fields: Mapping[str, Any]) -> Dict[str, Any]:
    return _update(db, user_id, "customers", CUSTOMER_FIELDS, customer_id, fields)


def delete_customer(db: DatabaseClient, user_id: Optional[str], customer_id: str) -> None:
    _delete(db, user_id, "customers", customer_id)
