"""Daily activity log and its child rows (appointments, outreach, completed jobs)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..db import DatabaseClient
from ..errors import ValidationFailed
from .ownership import get_owned_or_raise, require_identity
from .validation import parse_iso_date, pick_fields, require_non_negative

logger = logging.getLogger(__name__)

OUTREACH_RESPONSES = ("Y", "N", "M", "")
MAX_PRIORITIES = 3

OUTREACH_FIELDS = ("time", "method", "person", "response", "follow_up_needed")
JOB_FIELDS = ("customer", "service", "amount_charged", "is_paid", "referral_asked", "notes")
FAILURE_FIELDS = ("what", "why", "adjust")


def _empty_failure_data() -> Dict[str, str]:
    return {field: "" for field in FAILURE_FIELDS}


def _check_response(response: Any) -> str:
    value = "" if response is None else str(response)
    if value not in OUTREACH_RESPONSES:
        raise ValidationFailed("response must be one of Y, N, M or empty")
    return value


def _child_filters(user_id: str, log_id: str) -> Dict[str, Any]:
    return {"user_id": user_id, "daily_log_id": log_id}


def _get_log_or_raise(db: DatabaseClient, user_id: Optional[str], log_id: str) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    return get_owned_or_raise(db, "daily_logs", log_id, user_id)


# ----------------------------------------------------------------------
# Queries
# ----------------------------------------------------------------------
def get_for_date(db: DatabaseClient, user_id: Optional[str], date: str) -> Optional[Dict[str, Any]]:
    """Return the log for ``date`` with its children, or None when there is none."""

    if not user_id:
        return None
    day = parse_iso_date(date)
    log = db.find_one("daily_logs", {"user_id": user_id, "date": day})
    if not log:
        return None

    filters = _child_filters(user_id, log["id"])
    return {
        "log": log,
        "appointments": db.select_rows("appointments", filters),
        "outreach": db.select_rows("outreach_entries", filters),
        "jobs": db.select_rows("completed_jobs", filters),
    }


# ----------------------------------------------------------------------
# Log mutations
# ----------------------------------------------------------------------
def create_log(db: DatabaseClient, user_id: Optional[str], *, date: str, main_goal: str) -> Dict[str, Any]:
    """Start the day. Calling it again for the same date returns the existing log."""

    user_id = require_identity(user_id)
    day = parse_iso_date(date)

    existing = db.find_one("daily_logs", {"user_id": user_id, "date": day})
    if existing:
        return existing

    return db.insert_row(
        "daily_logs",
        {
            "user_id": user_id,
            "date": day,
            "main_goal": main_goal,
            "revenue_today": 0,
            "expenses_today": 0,
            "failure_data": _empty_failure_data(),
            "tomorrow_priorities": [""] * MAX_PRIORITIES,
        },
    )


def update_log_details(
    db: DatabaseClient,
    user_id: Optional[str],
    log_id: str,
    *,
    main_goal: Optional[str] = None,
    failure_data: Optional[Mapping[str, Any]] = None,
    tomorrow_priorities: Optional[List[str]] = None,
) -> Dict[str, Any]:
    log = _get_log_or_raise(db, user_id, log_id)

    updates: Dict[str, Any] = {}
    if main_goal is not None:
        updates["main_goal"] = main_goal
    if failure_data is not None:
        updates["failure_data"] = {field: str(failure_data.get(field) or "") for field in FAILURE_FIELDS}
    if tomorrow_priorities is not None:
        if len(tomorrow_priorities) > MAX_PRIORITIES:
            raise ValidationFailed(f"At most {MAX_PRIORITIES} priorities are allowed")
        updates["tomorrow_priorities"] = [str(item) for item in tomorrow_priorities]
    if not updates:
        return log
    return db.update_row("daily_logs", log["id"], updates) or {**log, **updates}


def update_expenses(db: DatabaseClient, user_id: Optional[str], log_id: str, expenses: float) -> Dict[str, Any]:
    """Replace the day's expense total."""

    amount = require_non_negative(expenses, "expenses")
    log = _get_log_or_raise(db, user_id, log_id)
    updates = {"expenses_today": amount}
    return db.update_row("daily_logs", log["id"], updates) or {**log, **updates}


# ----------------------------------------------------------------------
# Appointments
# ----------------------------------------------------------------------
def add_appointment(
    db: DatabaseClient,
    user_id: Optional[str],
    *,
    daily_log_id: str,
    time: str,
    customer: str,
    service: str,
) -> Dict[str, Any]:
    log = _get_log_or_raise(db, user_id, daily_log_id)
    return db.insert_row(
        "appointments",
        {
            "user_id": log["user_id"],
            "daily_log_id": log["id"],
            "time": time,
            "customer": customer,
            "service": service,
        },
    )


def delete_appointment(db: DatabaseClient, user_id: Optional[str], appointment_id: str) -> None:
    user_id = require_identity(user_id)
    appointment = get_owned_or_raise(db, "appointments", appointment_id, user_id)
    db.delete_row("appointments", appointment["id"])


# ----------------------------------------------------------------------
# Outreach
# ----------------------------------------------------------------------
def add_outreach(
    db: DatabaseClient,
    user_id: Optional[str],
    *,
    daily_log_id: str,
    time: str,
    method: str,
    person: str,
    response: str = "",
    follow_up_needed: bool = False,
) -> Dict[str, Any]:
    checked_response = _check_response(response)
    log = _get_log_or_raise(db, user_id, daily_log_id)
    return db.insert_row(
        "outreach_entries",
        {
            "user_id": log["user_id"],
            "daily_log_id": log["id"],
            "time": time,
            "method": method,
            "person": person,
            "response": checked_response,
            "follow_up_needed": bool(follow_up_needed),
        },
    )


def update_outreach(
    db: DatabaseClient,
    user_id: Optional[str],
    outreach_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    updates = pick_fields(fields, OUTREACH_FIELDS)
    if "response" in updates:
        updates["response"] = _check_response(updates["response"])
    entry = get_owned_or_raise(db, "outreach_entries", outreach_id, user_id)
    if not updates:
        return entry
    return db.update_row("outreach_entries", entry["id"], updates) or {**entry, **updates}


def delete_outreach(db: DatabaseClient, user_id: Optional[str], outreach_id: str) -> None:
    user_id = require_identity(user_id)
    entry = get_owned_or_raise(db, "outreach_entries", outreach_id, user_id)
    db.delete_row("outreach_entries", entry["id"])


# ----------------------------------------------------------------------
# Completed jobs
# ----------------------------------------------------------------------
def add_completed_job(
    db: DatabaseClient,
    user_id: Optional[str],
    *,
    daily_log_id: str,
    customer: str,
    service: str,
    amount_charged: float,
    is_paid: bool,
    referral_asked: bool = False,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Record a job; a paid job also adds its amount to the log's revenue."""

    amount = require_non_negative(amount_charged, "amount_charged")
    log = _get_log_or_raise(db, user_id, daily_log_id)

    payload: Dict[str, Any] = {
        "user_id": log["user_id"],
        "daily_log_id": log["id"],
        "customer": customer,
        "service": service,
        "amount_charged": amount,
        "is_paid": bool(is_paid),
        "referral_asked": bool(referral_asked),
    }
    if notes is not None:
        payload["notes"] = notes
    job = db.insert_row("completed_jobs", payload)

    if is_paid:
        revenue = float(log.get("revenue_today") or 0) + amount
        db.update_row("daily_logs", log["id"], {"revenue_today": revenue})
    return job


def update_completed_job(
    db: DatabaseClient,
    user_id: Optional[str],
    job_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """Edit a job. The parent log's revenue total is left as it was."""

    user_id = require_identity(user_id)
    updates = pick_fields(fields, JOB_FIELDS)
    if "amount_charged" in updates:
        updates["amount_charged"] = require_non_negative(updates["amount_charged"], "amount_charged")
    job = get_owned_or_raise(db, "completed_jobs", job_id, user_id)
    if not updates:
        return job
    return db.update_row("completed_jobs", job["id"], updates) or {**job, **updates}


def delete_completed_job(db: DatabaseClient, user_id: Optional[str], job_id: str) -> None:
    """Delete a job. The parent log's revenue total is left as it was."""

    user_id = require_identity(user_id)
    job = get_owned_or_raise(db, "completed_jobs", job_id, user_id)
    db.delete_row("completed_jobs", job["id"])
