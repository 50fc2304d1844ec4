"""Revenue and expense ledger."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ..billing import BillingManager
from ..db import DatabaseClient
from ..errors import ValidationFailed
from .aggregation import summarize_financials
from .ownership import get_owned_or_raise, require_identity
from .validation import parse_iso_date, parse_month, pick_fields, require_non_negative

logger = logging.getLogger(__name__)

ENTRY_TYPES = ("revenue", "expense")
ENTRY_FIELDS = ("date", "type", "amount", "category", "notes")


def _check_type(value: Any) -> str:
    entry_type = str(value or "").strip().lower()
    if entry_type not in ENTRY_TYPES:
        raise ValidationFailed("type must be 'revenue' or 'expense'")
    return entry_type


def add_entry(
    db: DatabaseClient,
    user_id: Optional[str],
    *,
    date: str,
    type: str,
    amount: float,
    category: Optional[str] = None,
    notes: Optional[str] = None,
) -> Dict[str, Any]:
    """Record a ledger entry, subject to the caller's plan ceiling."""

    user_id = require_identity(user_id)
    payload: Dict[str, Any] = {
        "user_id": user_id,
        "date": parse_iso_date(date),
        "type": _check_type(type),
        "amount": require_non_negative(amount, "amount"),
    }
    if category is not None:
        payload["category"] = category
    if notes is not None:
        payload["notes"] = notes

    BillingManager(db).ensure_can_create(user_id, "financial_entries")
    return db.insert_row("financial_entries", payload)


def update_entry(
    db: DatabaseClient,
    user_id: Optional[str],
    entry_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    user_id = require_identity(user_id)
    updates = pick_fields(fields, ENTRY_FIELDS)
    if "date" in updates:
        updates["date"] = parse_iso_date(updates["date"])
    if "type" in updates:
        updates["type"] = _check_type(updates["type"])
    if "amount" in updates:
        updates["amount"] = require_non_negative(updates["amount"], "amount")

    entry = get_owned_or_raise(db, "financial_entries", entry_id, user_id)
    if not updates:
        return entry
    return db.update_row("financial_entries", entry["id"], updates) or {**entry, **updates}


def delete_entry(db: DatabaseClient, user_id: Optional[str], entry_id: str) -> None:
    user_id = require_identity(user_id)
    entry = get_owned_or_raise(db, "financial_entries", entry_id, user_id)
    db.delete_row("financial_entries", entry["id"])


def get_monthly_financials(db: DatabaseClient, user_id: Optional[str], month: str) -> Optional[Dict[str, Any]]:
    """Entries for a ``YYYY-MM`` month, newest first, with the month's totals."""

    if not user_id:
        return None
    start, following = parse_month(month)
    entries = db.select_rows(
        "financial_entries",
        {"user_id": user_id},
        gte={"date": start},
        lt={"date": following},
        order_by="date",
        descending=True,
    )
    return {
        "entries": entries,
        "summary": summarize_financials(entries).to_dict(),
    }
