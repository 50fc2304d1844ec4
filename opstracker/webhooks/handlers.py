"""Dispatch verified identity and billing webhook events."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from ..billing import BillingManager, coerce_int
from ..db import DatabaseClient
from ..services import users
from ..worker.tasks import enqueue_user_data_deletion

logger = logging.getLogger(__name__)

NO_EMAIL = "No Email"


def display_name(data: Mapping[str, Any]) -> str:
    first = data.get("first_name") or ""
    last = data.get("last_name") or ""
    return f"{first} {last}".strip()


def primary_email(data: Mapping[str, Any]) -> str:
    addresses = data.get("email_addresses") or []
    if addresses and isinstance(addresses[0], Mapping):
        return addresses[0].get("email_address") or NO_EMAIL
    return NO_EMAIL


def _event_parts(event: Mapping[str, Any]) -> tuple[str, Dict[str, Any]]:
    event_type = str(event.get("type") or "unknown")
    data = event.get("data") or {}
    return event_type, data if isinstance(data, dict) else {}


def handle_clerk_event(db: DatabaseClient, event: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply a user lifecycle event. Unknown types are acknowledged and ignored."""

    event_type, data = _event_parts(event)
    clerk_id = data.get("id")
    processed = False

    if event_type == "user.created" and clerk_id:
        users.create_user_with_data(db, clerk_id=clerk_id, name=display_name(data), email=primary_email(data))
        processed = True
    elif event_type == "user.updated" and clerk_id:
        users.update_user(db, clerk_id=clerk_id, name=display_name(data), email=primary_email(data))
        processed = True
    elif event_type == "user.deleted" and clerk_id:
        job_id = enqueue_user_data_deletion(clerk_id)
        logger.info("Started data deletion job %s for %s", job_id, clerk_id)
        processed = True
    else:
        logger.info("Ignoring identity webhook %s", event_type)

    return {"processed": processed, "event_type": event_type}


def handle_billing_event(db: DatabaseClient, event: Mapping[str, Any]) -> Dict[str, Any]:
    """Apply a subscription event to the matching user."""

    event_type, data = _event_parts(event)
    billing = BillingManager(db)
    processed = False

    if event_type in {"subscription.created", "subscription.updated"}:
        plan = data.get("plan") or {}
        period_end = coerce_int(data.get("current_period_end"))
        processed = billing.apply_subscription(
            clerk_id=str(data.get("user_id") or ""),
            subscription_id=str(data.get("id") or ""),
            plan_name=plan.get("name") if isinstance(plan, Mapping) else None,
            ends_at=period_end * 1000 if period_end is not None else None,
        )
    elif event_type == "subscription.deleted":
        processed = billing.cancel_subscription(str(data.get("id") or ""))
    else:
        logger.info("Ignoring billing webhook %s", event_type)

    return {"processed": processed, "event_type": event_type}
