"""User records and first-sign-in seeding."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..billing import PlanKey
from ..db import DatabaseClient
from ..errors import NotFoundError

logger = logging.getLogger(__name__)

GOAL_CHECKLIST = (
    "First customer acquired",
    "First $100 day",
    "10 total customers",
    "DBA registered",
    "Business bank account opened",
    "First $1,000 revenue",
    "First repeat customer",
    "LLC filed",
    "First $10K month",
    "Hired first person",
)

TOOLS_STACK = (
    "Google Voice (business number)",
    "Business email",
    "Google Calendar (scheduling)",
    "Wave Accounting (invoicing)",
    "Payment methods (Venmo/CashApp/Zelle)",
    "Facebook Marketplace account",
    "Nextdoor account",
    "Canva account",
    "This workbook system",
)

DEFAULT_BUSINESS_NAME = "My New Business"


def get_user_by_clerk_id(db: DatabaseClient, clerk_id: str) -> Optional[Dict[str, Any]]:
    return db.get_user_by_clerk_id(clerk_id)


def seed_initial_data(db: DatabaseClient, clerk_id: str, email: str) -> None:
    """Insert the goal checklist, tool checklist and an empty business profile."""

    for goal in GOAL_CHECKLIST:
        db.insert_row("user_goals", {"user_id": clerk_id, "goal": goal, "is_achieved": False})

    for tool in TOOLS_STACK:
        db.insert_row("user_tools", {"user_id": clerk_id, "tool_name": tool, "is_set_up": False})

    db.insert_row(
        "business_info",
        {
            "user_id": clerk_id,
            "business_name": DEFAULT_BUSINESS_NAME,
            "dba_registration_date": "",
            "services_offered": "",
            "pricing_structure": "",
            "business_email": email,
            "business_phone": "",
            "target_customer": "",
        },
    )


def create_user_with_data(db: DatabaseClient, *, clerk_id: str, name: str, email: str) -> Dict[str, Any]:
    """Create a free-plan user and seed their starter rows.

    Replayed ``user.created`` events return the existing user untouched so
    the checklists are never seeded twice.
    """

    existing = db.get_user_by_clerk_id(clerk_id)
    if existing:
        logger.info("User %s already exists; skipping seed", clerk_id)
        return existing

    user = db.insert_row(
        "users",
        {
            "clerk_id": clerk_id,
            "name": name,
            "email": email,
            "plan": PlanKey.FREE.value,
        },
    )
    seed_initial_data(db, clerk_id, email)
    logger.info("Created user %s with starter data", clerk_id)
    return user


def update_user(db: DatabaseClient, *, clerk_id: str, name: str, email: str) -> Dict[str, Any]:
    user = db.get_user_by_clerk_id(clerk_id)
    if not user:
        raise NotFoundError.for_label("User")
    updated = db.update_row("users", user["id"], {"name": name, "email": email})
    return updated or {**user, "name": name, "email": email}
