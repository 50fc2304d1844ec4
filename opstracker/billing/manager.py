"""High-level billing helpers for resolving plans, enforcing limits and applying subscription events."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..db import DatabaseClient
from ..errors import NotFoundError, PlanLimitExceeded
from .plans import LIMITED_TABLES, PlanContext, PlanKey, normalize_plan


logger = logging.getLogger(__name__)


class BillingManager:
    """Facade that knows how to resolve plans, gate inserts and record subscription changes."""

    def __init__(self, db: DatabaseClient):
        self._db = db

    # ------------------------------------------------------------------
    # Plan resolution
    # ------------------------------------------------------------------
    def get_plan_context(self, user_id: str) -> PlanContext:
        """Resolve the user's plan; unknown users are reported as not found."""

        user = self._db.get_user_by_clerk_id(user_id)
        if not user:
            raise NotFoundError.for_label("User")
        return PlanContext.from_user_record(user)

    def get_subscription_status(self, user_id: Optional[str]) -> Optional[Dict[str, Any]]:
        """Return ``{"plan", "ends_at"}`` for the caller, or None when unavailable."""

        if not user_id:
            return None
        user = self._db.get_user_by_clerk_id(user_id)
        if not user:
            return None
        context = PlanContext.from_user_record(user)
        return {"plan": context.plan.value, "ends_at": context.ends_at}

    # ------------------------------------------------------------------
    # Enforcement helpers
    # ------------------------------------------------------------------
    def limit_error(self, plan: PlanContext, table: str, *, current_count: int) -> Optional[str]:
        """Return an upgrade message if another row would exceed the plan's ceiling."""

        limit = plan.limits.limit_for(table)
        if limit is None or current_count < limit:
            return None
        return f"Upgrade to Pro to add more than {limit} {LIMITED_TABLES[table]}."

    def ensure_can_create(self, user_id: str, table: str) -> PlanContext:
        """Raise ``PlanLimitExceeded`` before an insert the plan does not allow."""

        plan = self.get_plan_context(user_id)
        if plan.is_pro or plan.limits.limit_for(table) is None:
            return plan

        current = self._db.count_rows(table, {"user_id": user_id})
        message = self.limit_error(plan, table, current_count=current)
        if message:
            logger.info("Plan limit reached for %s on %s (%s rows)", user_id, table, current)
            raise PlanLimitExceeded(message, table=table, limit=plan.limits.limit_for(table))
        return plan

    # ------------------------------------------------------------------
    # Subscription events
    # ------------------------------------------------------------------
    def apply_subscription(
        self,
        *,
        clerk_id: str,
        subscription_id: str,
        plan_name: Optional[str],
        ends_at: Optional[int],
    ) -> bool:
        """Record a created/updated subscription. Returns False when the user is unknown."""

        user = self._db.get_user_by_clerk_id(clerk_id)
        if not user:
            logger.error("Subscription %s references unknown user %s", subscription_id, clerk_id)
            return False

        plan = normalize_plan(plan_name)
        self._db.update_row(
            "users",
            user["id"],
            {
                "plan": plan.value,
                "clerk_subscription_id": subscription_id,
                "subscription_ends_at": ends_at,
            },
        )
        logger.info("User %s moved to plan %s", clerk_id, plan.value)
        return True

    def cancel_subscription(self, subscription_id: str) -> bool:
        """Drop the user back to the free plan. Returns False when nothing matched."""

        user = self._db.get_user_by_subscription_id(subscription_id)
        if not user:
            logger.warning("Subscription %s not found, or user already deleted", subscription_id)
            return False

        self._db.update_row(
            "users",
            user["id"],
            {
                "plan": PlanKey.FREE.value,
                "clerk_subscription_id": None,
                "subscription_ends_at": None,
            },
        )
        logger.info("Subscription %s cancelled", subscription_id)
        return True
