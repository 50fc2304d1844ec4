"""Data structures describing subscription plans and their row limits."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from ..config import CONFIG


class PlanKey(str, Enum):
    """Subscription tiers."""

    FREE = "free"
    PRO = "pro"


# Tables whose row count is capped on the free tier, with the noun used in
# upgrade messages.
LIMITED_TABLES: Dict[str, str] = {
    "financial_entries": "financial entries",
    "scripts": "scripts",
    "objection_handlers": "objection handlers",
}


def normalize_plan(value: Any) -> PlanKey:
    """Map a stored or provider-supplied plan name onto a ``PlanKey``.

    Anything mentioning "pro" counts as the paid tier; everything else,
    including a missing value, is the free tier.
    """

    if isinstance(value, PlanKey):
        return value
    candidate = str(value or "").strip().lower()
    return PlanKey.PRO if "pro" in candidate else PlanKey.FREE


@dataclass
class PlanLimits:
    """Per-table row ceilings. ``None`` means unlimited."""

    financial_entries: Optional[int] = None
    scripts: Optional[int] = None
    objection_handlers: Optional[int] = None

    def limit_for(self, table: str) -> Optional[int]:
        if table not in LIMITED_TABLES:
            return None
        return getattr(self, table)

    @classmethod
    def for_plan(cls, plan: PlanKey) -> "PlanLimits":
        if plan is PlanKey.PRO:
            return cls()
        return cls(
            financial_entries=CONFIG.free_plan_financial_entry_limit,
            scripts=CONFIG.free_plan_script_limit,
            objection_handlers=CONFIG.free_plan_handler_limit,
        )

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {table: self.limit_for(table) for table in LIMITED_TABLES}


@dataclass
class PlanContext:
    """Resolved plan details for a user."""

    user_id: str
    plan: PlanKey
    ends_at: Optional[int] = None
    subscription_id: Optional[str] = None
    limits: PlanLimits = field(default_factory=PlanLimits)

    @property
    def is_pro(self) -> bool:
        return self.plan is PlanKey.PRO

    @classmethod
    def from_user_record(cls, record: Dict[str, Any]) -> "PlanContext":
        plan = normalize_plan(record.get("plan"))
        return cls(
            user_id=str(record.get("clerk_id") or ""),
            plan=plan,
            ends_at=coerce_int(record.get("subscription_ends_at")),
            subscription_id=record.get("clerk_subscription_id"),
            limits=PlanLimits.for_plan(plan),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plan": self.plan.value,
            "ends_at": self.ends_at,
            "limits": self.limits.to_dict(),
        }


def coerce_int(value: Any) -> Optional[int]:
    if value in (None, "", "null", "None"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
