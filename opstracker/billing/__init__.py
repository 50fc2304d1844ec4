"""Subscription plans and plan-based feature gating."""

from .manager import BillingManager
from .plans import LIMITED_TABLES, PlanContext, PlanKey, PlanLimits, coerce_int, normalize_plan

__all__ = [
    "BillingManager",
    "LIMITED_TABLES",
    "PlanContext",
    "PlanKey",
    "PlanLimits",
    "coerce_int",
    "normalize_plan",
]
