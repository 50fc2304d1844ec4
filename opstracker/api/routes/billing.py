"""Subscription status for the signed-in user."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from opstracker.api.dependencies import get_database, get_optional_user_id
from opstracker.api.schemas import SubscriptionStatus
from opstracker.billing import BillingManager
from opstracker.db import DatabaseClient

router = APIRouter()


@router.get("/billing/subscription", response_model=Optional[SubscriptionStatus])
def read_subscription_status(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[SubscriptionStatus]:
    status_payload = BillingManager(db).get_subscription_status(user_id)
    if status_payload is None:
        return None
    return SubscriptionStatus(**status_payload)
