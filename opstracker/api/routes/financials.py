"""Financial ledger endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from opstracker.api.dependencies import get_current_user_id, get_database, get_optional_user_id
from opstracker.api.schemas import FinancialEntryCreate, FinancialEntryUpdate
from opstracker.db import DatabaseClient
from opstracker.services import financials

router = APIRouter()


@router.get("/financials")
def read_monthly_financials(
    month: str = Query(..., description="YYYY-MM"),
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return financials.get_monthly_financials(db, user_id, month)


@router.post("/financials", status_code=status.HTTP_201_CREATED)
def add_entry(
    body: FinancialEntryCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return financials.add_entry(db, user_id, **body.model_dump())


@router.patch("/financials/{entry_id}")
def update_entry(
    entry_id: str,
    body: FinancialEntryUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return financials.update_entry(db, user_id, entry_id, body.model_dump(exclude_unset=True))


@router.delete("/financials/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    financials.delete_entry(db, user_id, entry_id)
