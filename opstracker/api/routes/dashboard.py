"""Dashboard endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from opstracker.api.dependencies import get_database, get_optional_user_id
from opstracker.db import DatabaseClient
from opstracker.services import dashboard

router = APIRouter()


@router.get("/dashboard")
def read_dashboard(
    start_date: str = Query(..., description="Inclusive YYYY-MM-DD"),
    end_date: str = Query(..., description="Inclusive YYYY-MM-DD"),
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return dashboard.get_dashboard_data(db, user_id, start_date, end_date)


@router.get("/dashboard/monthly-growth")
def read_monthly_growth(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[List[Dict[str, Any]]]:
    return dashboard.get_monthly_growth_data(db, user_id)
