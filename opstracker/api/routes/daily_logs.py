"""Daily log endpoints, including appointments, outreach and completed jobs."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status

from opstracker.api.dependencies import get_current_user_id, get_database, get_optional_user_id
from opstracker.api.schemas import (
    AppointmentCreate,
    CompletedJobCreate,
    CompletedJobUpdate,
    DailyLogCreate,
    ExpensesUpdate,
    LogDetailsUpdate,
    OutreachCreate,
    OutreachUpdate,
)
from opstracker.db import DatabaseClient
from opstracker.services import daily_logs

router = APIRouter()


@router.get("/daily-logs")
def read_log_for_date(
    date: str = Query(..., description="YYYY-MM-DD"),
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return daily_logs.get_for_date(db, user_id, date)


@router.post("/daily-logs", status_code=status.HTTP_201_CREATED)
def create_log(
    body: DailyLogCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.create_log(db, user_id, date=body.date, main_goal=body.main_goal)


@router.patch("/daily-logs/{log_id}")
def update_log_details(
    log_id: str,
    body: LogDetailsUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.update_log_details(
        db,
        user_id,
        log_id,
        main_goal=body.main_goal,
        failure_data=body.failure_data.model_dump() if body.failure_data else None,
        tomorrow_priorities=body.tomorrow_priorities,
    )


@router.put("/daily-logs/{log_id}/expenses")
def update_expenses(
    log_id: str,
    body: ExpensesUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.update_expenses(db, user_id, log_id, body.expenses)


# --- Appointments ---
@router.post("/appointments", status_code=status.HTTP_201_CREATED)
def add_appointment(
    body: AppointmentCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.add_appointment(db, user_id, **body.model_dump())


@router.delete("/appointments/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_appointment(
    appointment_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    daily_logs.delete_appointment(db, user_id, appointment_id)


# --- Outreach ---
@router.post("/outreach", status_code=status.HTTP_201_CREATED)
def add_outreach(
    body: OutreachCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.add_outreach(db, user_id, **body.model_dump())


@router.patch("/outreach/{outreach_id}")
def update_outreach(
    outreach_id: str,
    body: OutreachUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.update_outreach(db, user_id, outreach_id, body.model_dump(exclude_unset=True))


@router.delete("/outreach/{outreach_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_outreach(
    outreach_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    daily_logs.delete_outreach(db, user_id, outreach_id)


# --- Completed jobs ---
@router.post("/jobs", status_code=status.HTTP_201_CREATED)
def add_completed_job(
    body: CompletedJobCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.add_completed_job(db, user_id, **body.model_dump())


@router.patch("/jobs/{job_id}")
def update_completed_job(
    job_id: str,
    body: CompletedJobUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return daily_logs.update_completed_job(db, user_id, job_id, body.model_dump(exclude_unset=True))


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_completed_job(
    job_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    daily_logs.delete_completed_job(db, user_id, job_id)
