"""Pipeline endpoints: leads, follow-ups and customers."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from opstracker.api.dependencies import get_current_user_id, get_database, get_optional_user_id
from opstracker.api.schemas import (
    CustomerCreate,
    CustomerUpdate,
    FollowUpCreate,
    FollowUpUpdate,
    LeadCreate,
    LeadUpdate,
)
from opstracker.db import DatabaseClient
from opstracker.services import pipeline

router = APIRouter()


@router.get("/pipeline")
def read_pipeline(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return pipeline.get_pipeline(db, user_id)


@router.post("/leads", status_code=status.HTTP_201_CREATED)
def add_lead(
    body: LeadCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return pipeline.add_lead(db, user_id, body.model_dump())


@router.patch("/leads/{lead_id}")
def update_lead(
    lead_id: str,
    body: LeadUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return pipeline.update_lead(db, user_id, lead_id, body.model_dump(exclude_unset=True))


@router.delete("/leads/{lead_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lead(
    lead_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    pipeline.delete_lead(db, user_id, lead_id)


@router.post("/follow-ups", status_code=status.HTTP_201_CREATED)
def add_follow_up(
    body: FollowUpCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return pipeline.add_follow_up(db, user_id, body.model_dump())


@router.patch("/follow-ups/{follow_up_id}")
def update_follow_up(
    follow_up_id: str,
    body: FollowUpUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return pipeline.update_follow_up(db, user_id, follow_up_id, body.model_dump(exclude_unset=True))


@router.delete("/follow-ups/{follow_up_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_follow_up(
    follow_up_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    pipeline.delete_follow_up(db, user_id, follow_up_id)


@router.post("/customers", status_code=status.HTTP_201_CREATED)
def add_customer(
    body: CustomerCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return pipeline.add_customer(db, user_id, body.model_dump())


@router.patch("/customers/{customer_id}")
def update_customer(
    customer_id: str,
    body: CustomerUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return pipeline.update_customer(db, user_id, customer_id, body.model_dump(exclude_unset=True))


@router.delete("/customers/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    pipeline.delete_customer(db, user_id, customer_id)
