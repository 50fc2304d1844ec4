"""Business profile, goal checklist and tool checklist endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from opstracker.api.dependencies import get_current_user_id, get_database, get_optional_user_id
from opstracker.api.schemas import BusinessInfoUpdate, GoalToggle, ToolToggle
from opstracker.db import DatabaseClient
from opstracker.services import business

router = APIRouter()


@router.get("/business-info")
def read_business_info(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return business.get_business_info(db, user_id)


@router.put("/business-info")
def write_business_info(
    body: BusinessInfoUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return business.update_business_info(db, user_id, body.model_dump(exclude_unset=True))


@router.get("/goals")
def list_goals(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[List[Dict[str, Any]]]:
    return business.get_goals(db, user_id)


@router.post("/goals/{goal_id}/toggle")
def toggle_goal(
    goal_id: str,
    body: GoalToggle,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return business.toggle_goal(db, user_id, goal_id, body.is_achieved)


@router.get("/tools")
def list_tools(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[List[Dict[str, Any]]]:
    return business.get_tools(db, user_id)


@router.post("/tools/{tool_id}/toggle")
def toggle_tool(
    tool_id: str,
    body: ToolToggle,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return business.toggle_tool(db, user_id, tool_id, body.is_set_up)
