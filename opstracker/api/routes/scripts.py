"""Sales script and objection handler endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from opstracker.api.dependencies import get_current_user_id, get_database, get_optional_user_id
from opstracker.api.schemas import HandlerCreate, HandlerUpdate, ScriptCreate, ScriptUpdate
from opstracker.db import DatabaseClient
from opstracker.services import scripts

router = APIRouter()


@router.get("/scripts")
def read_scripts_and_handlers(
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Optional[Dict[str, Any]]:
    return scripts.get_scripts_and_handlers(db, user_id)


@router.post("/scripts", status_code=status.HTTP_201_CREATED)
def add_script(
    body: ScriptCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return scripts.add_script(db, user_id, title=body.title, content=body.content)


@router.patch("/scripts/{script_id}")
def update_script(
    script_id: str,
    body: ScriptUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return scripts.update_script(db, user_id, script_id, body.model_dump(exclude_unset=True))


@router.delete("/scripts/{script_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_script(
    script_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    scripts.delete_script(db, user_id, script_id)


@router.post("/objection-handlers", status_code=status.HTTP_201_CREATED)
def add_handler(
    body: HandlerCreate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return scripts.add_handler(db, user_id, objection=body.objection, response=body.response)


@router.patch("/objection-handlers/{handler_id}")
def update_handler(
    handler_id: str,
    body: HandlerUpdate,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> Dict[str, Any]:
    return scripts.update_handler(db, user_id, handler_id, body.model_dump(exclude_unset=True))


@router.delete("/objection-handlers/{handler_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_handler(
    handler_id: str,
    user_id: str = Depends(get_current_user_id),
    db: DatabaseClient = Depends(get_database),
) -> None:
    scripts.delete_handler(db, user_id, handler_id)
