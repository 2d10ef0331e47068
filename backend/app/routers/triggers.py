"""Trigger CRUD API endpoints."""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_current_user, require_editor
from ..database import get_db
from ..schemas.trigger import TriggerResponse, TriggerDeleted
from ..services.triggers import trigger_service
from ..utils.http import json_body

router = APIRouter(
    prefix="/api/triggers",
    tags=["triggers"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[TriggerResponse])
async def list_triggers(
    status: Optional[str] = Query(default=None),  # ACTIVE or INACTIVE
    db: AsyncSession = Depends(get_db),
):
    """List triggers, optionally only those with the given status."""
    return await trigger_service.get_all(db, status)


@router.post(
    "",
    response_model=TriggerResponse,
    status_code=201,
    dependencies=[Depends(require_editor)],
)
async def create_trigger(payload: Any = Depends(json_body), db: AsyncSession = Depends(get_db)):
    """Create a new trigger."""
    return await trigger_service.create(db, payload)


@router.get("/{trigger_id}", response_model=TriggerResponse)
async def get_trigger(trigger_id: int, db: AsyncSession = Depends(get_db)):
    """Get a trigger by ID."""
    return await trigger_service.get(db, trigger_id)


# PUT and PATCH are the same partial update
@router.api_route(
    "/{trigger_id}",
    methods=["PUT", "PATCH"],
    response_model=TriggerResponse,
    dependencies=[Depends(require_editor)],
)
async def update_trigger(
    trigger_id: int,
    payload: Any = Depends(json_body),
    db: AsyncSession = Depends(get_db),
):
    """Update the supplied fields of a trigger."""
    return await trigger_service.update(db, trigger_id, payload)


@router.delete("/{trigger_id}", response_model=TriggerDeleted, dependencies=[Depends(require_editor)])
async def delete_trigger(trigger_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a trigger."""
    deleted = await trigger_service.delete(db, trigger_id)
    return TriggerDeleted(
        message=f"Trigger '{deleted['name']}' deleted successfully",
        deleted=deleted,
    )
