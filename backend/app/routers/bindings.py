"""Monitor trigger binding API endpoints."""
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_current_user, require_editor
from ..database import get_db
from ..schemas.binding import MonitorTriggersResponse, MonitorTriggersUpdated
from ..services.bindings import binding_service
from ..utils.http import json_body
from ..utils.locks import write_locks

router = APIRouter(
    prefix="/api/monitors",
    tags=["monitors"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/{tag}/triggers", response_model=MonitorTriggersResponse)
async def get_monitor_triggers(tag: str, db: AsyncSession = Depends(get_db)):
    """Get the DOWN and DEGRADED trigger bindings of a monitor."""
    return await binding_service.get(db, tag)


# PUT and PATCH are the same partial update
@router.api_route(
    "/{tag}/triggers",
    methods=["PUT", "PATCH"],
    response_model=MonitorTriggersUpdated,
    dependencies=[Depends(require_editor)],
)
async def update_monitor_triggers(
    tag: str,
    payload: Any = Depends(json_body),
    db: AsyncSession = Depends(get_db),
):
    """Set either or both trigger bindings of a monitor."""
    async with write_locks.hold(f"monitor:{tag}"):
        bindings = await binding_service.update(db, tag, payload)
    return MonitorTriggersUpdated(**bindings)
