"""Alert history API endpoints (read-only)."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_current_user
from ..database import get_db
from ..schemas.alert import AlertPage, AlertResponse
from ..services.alerts import alert_service, pagination, parse_page_request

router = APIRouter(
    prefix="/api/alerts",
    tags=["alerts"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=AlertPage)
async def list_alerts(
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),  # capped at ALERTS_MAX_PAGE_SIZE
    db: AsyncSession = Depends(get_db),
):
    """Get paginated alert history, newest first.

    Alerts are raised by monitor checks and cannot be changed here.
    """
    request = parse_page_request(page, limit)
    rows, total = await alert_service.get_page(db, request)

    alerts = [
        AlertResponse(
            id=alert.id,
            monitor_id=alert.monitor_id,
            monitor_tag=monitor_tag,
            monitor_name=monitor_name,
            alert_type=alert.alert_type,
            alert_status=alert.alert_status,
            severity=alert.severity,
            payload=alert.payload,
            created_at=alert.created_at,
            updated_at=alert.updated_at,
        )
        for alert, monitor_tag, monitor_name in rows
    ]

    return AlertPage(alerts=alerts, pagination=pagination(request, total))
