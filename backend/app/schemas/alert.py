"""Alert history schemas."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class AlertResponse(BaseModel):
    """A single alert with the monitor it belongs to."""
    id: int
    monitor_id: int
    monitor_tag: Optional[str] = None
    monitor_name: Optional[str] = None
    alert_type: str  # down, degraded
    alert_status: str  # TRIGGERED, RESOLVED
    severity: Optional[str] = None
    payload: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


class AlertPage(BaseModel):
    """Paginated alert history."""
    alerts: List[AlertResponse]
    pagination: Pagination
