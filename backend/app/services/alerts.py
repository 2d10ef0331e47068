"""Alert history queries."""
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..errors import BadRequest
from ..models import Alert, Monitor


@dataclass
class PageRequest:
    """Validated page/limit pair for alert listing."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_int(raw: Optional[str]) -> Optional[int]:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_page_request(page: Optional[str], limit: Optional[str]) -> PageRequest:
    """Validate query params; ``limit`` above the maximum is clamped, not rejected."""
    page_num = _parse_int(page) if page else 1
    if page_num is None or page_num < 1:
        raise BadRequest("Invalid page number. Must be >= 1")

    limit_num = _parse_int(limit) if limit else settings.alerts_page_size
    if limit_num is None or limit_num < 1:
        raise BadRequest("Invalid limit. Must be >= 1")

    return PageRequest(page=page_num, limit=min(limit_num, settings.alerts_max_page_size))


def pagination(request: PageRequest, total: int) -> dict:
    total_pages = math.ceil(total / request.limit)
    return {
        "page": request.page,
        "limit": request.limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": request.page < total_pages,
        "hasPrev": request.page > 1,
    }


class AlertService:
    """Read-only access to alerts raised by the monitoring engine."""

    async def get_page(self, db: AsyncSession, request: PageRequest) -> Tuple[List[tuple], int]:
        """Return ``(rows, total)``; rows are ``(alert, monitor_tag, monitor_name)``, newest first."""
        total = await db.scalar(select(func.count()).select_from(Alert)) or 0
        # Pages past the end are empty; their offset may not even fit in an SQL integer
        if request.offset >= total:
            return [], total

        result = await db.execute(
            select(Alert, Monitor.tag, Monitor.name)
            .outerjoin(Monitor, Alert.monitor_id == Monitor.id)
            .order_by(Alert.created_at.desc(), Alert.id.desc())
            .offset(request.offset)
            .limit(request.limit)
        )
        return list(result.all()), total


alert_service = AlertService()
