"""Monitor trigger bindings - what fires when a monitor goes DOWN or DEGRADED.

Each monitor keeps two optional JSON objects, ``down_trigger`` and
``degraded_trigger``. Writes are validated strictly. Reads are lenient: a
stored value that no longer parses is logged and reported as absent instead of
failing the request.
"""
import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFound
from ..models import Monitor
from ..schemas.binding import DegradedTriggerUpdate, DownTriggerUpdate, MonitorTriggersUpdate
from ..utils.db_utils import retry_on_lock
from .merger import MergeRules, MergeValidationError, merge

logger = logging.getLogger(__name__)

# Binding column -> the health state it reacts to
SIDES = {
    "down_trigger": "DOWN",
    "degraded_trigger": "DEGRADED",
}

BINDING_RULES = {
    "down_trigger": MergeRules(model=DownTriggerUpdate),
    "degraded_trigger": MergeRules(model=DegradedTriggerUpdate),
}


def parse_binding(monitor: Monitor, side: str) -> Optional[Dict[str, Any]]:
    """Decode a stored binding, treating unreadable values as absent."""
    raw = getattr(monitor, side)
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Ignoring unreadable {side} on monitor '{monitor.tag}': {e}")
        return None
    if value is not None and not isinstance(value, dict):
        logger.warning(f"Ignoring {side} on monitor '{monitor.tag}': expected an object")
        return None
    return value


def merge_binding(current: Optional[Dict[str, Any]], update: Any, side: str) -> Dict[str, Any]:
    """Merge one side's update onto its stored config.

    Raises:
        MergeValidationError: with the message prefixed by ``side``.
    """
    base = current if current is not None else {"trigger_type": SIDES[side]}
    try:
        return merge(base, update, BINDING_RULES[side])
    except MergeValidationError as e:
        raise e.prefixed(side) from e


def describe(monitor: Monitor) -> Dict[str, Any]:
    return {
        "monitor_id": monitor.id,
        "monitor_tag": monitor.tag,
        "monitor_name": monitor.name,
        "down_trigger": parse_binding(monitor, "down_trigger"),
        "degraded_trigger": parse_binding(monitor, "degraded_trigger"),
    }


class BindingService:
    """Reads and updates the trigger bindings stored on monitors."""

    async def get_monitor(self, db: AsyncSession, tag: str) -> Monitor:
        result = await db.execute(select(Monitor).where(Monitor.tag == tag))
        monitor = result.scalar_one_or_none()
        if monitor is None:
            raise NotFound(f"Monitor with tag '{tag}' not found")
        return monitor

    async def get(self, db: AsyncSession, tag: str) -> Dict[str, Any]:
        return describe(await self.get_monitor(db, tag))

    async def update(self, db: AsyncSession, tag: str, payload: Any) -> Dict[str, Any]:
        """Apply the supplied sides; ``null`` clears a side, an absent side is kept.

        Both sides are validated before either is written.
        """
        supplied = MonitorTriggersUpdate.parse(payload).model_dump(exclude_unset=True)
        monitor = await self.get_monitor(db, tag)

        changes = {}
        for side in SIDES:
            if side not in supplied:
                continue
            update = supplied[side]
            if update is None:
                changes[side] = None
            else:
                merged = merge_binding(parse_binding(monitor, side), update, side)
                changes[side] = json.dumps(merged)

        for side, value in changes.items():
            setattr(monitor, side, value)

        if changes:
            await retry_on_lock(db.commit)
            await db.refresh(monitor)
            logger.info(f"Updated {', '.join(changes)} on monitor '{tag}'")

        return describe(monitor)


binding_service = BindingService()
