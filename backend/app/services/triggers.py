"""Trigger collection policy - validation plus create-or-update persistence."""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import BadRequest, Conflict, NotFound
from ..models import Trigger
from ..schemas.trigger import TRIGGER_STATUSES, TriggerCreate, TriggerUpdate
from ..utils.db_utils import commit_unique, retry_on_lock
from .merger import MergeRules, merge

logger = logging.getLogger(__name__)

TRIGGER_RULES = MergeRules(model=TriggerUpdate)
CREATE_RULES = MergeRules(model=TriggerCreate)

RECORD_FIELDS = ("id", "name", "trigger_type", "trigger_desc", "trigger_status", "trigger_meta")


def new_trigger_record() -> Dict[str, Any]:
    """A not-yet-stored trigger; id 0 asks the store to assign one."""
    return {
        "id": 0,
        "name": "",
        "trigger_type": None,
        "trigger_desc": "",
        "trigger_status": "ACTIVE",
        "trigger_meta": "{}",
    }


def to_record(trigger: Trigger) -> Dict[str, Any]:
    return {name: getattr(trigger, name) for name in RECORD_FIELDS}


def _duplicate_name() -> Conflict:
    return Conflict("A trigger with this name already exists")


class TriggerService:
    """CRUD over the triggers table."""

    async def get_all(self, db: AsyncSession, status: Optional[str] = None) -> List[Trigger]:
        query = select(Trigger).order_by(Trigger.id)
        if status is not None:
            if status not in TRIGGER_STATUSES:
                raise BadRequest(f"Invalid status filter. Must be one of: {', '.join(TRIGGER_STATUSES)}")
            query = query.where(Trigger.trigger_status == status)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get(self, db: AsyncSession, trigger_id: int) -> Trigger:
        trigger = await db.get(Trigger, trigger_id)
        if trigger is None:
            raise NotFound(f"Trigger with ID {trigger_id} not found")
        return trigger

    async def save(self, db: AsyncSession, record: Dict[str, Any]) -> Trigger:
        """Insert when ``record['id']`` is 0, otherwise update that row."""
        if record["id"] == 0:
            trigger = Trigger()
            db.add(trigger)
        else:
            trigger = await self.get(db, record["id"])

        for name in RECORD_FIELDS[1:]:
            setattr(trigger, name, record[name])

        await commit_unique(db, _duplicate_name)
        await db.refresh(trigger)
        return trigger

    async def create(self, db: AsyncSession, payload: Any) -> Trigger:
        record = merge(new_trigger_record(), payload, CREATE_RULES)
        trigger = await self.save(db, record)
        logger.info(f"Created {trigger.trigger_type} trigger '{trigger.name}' (id={trigger.id})")
        return trigger

    async def update(self, db: AsyncSession, trigger_id: int, payload: Any) -> Trigger:
        """Re-validate only the supplied fields; the rest keep their stored values."""
        existing = await self.get(db, trigger_id)
        record = merge(to_record(existing), payload, TRIGGER_RULES)
        return await self.save(db, record)

    async def delete(self, db: AsyncSession, trigger_id: int) -> Dict[str, Any]:
        trigger = await self.get(db, trigger_id)
        deleted = to_record(trigger)
        await db.delete(trigger)
        await retry_on_lock(db.commit)
        logger.info(f"Deleted trigger '{deleted['name']}' (id={trigger_id})")
        return deleted


trigger_service = TriggerService()
