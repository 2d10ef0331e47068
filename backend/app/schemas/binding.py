"""Monitor trigger binding schemas."""
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, PositiveInt, StrictBool, StrictInt, StrictStr

from ..services.merger import RequestModel


class BindingSideUpdate(RequestModel):
    """One side of a monitor's trigger bindings (what fires on DOWN or DEGRADED)."""
    trigger_type: Optional[StrictStr] = None  # fixed per side, see subclasses
    failureThreshold: Optional[StrictInt] = Field(None, ge=1)
    successThreshold: Optional[StrictInt] = Field(None, ge=1)
    description: Optional[StrictStr] = None
    createIncident: Optional[Literal["YES", "NO"]] = None
    active: Optional[StrictBool] = None
    severity: Optional[StrictStr] = None
    triggers: Optional[List[PositiveInt]] = None  # trigger IDs, in firing order

    error_messages = {
        "failureThreshold": "failureThreshold must be a number >= 1",
        "successThreshold": "successThreshold must be a number >= 1",
        "description": "description must be a string",
        "createIncident": "createIncident must be 'YES' or 'NO'",
        "active": "active must be a boolean",
        "severity": "severity must be a string",
        "triggers": "triggers array must contain positive numbers (trigger IDs)",
    }
    not_object_message = "Trigger configuration must be an object"


class DownTriggerUpdate(BindingSideUpdate):
    trigger_type: Optional[Literal["DOWN"]] = None

    error_messages = {**BindingSideUpdate.error_messages, "trigger_type": 'trigger_type must be "DOWN"'}


class DegradedTriggerUpdate(BindingSideUpdate):
    trigger_type: Optional[Literal["DEGRADED"]] = None

    error_messages = {**BindingSideUpdate.error_messages, "trigger_type": 'trigger_type must be "DEGRADED"'}


class MonitorTriggersUpdate(RequestModel):
    """Request body for a binding update; an explicit null clears that side."""
    down_trigger: Optional[Any] = None
    degraded_trigger: Optional[Any] = None


class MonitorTriggersResponse(BaseModel):
    """Trigger bindings of one monitor; unreadable stored bindings come back as null."""
    monitor_id: int
    monitor_tag: str
    monitor_name: str
    down_trigger: Optional[dict] = None
    degraded_trigger: Optional[dict] = None


class MonitorTriggersUpdated(MonitorTriggersResponse):
    success: bool = True
