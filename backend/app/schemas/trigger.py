"""Trigger schemas for API request/response models."""
from datetime import datetime
from typing import Literal, Optional, get_args
from pydantic import BaseModel, StrictStr, field_validator

from ..services.merger import RequestModel, json_text, stripped_identifier

TriggerType = Literal["webhook", "discord", "slack", "email"]
TriggerStatus = Literal["ACTIVE", "INACTIVE"]

TRIGGER_TYPES = get_args(TriggerType)
TRIGGER_STATUSES = get_args(TriggerStatus)


class TriggerUpdate(RequestModel):
    """Schema for updating a trigger; only supplied fields are validated."""
    name: Optional[StrictStr] = None
    trigger_type: Optional[TriggerType] = None
    trigger_desc: Optional[StrictStr] = None
    trigger_status: Optional[TriggerStatus] = None
    trigger_meta: Optional[StrictStr] = None  # JSON text; objects are serialized

    error_messages = {
        "name": "Trigger name cannot be empty",
        "trigger_type": f"Invalid trigger type. Must be one of: {', '.join(TRIGGER_TYPES)}",
        "trigger_desc": "trigger_desc must be a string",
        "trigger_status": f"Invalid trigger status. Must be one of: {', '.join(TRIGGER_STATUSES)}",
        "trigger_meta": "trigger_meta must be valid JSON",
    }

    @field_validator("name")
    @classmethod
    def strip_name(cls, value):
        return stripped_identifier(value)

    @field_validator("trigger_meta", mode="before")
    @classmethod
    def serialize_meta(cls, value):
        return json_text(value)


class TriggerCreate(TriggerUpdate):
    """Schema for creating a trigger."""
    name: StrictStr
    trigger_type: TriggerType

    error_messages = {
        **TriggerUpdate.error_messages,
        "name": "Trigger name is required and must be a non-empty string",
    }
    required_messages = {"trigger_type": "Trigger type is required"}
    not_object_message = "Trigger name is required and must be a non-empty string"


class TriggerResponse(BaseModel):
    """Schema for a trigger in API responses."""
    id: int
    name: str
    trigger_type: str  # webhook, discord, slack, email
    trigger_desc: str = ""
    trigger_status: str  # ACTIVE, INACTIVE
    trigger_meta: str = "{}"  # JSON text
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TriggerDeleted(BaseModel):
    success: bool = True
    message: str
    deleted: TriggerResponse
