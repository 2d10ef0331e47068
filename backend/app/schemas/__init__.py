"""Pydantic schemas for API request/response models."""
from .alert import AlertResponse, AlertPage, Pagination
from .binding import (
    BindingSideUpdate,
    DegradedTriggerUpdate,
    DownTriggerUpdate,
    MonitorTriggersResponse,
    MonitorTriggersUpdate,
    MonitorTriggersUpdated,
)
from .category import (
    CategoryCreate,
    CategoryDeleted,
    CategoryEntry,
    CategoryListUpdate,
    CategoryResponse,
    CategoryUpdate,
)
from .trigger import TriggerCreate, TriggerDeleted, TriggerResponse, TriggerUpdate

__all__ = [
    "AlertResponse",
    "AlertPage",
    "Pagination",
    "BindingSideUpdate",
    "DegradedTriggerUpdate",
    "DownTriggerUpdate",
    "MonitorTriggersResponse",
    "MonitorTriggersUpdate",
    "MonitorTriggersUpdated",
    "CategoryCreate",
    "CategoryDeleted",
    "CategoryEntry",
    "CategoryListUpdate",
    "CategoryResponse",
    "CategoryUpdate",
    "TriggerCreate",
    "TriggerDeleted",
    "TriggerResponse",
    "TriggerUpdate",
]
