"""Category schemas for API request/response models."""
from typing import List, Optional
from pydantic import BaseModel, StrictBool, StrictStr, field_validator

from ..services.merger import RequestModel, stripped_identifier


class CategoryUpdate(RequestModel):
    """Schema for updating a category; absent or null fields keep their stored value."""
    name: Optional[StrictStr] = None
    description: Optional[StrictStr] = None
    isHidden: Optional[StrictBool] = None

    error_messages = {
        "name": "Category name must be a non-empty string",
        "description": "Category description must be a string",
        "isHidden": "isHidden must be a boolean",
    }

    @field_validator("name")
    @classmethod
    def strip_name(cls, value):
        return stripped_identifier(value)


class CategoryCreate(CategoryUpdate):
    """Schema for creating a category."""
    name: StrictStr

    error_messages = {
        **CategoryUpdate.error_messages,
        "name": "Category name is required and must be a non-empty string",
    }
    not_object_message = "Category name is required and must be a non-empty string"


class CategoryEntry(CategoryCreate):
    """One entry of a full category list replacement."""

    error_messages = {
        **CategoryUpdate.error_messages,
        "name": "All categories must have a valid name",
    }
    not_object_message = "All categories must have a valid name"


class CategoryResponse(BaseModel):
    """A monitor grouping shown on the status page."""
    name: str
    description: str = ""
    isHidden: bool = False


class CategoryListUpdate(BaseModel):
    """Result of replacing the whole category list."""
    success: bool = True
    categories: List[CategoryResponse]


class CategoryDeleted(BaseModel):
    success: bool = True
    message: str
    deleted: CategoryResponse
