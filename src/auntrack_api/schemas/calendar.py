"""
Calendar Pydantic Schemas
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator

from auntrack_api.schemas.common import StorageDatetime, UtcDatetime

INVALID_INTERVAL_MESSAGE = "Start date/time cannot be after end date/time"


class CreateCategoryRequest(BaseModel):
    """Request schema for creating a category."""

    name: Optional[str] = Field(None, max_length=255)
    color: Optional[str] = Field(None, max_length=32)

    @model_validator(mode="after")
    def require_fields(self):
        if not self.name or not self.color:
            raise ValueError("Name and color are required")
        return self


class UpdateCategoryRequest(BaseModel):
    """Request schema for updating a category."""

    name: Optional[str] = Field(None, max_length=255)
    color: Optional[str] = Field(None, max_length=32)

    @model_validator(mode="after")
    def require_one_field(self):
        if not self.name and not self.color:
            raise ValueError("At least name or color must be provided")
        return self


class CategoryResponse(BaseModel):
    """Response schema for a category."""

    id: int
    name: str
    color: str
    created_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)


class CreateCalendarEventRequest(BaseModel):
    """Request schema for creating a calendar event. Color defaults to the category's."""

    title: str = Field(..., min_length=1, max_length=255)
    category_id: int
    start_date: StorageDatetime
    end_date: StorageDatetime
    color: Optional[str] = Field(None, max_length=32)
    description: Optional[str] = None

    @model_validator(mode="after")
    def validate_interval(self):
        if self.start_date > self.end_date:
            raise ValueError(INVALID_INTERVAL_MESSAGE)
        return self


class UpdateCalendarEventRequest(BaseModel):
    """Request schema for updating a calendar event. Unset fields keep their values."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    category_id: Optional[int] = None
    start_date: Optional[StorageDatetime] = None
    end_date: Optional[StorageDatetime] = None
    color: Optional[str] = Field(None, max_length=32)
    description: Optional[str] = None


class CalendarEventResponse(BaseModel):
    """Response schema for a calendar event joined with its category."""

    id: int
    title: str
    category_id: int
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    start_date: UtcDatetime
    end_date: UtcDatetime
    color: str
    description: Optional[str] = None
    created_at: UtcDatetime

    model_config = ConfigDict(from_attributes=True)
