"""
Common Pydantic Schemas

Shared response models and the datetime conventions of the API: instants
are stored as naive UTC and always returned with an explicit UTC offset.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional
from pydantic import AfterValidator, BaseModel


def to_storage_datetime(value: datetime) -> datetime:
    """Aware instants become naive UTC; naive instants are taken as UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def to_response_datetime(value: datetime) -> datetime:
    """Attach the UTC offset to stored naive instants."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


StorageDatetime = Annotated[datetime, AfterValidator(to_storage_datetime)]
UtcDatetime = Annotated[datetime, AfterValidator(to_response_datetime)]


class MessageResponse(BaseModel):
    """Confirmation returned by delete endpoints."""

    message: str
    id: Optional[int] = None


class ExportResponse(BaseModel):
    """Exported file, base64 encoded."""

    filename: str
    media_type: str
    content_b64: str
    total_events: int
