"""
Calendar Events API
"""

from typing import List
from fastapi import APIRouter, Depends, status
import logging

from auntrack_api.core.dependencies import get_category_repository, get_event_repository
from auntrack_api.core.exceptions import ValidationException
from auntrack_api.core.security import get_current_user, require_action
from auntrack_api.repositories.calendar_repository import CalendarEventRepository, CategoryRepository
from auntrack_api.schemas.calendar import (
    CreateCalendarEventRequest,
    UpdateCalendarEventRequest,
    CalendarEventResponse,
    INVALID_INTERVAL_MESSAGE,
)
from auntrack_api.schemas.common import MessageResponse
from auntrack_common.permissions import Action

logger = logging.getLogger("EVENTS_API")

NON_NULLABLE_FIELDS = ("title", "category_id", "start_date", "end_date", "color")

router = APIRouter(
    prefix="/events",
    tags=["Events"]
)


@router.get("", response_model=List[CalendarEventResponse], dependencies=[Depends(get_current_user)])
async def list_events(repo: CalendarEventRepository = Depends(get_event_repository)):
    return [CalendarEventResponse.model_validate(event) for event in repo.list_with_categories()]


@router.get("/{event_id}", response_model=CalendarEventResponse, dependencies=[Depends(get_current_user)])
async def get_event(event_id: int, repo: CalendarEventRepository = Depends(get_event_repository)):
    return CalendarEventResponse.model_validate(repo.get_or_fail(event_id))


@router.post(
    "",
    response_model=CalendarEventResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_action(Action.ADD_EVENT))],
)
async def create_event(
    request: CreateCalendarEventRequest,
    repo: CalendarEventRepository = Depends(get_event_repository),
    category_repo: CategoryRepository = Depends(get_category_repository)
):
    category = category_repo.get(request.category_id)
    if category is None:
        raise ValidationException("Category not found", {"category_id": request.category_id})

    data = request.model_dump()
    if not data.get("color"):
        data["color"] = category.color

    event = repo.create_from_dict(data)
    logger.info(f"Created event '{event.title}' (id={event.id}) in category {category.id}")
    return CalendarEventResponse.model_validate(event)


@router.put(
    "/{event_id}",
    response_model=CalendarEventResponse,
    dependencies=[Depends(require_action(Action.EDIT_EVENT))],
)
async def update_event(
    event_id: int,
    request: UpdateCalendarEventRequest,
    repo: CalendarEventRepository = Depends(get_event_repository),
    category_repo: CategoryRepository = Depends(get_category_repository)
):
    event = repo.get_or_fail(event_id)
    updates = request.model_dump(exclude_unset=True)
    if not updates:
        return CalendarEventResponse.model_validate(event)

    for field in NON_NULLABLE_FIELDS:
        if field in updates and updates[field] is None:
            raise ValidationException(f"{field} cannot be empty")

    if "category_id" in updates and category_repo.get(updates["category_id"]) is None:
        raise ValidationException("Category not found", {"category_id": updates["category_id"]})

    start = updates.get("start_date", event.start_date)
    end = updates.get("end_date", event.end_date)
    if start > end:
        raise ValidationException(INVALID_INTERVAL_MESSAGE)

    event = repo.update_by_id(event_id, updates)
    logger.info(f"Updated event {event_id}: {sorted(updates)}")
    return CalendarEventResponse.model_validate(event)


@router.delete(
    "/{event_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_action(Action.DELETE_EVENT))],
)
async def delete_event(event_id: int, repo: CalendarEventRepository = Depends(get_event_repository)):
    repo.delete(repo.get_or_fail(event_id))
    logger.info(f"Deleted event {event_id}")
    return MessageResponse(message="Event deleted successfully", id=event_id)
