"""
Category Management API
"""

from typing import List
from fastapi import APIRouter, Depends, status
import logging

from auntrack_api.core.dependencies import get_category_repository, get_event_repository
from auntrack_api.core.security import get_current_user, require_action
from auntrack_api.repositories.calendar_repository import CategoryRepository, CalendarEventRepository
from auntrack_api.schemas.calendar import (
    CreateCategoryRequest,
    UpdateCategoryRequest,
    CategoryResponse,
)
from auntrack_api.schemas.common import MessageResponse
from auntrack_common.permissions import Action

logger = logging.getLogger("CATEGORIES_API")

router = APIRouter(
    prefix="/categories",
    tags=["Categories"]
)


@router.get("", response_model=List[CategoryResponse], dependencies=[Depends(get_current_user)])
async def list_categories(repo: CategoryRepository = Depends(get_category_repository)):
    return [CategoryResponse.model_validate(category) for category in repo.list_by_name()]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_action(Action.MANAGE_CATEGORIES))],
)
async def create_category(
    request: CreateCategoryRequest,
    repo: CategoryRepository = Depends(get_category_repository)
):
    category = repo.create_category(request.model_dump())
    logger.info(f"Created category '{category.name}' (id={category.id})")
    return CategoryResponse.model_validate(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    dependencies=[Depends(require_action(Action.MANAGE_CATEGORIES))],
)
async def update_category(
    category_id: int,
    request: UpdateCategoryRequest,
    repo: CategoryRepository = Depends(get_category_repository)
):
    updates = {key: value for key, value in request.model_dump().items() if value}
    repo.get_or_fail(category_id)
    category = repo.update_category(category_id, updates)
    return CategoryResponse.model_validate(category)


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_action(Action.MANAGE_CATEGORIES))],
)
async def delete_category(
    category_id: int,
    repo: CategoryRepository = Depends(get_category_repository),
    event_repo: CalendarEventRepository = Depends(get_event_repository)
):
    category = repo.get_or_fail(category_id)
    event_count = event_repo.count_for_category(category_id)
    repo.delete(category)
    logger.info(f"Deleted category {category_id} with {event_count} events")
    return MessageResponse(message="Category deleted successfully", id=category_id)
