"""
Event Export API
"""

import base64
from fastapi import APIRouter, Depends, Query

from auntrack_api.core.dependencies import get_event_repository, get_export_service
from auntrack_api.core.security import get_current_user
from auntrack_api.repositories.calendar_repository import CalendarEventRepository
from auntrack_api.schemas.common import ExportResponse
from auntrack_api.services.export_service import EventExportService

router = APIRouter(
    prefix="/export",
    tags=["Export"]
)


@router.get("/events", response_model=ExportResponse, dependencies=[Depends(get_current_user)])
async def export_events(
    export_format: str = Query("xlsx", alias="format"),
    repo: CalendarEventRepository = Depends(get_event_repository),
    service: EventExportService = Depends(get_export_service)
):
    exported = service.export(repo.list_with_categories(), export_format)
    return ExportResponse(
        filename=exported.filename,
        media_type=exported.media_type,
        content_b64=base64.b64encode(exported.content).decode("ascii"),
        total_events=exported.total_events,
    )
