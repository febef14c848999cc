"""Call sheet export endpoint"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from nova.database import get_db
from nova.api.dependencies import get_request_context
from nova.reports.call_sheet_generator import CallSheetGenerator
from nova.services.context import RequestContext
from nova.services.project_service import get_member_project, require_manager
from nova.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects/{project_id}/shoot-days", tags=["Call Sheets"])


@router.get(
    "/{day_id}/call-sheet",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
)
async def download_call_sheet(
    project_id: UUID,
    day_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Plain-text call sheet for a shoot day, served as a download

    Lists the scenes scheduled on the day, or every scene of the project
    when nothing has been scheduled yet.
    """
    project = await get_member_project(db, ctx, project_id)
    require_manager(ctx, "export call sheets")

    schedule = ScheduleService(db)
    day = await schedule.get_day(ctx, project_id, day_id)
    scenes = await schedule.call_sheet_scenes(project_id, day)

    generator = CallSheetGenerator()
    content = generator.render(project, day, scenes)
    filename = generator.filename(project, day)

    logger.info(f"Call sheet for day {day_id} exported by {ctx.user_id}")
    return PlainTextResponse(
        content,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
