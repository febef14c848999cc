"""Script import endpoints"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from nova.database import get_db
from nova.api.dependencies import get_request_context
from nova.schemas.script import ScriptImportRequest, ScriptImportResponse
from nova.services.context import RequestContext
from nova.services.script_import_service import ScriptImportService, extract_script_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects/{project_id}/script", tags=["Script Import"])


async def _run_import(
    db: AsyncSession, ctx: RequestContext, project_id: UUID, script_text: str
) -> ScriptImportResponse:
    service = ScriptImportService(db)
    count = await service.import_script(ctx, project_id, script_text)
    return ScriptImportResponse(
        project_id=project_id,
        scenes_created=count,
        truncated=service.truncated,
    )


@router.post("", response_model=ScriptImportResponse, status_code=status.HTTP_200_OK)
async def import_script(
    project_id: UUID,
    script_data: ScriptImportRequest,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Replace the project's scenes with an AI breakdown of the script (managers only)

    Existing scenes, with their budget entries and schedule links, are only
    removed once the AI response has been parsed successfully.
    """
    return await _run_import(db, ctx, project_id, script_data.script_text)


@router.post("/upload", response_model=ScriptImportResponse, status_code=status.HTTP_200_OK)
async def upload_script(
    project_id: UUID,
    file: UploadFile = File(..., description="Screenplay as .txt (UTF-8) or .pdf"),
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Same as POST /script, reading the text from an uploaded file"""
    data = await file.read()
    script_text = extract_script_text(file.filename, data)
    logger.info(f"Extracted {len(script_text)} characters from {file.filename}")
    return await _run_import(db, ctx, project_id, script_text)
