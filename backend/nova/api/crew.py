"""Crew endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from nova.database import get_db
from nova.api.dependencies import get_request_context
from nova.schemas.crew import CrewMemberResponse
from nova.services.context import RequestContext
from nova.services.crew_service import CrewService

router = APIRouter(prefix="/api/v1/projects/{project_id}/crew", tags=["Crew"])


@router.get("", response_model=List[CrewMemberResponse], status_code=status.HTTP_200_OK)
async def list_crew(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Project members with email, role, access class and department"""
    return await CrewService(db).list_crew(ctx, project_id)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_crew_member(
    project_id: UUID,
    member_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Remove a member (managers only); the creator cannot be removed"""
    await CrewService(db).remove_member(ctx, project_id, member_id)
