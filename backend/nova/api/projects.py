"""Project management endpoints"""

from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from nova.database import get_db
from nova.models import Project
from nova.api.dependencies import get_request_context
from nova.schemas.project import (
    ProjectCreate,
    ProjectJoin,
    ProjectResponse,
    ProjectListResponse,
    JoinProjectResult,
)
from nova.services.context import RequestContext
from nova.services.project_service import ProjectService

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"])


def _project_response(ctx: RequestContext, project: Project) -> ProjectResponse:
    response = ProjectResponse.model_validate(project)
    if not ProjectService.can_see_passkey(ctx, project):
        response.passkey = None
    return response


@router.get("", response_model=ProjectListResponse, status_code=status.HTTP_200_OK)
async def get_projects(
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Projects the caller created or has joined, newest first
    """
    projects = await ProjectService(db).list_projects(ctx)
    return ProjectListResponse(
        projects=[_project_response(ctx, p) for p in projects],
        total=len(projects),
    )


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Create a project (managers only); the caller becomes its first member

    - **name**: Unique project name, at least 3 characters
    - **passkey**: Secret crew members use to join, at least 4 characters
    """
    project = await ProjectService(db).create_project(ctx, project_data.name, project_data.passkey)
    return _project_response(ctx, project)


@router.post(
    "/join",
    response_model=JoinProjectResult,
    status_code=status.HTTP_200_OK,
    responses={400: {"model": JoinProjectResult}},
)
async def join_project(
    join_data: ProjectJoin,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Join a project with its name and passkey

    Returns 200 with the joined project, or 400 with success=false and an error message.
    """
    result = await ProjectService(db).join_project(ctx, join_data.name, join_data.passkey)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(mode="json"),
        )
    return result


@router.get("/{project_id}", response_model=ProjectResponse, status_code=status.HTTP_200_OK)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Project details; the passkey is shown to managers and the creator only"""
    project = await ProjectService(db).get_project(ctx, project_id)
    return _project_response(ctx, project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Delete a project with all its scenes, budget and schedule (creator only)"""
    await ProjectService(db).delete_project(ctx, project_id)
