"""Scene breakdown endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from nova.database import get_db
from nova.api.dependencies import get_request_context
from nova.schemas.scene import SceneCreate, SceneUpdate, SceneResponse
from nova.services.context import RequestContext
from nova.services.scene_service import SceneService

router = APIRouter(prefix="/api/v1/projects/{project_id}/scenes", tags=["Scenes"])


@router.get("", response_model=List[SceneResponse], status_code=status.HTTP_200_OK)
async def list_scenes(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Scenes of the project ordered by scene number"""
    return await SceneService(db).list_scenes(ctx, project_id)


@router.post("", response_model=SceneResponse, status_code=status.HTTP_201_CREATED)
async def create_scene(
    project_id: UUID,
    scene_data: SceneCreate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Add a scene by hand (managers only)"""
    return await SceneService(db).create_scene(ctx, project_id, scene_data)


@router.get("/{scene_id}", response_model=SceneResponse, status_code=status.HTTP_200_OK)
async def get_scene(
    project_id: UUID,
    scene_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    return await SceneService(db).get_scene(ctx, project_id, scene_id)


@router.patch("/{scene_id}", response_model=SceneResponse, status_code=status.HTTP_200_OK)
async def update_scene(
    project_id: UUID,
    scene_id: UUID,
    scene_data: SceneUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Update scene fields (managers only)

    Only the fields present in the body are changed. Other members get a
    scene_updated notification.
    """
    return await SceneService(db).update_scene(ctx, project_id, scene_id, scene_data)


@router.delete("/{scene_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_scene(
    project_id: UUID,
    scene_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Delete a scene with its budget entries and schedule links (managers only)"""
    await SceneService(db).delete_scene(ctx, project_id, scene_id)
