"""Shoot day scheduling endpoints"""

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from nova.database import get_db
from nova.api.dependencies import get_request_context
from nova.schemas.schedule import (
    DaySceneCreate,
    DaySceneResponse,
    DaySceneUpdate,
    ShootDayCreate,
    ShootDayResponse,
    ShootDayUpdate,
)
from nova.services.context import RequestContext
from nova.services.schedule_service import ScheduleService

router = APIRouter(prefix="/api/v1/projects/{project_id}/shoot-days", tags=["Schedule"])


@router.get("", response_model=List[ShootDayResponse], status_code=status.HTTP_200_OK)
async def list_shoot_days(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Shoot days by date, each with its scheduled scenes"""
    return await ScheduleService(db).list_days(ctx, project_id)


@router.post("", response_model=ShootDayResponse, status_code=status.HTTP_201_CREATED)
async def create_shoot_day(
    project_id: UUID,
    day_data: ShootDayCreate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Add a shoot day in the planned state (managers only)"""
    return await ScheduleService(db).create_day(ctx, project_id, day_data)


@router.get("/{day_id}", response_model=ShootDayResponse, status_code=status.HTTP_200_OK)
async def get_shoot_day(
    project_id: UUID,
    day_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    return await ScheduleService(db).get_day_response(ctx, project_id, day_id)


@router.patch("/{day_id}", response_model=ShootDayResponse, status_code=status.HTTP_200_OK)
async def update_shoot_day(
    project_id: UUID,
    day_id: UUID,
    day_data: ShootDayUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Change date, status or notes of a shoot day (managers only)"""
    return await ScheduleService(db).update_day(ctx, project_id, day_id, day_data)


@router.delete("/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shoot_day(
    project_id: UUID,
    day_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    await ScheduleService(db).delete_day(ctx, project_id, day_id)


@router.post(
    "/{day_id}/scenes",
    response_model=DaySceneResponse,
    status_code=status.HTTP_201_CREATED,
)
async def schedule_scene(
    project_id: UUID,
    day_id: UUID,
    link_data: DaySceneCreate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Schedule one of the project's scenes on this day, optionally with a call time"""
    return await ScheduleService(db).add_scene(ctx, project_id, day_id, link_data)


@router.patch(
    "/{day_id}/scenes/{link_id}",
    response_model=DaySceneResponse,
    status_code=status.HTTP_200_OK,
)
async def update_scheduled_scene(
    project_id: UUID,
    day_id: UUID,
    link_id: UUID,
    link_data: DaySceneUpdate,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Update call time or shooting status of a scheduled scene"""
    return await ScheduleService(db).update_scene(ctx, project_id, day_id, link_id, link_data)


@router.delete("/{day_id}/scenes/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unschedule_scene(
    project_id: UUID,
    day_id: UUID,
    link_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    await ScheduleService(db).remove_scene(ctx, project_id, day_id, link_id)
