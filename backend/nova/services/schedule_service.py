"""Schedule service: shoot days and the scenes scheduled on them"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import DayScene, Scene, ShootDay, ShootDayStatus
from nova.schemas.schedule import (
    DaySceneCreate,
    DaySceneResponse,
    DaySceneUpdate,
    ShootDayCreate,
    ShootDayResponse,
    ShootDayUpdate,
)
from nova.services.context import RequestContext
from nova.services.exceptions import ConflictError, NotFoundError
from nova.services.project_service import get_member_project, require_manager

logger = logging.getLogger(__name__)


def day_scene_response(link: DayScene, scene: Scene) -> DaySceneResponse:
    return DaySceneResponse(
        id=link.id,
        shoot_day_id=link.shoot_day_id,
        scene_id=link.scene_id,
        call_time=link.call_time,
        scene_status=link.scene_status,
        scene_number=scene.scene_number if scene else None,
        heading=scene.heading if scene else None,
        created_at=link.created_at,
    )


class ScheduleService:
    """Service for planning shoot days"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def _get_day(self, project_id: UUID, day_id: UUID) -> ShootDay:
        result = await self.db.execute(
            select(ShootDay).where(ShootDay.id == day_id, ShootDay.project_id == project_id)
        )
        day = result.scalar_one_or_none()
        if not day:
            raise NotFoundError(f"Shoot day with id {day_id} not found")
        return day

    async def _day_scenes(self, day_ids: List[UUID]) -> List[Tuple[DayScene, Scene]]:
        """Links of the given days with their scenes, by call time then scene number"""
        if not day_ids:
            return []
        result = await self.db.execute(
            select(DayScene, Scene)
            .join(Scene, Scene.id == DayScene.scene_id)
            .where(DayScene.shoot_day_id.in_(day_ids))
        )
        rows = list(result.all())
        rows.sort(key=lambda row: (row[0].call_time or "99:99", row[1].scene_number))
        return rows

    async def _day_response(self, day: ShootDay) -> ShootDayResponse:
        rows = await self._day_scenes([day.id])
        return self._build_response(day, rows)

    @staticmethod
    def _build_response(day: ShootDay, rows) -> ShootDayResponse:
        return ShootDayResponse(
            id=day.id,
            project_id=day.project_id,
            shoot_date=day.shoot_date,
            status=day.status,
            notes=day.notes,
            created_at=day.created_at,
            scenes=[day_scene_response(link, scene) for link, scene in rows],
        )

    async def list_days(self, ctx: RequestContext, project_id: UUID) -> List[ShootDayResponse]:
        """Shoot days ordered by date, each with its scheduled scenes"""
        await get_member_project(self.db, ctx, project_id)
        result = await self.db.execute(
            select(ShootDay)
            .where(ShootDay.project_id == project_id)
            .order_by(ShootDay.shoot_date, ShootDay.created_at)
        )
        days = list(result.scalars().all())

        rows_by_day = {day.id: [] for day in days}
        for link, scene in await self._day_scenes(list(rows_by_day)):
            rows_by_day[link.shoot_day_id].append((link, scene))

        return [self._build_response(day, rows_by_day[day.id]) for day in days]

    async def get_day(self, ctx: RequestContext, project_id: UUID, day_id: UUID) -> ShootDay:
        await get_member_project(self.db, ctx, project_id)
        return await self._get_day(project_id, day_id)

    async def get_day_response(
        self, ctx: RequestContext, project_id: UUID, day_id: UUID
    ) -> ShootDayResponse:
        return await self._day_response(await self.get_day(ctx, project_id, day_id))

    async def create_day(
        self, ctx: RequestContext, project_id: UUID, data: ShootDayCreate
    ) -> ShootDayResponse:
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "schedule shoot days")

        day = ShootDay(
            project_id=project_id,
            shoot_date=data.shoot_date,
            notes=data.notes,
            status=ShootDayStatus.PLANNED.value,
        )
        self.db.add(day)
        await self.db.commit()
        await self.db.refresh(day)

        logger.info(f"Shoot day {day.shoot_date} added to project {project_id}")
        return self._build_response(day, [])

    async def update_day(
        self, ctx: RequestContext, project_id: UUID, day_id: UUID, data: ShootDayUpdate
    ) -> ShootDayResponse:
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "update shoot days")
        day = await self._get_day(project_id, day_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "status" and value is not None:
                value = ShootDayStatus(value).value
            setattr(day, field, value)

        await self.db.commit()
        await self.db.refresh(day)
        return await self._day_response(day)

    async def delete_day(self, ctx: RequestContext, project_id: UUID, day_id: UUID) -> None:
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "delete shoot days")
        day = await self._get_day(project_id, day_id)

        await self.db.execute(
            delete(DayScene)
            .where(DayScene.shoot_day_id == day.id)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(ShootDay)
            .where(ShootDay.id == day.id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        logger.info(f"Shoot day {day_id} deleted from project {project_id}")

    async def add_scene(
        self, ctx: RequestContext, project_id: UUID, day_id: UUID, data: DaySceneCreate
    ) -> DaySceneResponse:
        """Schedule a scene of the same project on a day"""
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "schedule scenes")
        day = await self._get_day(project_id, day_id)

        scene_result = await self.db.execute(
            select(Scene).where(Scene.id == data.scene_id, Scene.project_id == project_id)
        )
        scene = scene_result.scalar_one_or_none()
        if not scene:
            raise NotFoundError(f"Scene with id {data.scene_id} not found")

        duplicate = await self.db.execute(
            select(DayScene.id).where(
                DayScene.shoot_day_id == day.id, DayScene.scene_id == scene.id
            )
        )
        if duplicate.scalar_one_or_none() is not None:
            raise ConflictError("Scene is already scheduled on this day")

        link = DayScene(shoot_day_id=day.id, scene_id=scene.id, call_time=data.call_time)
        self.db.add(link)
        await self.db.commit()
        await self.db.refresh(link)
        return day_scene_response(link, scene)

    async def _get_link(self, day_id: UUID, link_id: UUID) -> Tuple[DayScene, Scene]:
        result = await self.db.execute(
            select(DayScene, Scene)
            .join(Scene, Scene.id == DayScene.scene_id)
            .where(DayScene.id == link_id, DayScene.shoot_day_id == day_id)
        )
        row = result.first()
        if not row:
            raise NotFoundError(f"Scheduled scene with id {link_id} not found")
        return row[0], row[1]

    async def update_scene(
        self,
        ctx: RequestContext,
        project_id: UUID,
        day_id: UUID,
        link_id: UUID,
        data: DaySceneUpdate,
    ) -> DaySceneResponse:
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "update scheduled scenes")
        await self._get_day(project_id, day_id)
        link, scene = await self._get_link(day_id, link_id)

        changes = data.model_dump(exclude_unset=True)
        if "call_time" in changes:
            link.call_time = changes["call_time"]
        if changes.get("scene_status") is not None:
            link.scene_status = changes["scene_status"].value

        await self.db.commit()
        await self.db.refresh(link)
        return day_scene_response(link, scene)

    async def remove_scene(
        self, ctx: RequestContext, project_id: UUID, day_id: UUID, link_id: UUID
    ) -> None:
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "unschedule scenes")
        await self._get_day(project_id, day_id)
        link, _ = await self._get_link(day_id, link_id)

        await self.db.execute(
            delete(DayScene)
            .where(DayScene.id == link.id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

    async def call_sheet_scenes(self, project_id: UUID, day: ShootDay) -> List[Tuple[Scene, Optional[str]]]:
        """
        Scenes for a day's call sheet as (scene, call_time) pairs: the scenes
        linked to the day, or every project scene when nothing is linked yet.
        """
        rows = await self._day_scenes([day.id])
        if rows:
            return [(scene, link.call_time) for link, scene in rows]

        result = await self.db.execute(
            select(Scene).where(Scene.project_id == project_id).order_by(Scene.scene_number)
        )
        return [(scene, None) for scene in result.scalars().all()]
