"""Scene service: manual scene breakdown edits"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import NotificationType, Scene
from nova.schemas.scene import SceneCreate, SceneUpdate
from nova.services.context import RequestContext
from nova.services.exceptions import NotFoundError
from nova.services.notification_service import NotificationService
from nova.services.project_service import (
    delete_scene_dependents,
    get_member_project,
    require_manager,
)

logger = logging.getLogger(__name__)


class SceneService:
    """Service for listing and editing a project's scenes"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db
        self.notifications = NotificationService(db)

    async def list_scenes(self, ctx: RequestContext, project_id: UUID) -> List[Scene]:
        await get_member_project(self.db, ctx, project_id)
        result = await self.db.execute(
            select(Scene)
            .where(Scene.project_id == project_id)
            .order_by(Scene.scene_number, Scene.created_at)
        )
        return list(result.scalars().all())

    async def get_scene(self, ctx: RequestContext, project_id: UUID, scene_id: UUID) -> Scene:
        await get_member_project(self.db, ctx, project_id)
        return await self._get_in_project(project_id, scene_id)

    async def _get_in_project(self, project_id: UUID, scene_id: UUID) -> Scene:
        result = await self.db.execute(
            select(Scene).where(Scene.id == scene_id, Scene.project_id == project_id)
        )
        scene = result.scalar_one_or_none()
        if not scene:
            raise NotFoundError(f"Scene with id {scene_id} not found")
        return scene

    async def create_scene(self, ctx: RequestContext, project_id: UUID, data: SceneCreate) -> Scene:
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "add scenes")

        scene = Scene(project_id=project_id, **data.model_dump())
        self.db.add(scene)
        await self.db.commit()
        await self.db.refresh(scene)

        logger.info(f"Scene {scene.scene_number} added to project {project_id}")
        return scene

    async def update_scene(
        self, ctx: RequestContext, project_id: UUID, scene_id: UUID, data: SceneUpdate
    ) -> Scene:
        """
        Apply the fields present in the request and tell the other members.
        """
        project = await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "edit scenes")
        scene = await self._get_in_project(project_id, scene_id)

        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(scene, field, value)

        if changes:
            await self.notifications.notify_members(
                project_id=project_id,
                notification_type=NotificationType.SCENE_UPDATED,
                title="Scene updated",
                message=f"Scene {scene.scene_number} in {project.name} was updated",
                exclude_user_ids=[ctx.user_id],
                related_scene_id=scene.id,
            )

        await self.notifications.commit()
        await self.db.refresh(scene)
        return scene

    async def delete_scene(self, ctx: RequestContext, project_id: UUID, scene_id: UUID) -> None:
        """Delete a scene after its budget entries and schedule links"""
        await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "delete scenes")
        scene = await self._get_in_project(project_id, scene_id)

        await delete_scene_dependents(self.db, [scene.id])
        await self.db.execute(
            delete(Scene).where(Scene.id == scene.id).execution_options(synchronize_session=False)
        )
        await self.db.commit()
        logger.info(f"Scene {scene_id} deleted from project {project_id}")
