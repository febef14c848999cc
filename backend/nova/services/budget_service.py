"""Budget service: department estimates, actual costs and the budget report"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import BudgetEntry, NotificationType, Project, Scene
from nova.monitoring.metrics import metrics_collector
from nova.schemas.budget import BudgetReport
from nova.schemas.roles import Department
from nova.services.budget_aggregator import build_budget_report
from nova.services.context import RequestContext
from nova.services.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from nova.services.notification_service import NotificationService
from nova.services.project_service import get_member_project

logger = logging.getLogger(__name__)

UPSERT_KEY = ("scene_id", "department", "submitted_by")


class BudgetService:
    """
    Writes are keyed by (scene, caller's department, caller), so a
    re-submission overwrites the caller's previous values for that scene.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db
        self.notifications = NotificationService(db)

    async def get_report(self, ctx: RequestContext, project_id: UUID) -> BudgetReport:
        """Fetch the project's entries and scenes and aggregate them"""
        await get_member_project(self.db, ctx, project_id)

        entries_result = await self.db.execute(
            select(BudgetEntry)
            .where(BudgetEntry.project_id == project_id)
            .order_by(BudgetEntry.created_at)
        )
        scenes_result = await self.db.execute(
            select(Scene).where(Scene.project_id == project_id).order_by(Scene.scene_number)
        )

        return build_budget_report(
            project_id,
            list(entries_result.scalars().all()),
            list(scenes_result.scalars().all()),
            user_department=ctx.department,
        )

    def _require_department(self, ctx: RequestContext) -> Department:
        department = ctx.department
        if department is None:
            logger.warning(f"User {ctx.user_id} with role {ctx.role} tried to submit a budget entry")
            raise PermissionDeniedError("Your role cannot submit budget entries")
        return department

    @staticmethod
    def _check_amount(amount: float) -> None:
        if amount is None or amount < 0:
            raise ValidationFailedError("Amount must be zero or greater")

    async def _get_scene(self, project_id: UUID, scene_id: UUID) -> Scene:
        result = await self.db.execute(
            select(Scene).where(Scene.id == scene_id, Scene.project_id == project_id)
        )
        scene = result.scalar_one_or_none()
        if not scene:
            raise NotFoundError(f"Scene with id {scene_id} not found")
        return scene

    async def _find_entry(
        self, scene_id: UUID, department: Department, user_id: UUID
    ) -> Optional[BudgetEntry]:
        result = await self.db.execute(
            select(BudgetEntry)
            .where(
                BudgetEntry.scene_id == scene_id,
                BudgetEntry.department == department.value,
                BudgetEntry.submitted_by == user_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _upsert(self, values: Dict[str, Any]) -> None:
        """INSERT ... ON CONFLICT (scene_id, department, submitted_by) DO UPDATE"""
        dialect = self.db.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert

        now = datetime.utcnow()
        stmt = insert(BudgetEntry).values(created_at=now, updated_at=now, **values)
        updates = {
            key: stmt.excluded[key]
            for key in values
            if key not in UPSERT_KEY and key != "project_id"
        }
        updates["updated_at"] = now
        stmt = stmt.on_conflict_do_update(index_elements=list(UPSERT_KEY), set_=updates)
        await self.db.execute(stmt)

    async def save_budget_estimate(
        self, ctx: RequestContext, project_id: UUID, scene_id: UUID, amount: float
    ) -> BudgetEntry:
        """
        Save the caller's department estimate for a scene.
        Resets actual cost to 0 and un-finalizes the entry.
        """
        department = self._require_department(ctx)
        self._check_amount(amount)
        project = await get_member_project(self.db, ctx, project_id)
        scene = await self._get_scene(project_id, scene_id)

        await self._upsert({
            "project_id": project_id,
            "scene_id": scene_id,
            "department": department.value,
            "submitted_by": ctx.user_id,
            "estimated_cost": amount,
            "actual_cost": 0,
            "is_finalized": False,
        })
        entry = await self._find_entry(scene_id, department, ctx.user_id)

        metrics_collector.record_budget_submission("estimate", department.value)
        await self._notify_creator(
            ctx,
            project,
            NotificationType.BUDGET_SUBMITTED,
            "Budget estimate submitted",
            f"{department.value} estimated {amount:.2f} for scene {scene.scene_number}",
            scene.id,
        )
        await self.notifications.commit()

        logger.info(
            f"Estimate {amount} saved for scene {scene_id} ({department.value}) by {ctx.user_id}"
        )
        return entry

    async def save_actual_cost(
        self,
        ctx: RequestContext,
        project_id: UUID,
        scene_id: UUID,
        amount: float,
        proof_reason: Optional[str] = None,
        proof_url: Optional[str] = None,
    ) -> BudgetEntry:
        """
        Record the final spend for a scene, keeping the caller's existing
        estimate (0 when none was submitted), and finalize the entry.
        """
        department = self._require_department(ctx)
        self._check_amount(amount)
        project = await get_member_project(self.db, ctx, project_id)
        scene = await self._get_scene(project_id, scene_id)

        existing = await self._find_entry(scene_id, department, ctx.user_id)
        estimated = float(existing.estimated_cost or 0) if existing else 0.0

        await self._upsert({
            "project_id": project_id,
            "scene_id": scene_id,
            "department": department.value,
            "submitted_by": ctx.user_id,
            "estimated_cost": estimated,
            "actual_cost": amount,
            "proof_reason": proof_reason,
            "proof_url": proof_url,
            "is_finalized": True,
        })
        entry = await self._find_entry(scene_id, department, ctx.user_id)

        metrics_collector.record_budget_submission("actual", department.value)
        await self._notify_creator(
            ctx,
            project,
            NotificationType.COST_SUBMITTED,
            "Actual cost submitted",
            f"{department.value} spent {amount:.2f} on scene {scene.scene_number}",
            scene.id,
        )
        await self.notifications.commit()

        logger.info(
            f"Actual cost {amount} saved for scene {scene_id} ({department.value}) by {ctx.user_id}"
        )
        return entry

    async def _notify_creator(
        self,
        ctx: RequestContext,
        project: Project,
        notification_type: NotificationType,
        title: str,
        message: str,
        scene_id: UUID,
    ) -> None:
        if project.creator_id == ctx.user_id:
            return
        await self.notifications.create(
            user_id=project.creator_id,
            notification_type=notification_type,
            title=title,
            message=message,
            project_id=project.id,
            related_scene_id=scene_id,
        )
