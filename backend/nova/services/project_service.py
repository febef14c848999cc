"""Project service: creation, passkey join and membership checks"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import (
    BudgetEntry,
    DayScene,
    Notification,
    NotificationType,
    Project,
    ProjectMember,
    Scene,
    ShootDay,
)
from nova.schemas.project import JoinProjectResult, JoinedProject
from nova.services.context import RequestContext
from nova.services.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
)
from nova.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

MIN_PROJECT_NAME_LENGTH = 3
MIN_PASSKEY_LENGTH = 4
DEFAULT_MEMBER_ROLE = "Owner"

INVALID_JOIN_MESSAGE = "Invalid project name or passkey"
ALREADY_MEMBER_MESSAGE = "You are already a member of this project"


def require_manager(ctx: RequestContext, action: str) -> None:
    """Raise PermissionDeniedError unless the caller holds a manager role"""
    if not ctx.is_manager:
        logger.warning(f"User {ctx.user_id} ({ctx.role}) denied: {action}")
        raise PermissionDeniedError(f"Only production managers can {action}")


async def get_member_project(db: AsyncSession, ctx: RequestContext, project_id: UUID) -> Project:
    """
    Load a project the caller belongs to.
    Non-members get the same 404 as a missing project.
    """
    result = await db.execute(
        select(Project)
        .outerjoin(
            ProjectMember,
            (ProjectMember.project_id == Project.id) & (ProjectMember.user_id == ctx.user_id),
        )
        .where(
            Project.id == project_id,
            or_(Project.creator_id == ctx.user_id, ProjectMember.id.is_not(None)),
        )
    )
    project = result.scalars().first()
    if not project:
        raise NotFoundError(f"Project with id {project_id} not found")
    return project


async def delete_scene_dependents(db: AsyncSession, scene_ids) -> None:
    """Remove budget entries and schedule links pointing at the given scenes"""
    await db.execute(
        delete(BudgetEntry)
        .where(BudgetEntry.scene_id.in_(scene_ids))
        .execution_options(synchronize_session=False)
    )
    await db.execute(
        delete(DayScene)
        .where(DayScene.scene_id.in_(scene_ids))
        .execution_options(synchronize_session=False)
    )


async def delete_project_rows(db: AsyncSession, project_id: UUID) -> None:
    """Delete a project and its dependent rows, children first"""
    scene_ids = select(Scene.id).where(Scene.project_id == project_id)
    day_ids = select(ShootDay.id).where(ShootDay.project_id == project_id)

    statements = (
        delete(Notification).where(Notification.project_id == project_id),
        delete(BudgetEntry).where(BudgetEntry.project_id == project_id),
        delete(DayScene).where(
            or_(DayScene.shoot_day_id.in_(day_ids), DayScene.scene_id.in_(scene_ids))
        ),
        delete(ShootDay).where(ShootDay.project_id == project_id),
        delete(Scene).where(Scene.project_id == project_id),
        delete(ProjectMember).where(ProjectMember.project_id == project_id),
        delete(Project).where(Project.id == project_id),
    )
    for statement in statements:
        await db.execute(statement.execution_options(synchronize_session=False))


class ProjectService:
    """Service for projects and their membership"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db
        self.notifications = NotificationService(db)

    async def create_project(self, ctx: RequestContext, name: str, passkey: str) -> Project:
        """
        Create a project and enroll the creator as its first member.

        Raises:
            PermissionDeniedError: Caller is not a manager
            ValidationFailedError: Name or passkey too short
            ConflictError: Name already taken
        """
        require_manager(ctx, "create projects")

        name = (name or "").strip()
        if len(name) < MIN_PROJECT_NAME_LENGTH:
            raise ValidationFailedError(
                f"Project name must be at least {MIN_PROJECT_NAME_LENGTH} characters"
            )
        if len(passkey or "") < MIN_PASSKEY_LENGTH:
            raise ValidationFailedError(
                f"Passkey must be at least {MIN_PASSKEY_LENGTH} characters"
            )

        existing = await self.db.execute(select(Project.id).where(Project.name == name))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("A project with this name already exists")

        project = Project(name=name, passkey=passkey, creator_id=ctx.user_id)
        self.db.add(project)
        try:
            await self.db.flush()
            self.db.add(
                ProjectMember(
                    project_id=project.id,
                    user_id=ctx.user_id,
                    role=ctx.role.value if ctx.role else DEFAULT_MEMBER_ROLE,
                )
            )
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent create of the same name
            await self.db.rollback()
            raise ConflictError("A project with this name already exists")

        await self.db.refresh(project)
        logger.info(f"Project {project.id} '{project.name}' created by {ctx.user_id}")
        return project

    async def list_projects(self, ctx: RequestContext) -> List[Project]:
        """Projects the caller created or is a member of, newest first"""
        member_of = select(ProjectMember.project_id).where(ProjectMember.user_id == ctx.user_id)
        result = await self.db.execute(
            select(Project)
            .where(or_(Project.creator_id == ctx.user_id, Project.id.in_(member_of)))
            .order_by(Project.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_project(self, ctx: RequestContext, project_id: UUID) -> Project:
        return await get_member_project(self.db, ctx, project_id)

    @staticmethod
    def can_see_passkey(ctx: RequestContext, project: Project) -> bool:
        return ctx.is_manager or project.creator_id == ctx.user_id

    async def delete_project(self, ctx: RequestContext, project_id: UUID) -> None:
        """Delete a project and everything hanging off it; creator only"""
        project = await get_member_project(self.db, ctx, project_id)
        if project.creator_id != ctx.user_id:
            raise PermissionDeniedError("Only the project creator can delete it")

        await delete_project_rows(self.db, project_id)
        await self.db.commit()
        logger.info(f"Project {project_id} deleted by {ctx.user_id}")

    async def join_project(self, ctx: RequestContext, name: str, passkey: str) -> JoinProjectResult:
        """
        Verify the passkey and add the caller as a member.
        Failures come back as an unsuccessful result and write nothing.
        """
        result = await self.db.execute(select(Project).where(Project.name == (name or "").strip()))
        project = result.scalar_one_or_none()

        if not project or project.passkey != passkey:
            logger.warning(f"User {ctx.user_id} failed to join project '{name}'")
            return JoinProjectResult(success=False, error=INVALID_JOIN_MESSAGE)

        existing = await self.db.execute(
            select(ProjectMember.id).where(
                ProjectMember.project_id == project.id,
                ProjectMember.user_id == ctx.user_id,
            )
        )
        if existing.scalar_one_or_none() is not None or project.creator_id == ctx.user_id:
            return JoinProjectResult(success=False, error=ALREADY_MEMBER_MESSAGE)

        self.db.add(
            ProjectMember(
                project_id=project.id,
                user_id=ctx.user_id,
                role=ctx.role.value if ctx.role else DEFAULT_MEMBER_ROLE,
            )
        )
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            return JoinProjectResult(success=False, error=ALREADY_MEMBER_MESSAGE)

        role_label = ctx.role.value if ctx.role else "crew member"
        await self.notifications.create(
            user_id=project.creator_id,
            notification_type=NotificationType.MEMBER_JOINED,
            title="New crew member",
            message=f"{ctx.email} joined {project.name} as {role_label}",
            project_id=project.id,
        )
        await self.notifications.commit()

        logger.info(f"User {ctx.user_id} joined project {project.id}")
        return JoinProjectResult(
            success=True,
            project=JoinedProject(id=project.id, name=project.name),
        )
