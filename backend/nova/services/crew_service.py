"""Crew service: project membership listing and removal"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import ProjectMember, User
from nova.schemas.crew import CrewMemberResponse
from nova.schemas.roles import access_class_for, department_for, parse_role
from nova.services.context import RequestContext
from nova.services.exceptions import NotFoundError, PermissionDeniedError
from nova.services.project_service import get_member_project, require_manager

logger = logging.getLogger(__name__)


class CrewService:
    """Service for the people attached to a project"""

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db

    async def list_crew(self, ctx: RequestContext, project_id: UUID) -> List[CrewMemberResponse]:
        """Members with their email and role classification, in join order"""
        project = await get_member_project(self.db, ctx, project_id)

        result = await self.db.execute(
            select(ProjectMember, User.email)
            .join(User, User.id == ProjectMember.user_id)
            .where(ProjectMember.project_id == project_id)
            .order_by(ProjectMember.joined_at)
        )

        crew = []
        for member, email in result.all():
            role = parse_role(member.role)
            crew.append(
                CrewMemberResponse(
                    id=member.id,
                    project_id=member.project_id,
                    user_id=member.user_id,
                    email=email,
                    role=member.role,
                    access_class=access_class_for(role),
                    department=department_for(role),
                    is_creator=member.user_id == project.creator_id,
                    joined_at=member.joined_at,
                )
            )
        return crew

    async def remove_member(self, ctx: RequestContext, project_id: UUID, member_id: UUID) -> None:
        """Remove a member from the project; the creator stays"""
        project = await get_member_project(self.db, ctx, project_id)
        require_manager(ctx, "remove crew members")

        result = await self.db.execute(
            select(ProjectMember).where(
                ProjectMember.id == member_id,
                ProjectMember.project_id == project_id,
            )
        )
        member = result.scalar_one_or_none()
        if not member:
            raise NotFoundError(f"Crew member with id {member_id} not found")

        if member.user_id == project.creator_id:
            raise PermissionDeniedError("The project creator cannot be removed")

        await self.db.execute(
            delete(ProjectMember)
            .where(ProjectMember.id == member.id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        logger.info(f"User {member.user_id} removed from project {project_id} by {ctx.user_id}")
