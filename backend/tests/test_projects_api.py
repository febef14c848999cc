"""Tests for project API endpoints"""

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import Notification, Project, ProjectMember, Scene, User
from nova.schemas.roles import CrewRole

from conftest import auth_headers, create_user


async def _member_count(db: AsyncSession, project_id) -> int:
    result = await db.execute(
        select(func.count(ProjectMember.id)).where(ProjectMember.project_id == project_id)
    )
    return result.scalar_one()


@pytest.mark.asyncio
class TestCreateProject:
    """Project creation"""

    async def test_create_project(self, async_client: AsyncClient, producer: User, db_session: AsyncSession):
        response = await async_client.post(
            "/api/v1/projects",
            json={"name": "Night Shift", "passkey": "moon"},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Night Shift"
        assert data["passkey"] == "moon"
        assert data["creator_id"] == str(producer.id)

        result = await db_session.execute(
            select(ProjectMember).where(ProjectMember.user_id == producer.id)
        )
        member = result.scalar_one()
        assert member.role == "Producer"

    async def test_duplicate_name_conflict(
        self, async_client: AsyncClient, producer: User, project: Project
    ):
        response = await async_client.post(
            "/api/v1/projects",
            json={"name": "Alpha", "passkey": "another"},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "A project with this name already exists"

    async def test_short_name_rejected(self, async_client: AsyncClient, producer: User):
        response = await async_client.post(
            "/api/v1/projects",
            json={"name": "AB", "passkey": "moon"},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_contributor_cannot_create(self, async_client: AsyncClient, camera_operator: User):
        response = await async_client.post(
            "/api/v1/projects",
            json={"name": "Side Gig", "passkey": "moon"},
            headers=auth_headers(camera_operator),
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["title"] == "Forbidden"


@pytest.mark.asyncio
class TestJoinProject:
    """Passkey join"""

    async def test_wrong_passkey_creates_no_membership(
        self, async_client: AsyncClient, db_session: AsyncSession, project: Project
    ):
        outsider = await create_user(db_session, "gaffer@example.com", CrewRole.GAFFER)
        before = await _member_count(db_session, project.id)

        response = await async_client.post(
            "/api/v1/projects/join",
            json={"name": "Alpha", "passkey": "wrong-passkey"},
            headers=auth_headers(outsider),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Invalid project name or passkey"
        assert await _member_count(db_session, project.id) == before

    async def test_unknown_project(self, async_client: AsyncClient, db_session: AsyncSession, project: Project):
        outsider = await create_user(db_session, "gaffer@example.com", CrewRole.GAFFER)

        response = await async_client.post(
            "/api/v1/projects/join",
            json={"name": "Beta", "passkey": "secret-pass"},
            headers=auth_headers(outsider),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "Invalid project name or passkey"

    async def test_join_success_notifies_creator(
        self, async_client: AsyncClient, db_session: AsyncSession, project: Project, producer: User
    ):
        outsider = await create_user(db_session, "gaffer@example.com", CrewRole.GAFFER)

        response = await async_client.post(
            "/api/v1/projects/join",
            json={"name": "Alpha", "passkey": "secret-pass"},
            headers=auth_headers(outsider),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["project"] == {"id": str(project.id), "name": "Alpha"}

        member = await db_session.execute(
            select(ProjectMember).where(
                ProjectMember.project_id == project.id,
                ProjectMember.user_id == outsider.id,
            )
        )
        assert member.scalar_one().role == "Gaffer"

        notes = await db_session.execute(select(Notification).where(Notification.user_id == producer.id))
        notification = notes.scalar_one()
        assert notification.type == "member_joined"

    async def test_already_member(
        self, async_client: AsyncClient, project: Project, camera_operator: User
    ):
        response = await async_client.post(
            "/api/v1/projects/join",
            json={"name": "Alpha", "passkey": "secret-pass"},
            headers=auth_headers(camera_operator),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "You are already a member of this project"


@pytest.mark.asyncio
class TestReadProjects:
    """Listing and visibility"""

    async def test_list_includes_joined_projects(
        self, async_client: AsyncClient, project: Project, camera_operator: User
    ):
        response = await async_client.get("/api/v1/projects", headers=auth_headers(camera_operator))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total"] == 1
        assert data["projects"][0]["name"] == "Alpha"
        # Contributors never see the passkey
        assert data["projects"][0]["passkey"] is None

    async def test_non_member_gets_404(
        self, async_client: AsyncClient, db_session: AsyncSession, project: Project
    ):
        outsider = await create_user(db_session, "gaffer@example.com", CrewRole.GAFFER)

        response = await async_client.get(
            f"/api/v1/projects/{project.id}", headers=auth_headers(outsider)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
class TestDeleteProject:
    """Project deletion"""

    async def test_creator_deletes_project_and_scenes(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        project: Project,
        scenes,
        producer: User,
    ):
        response = await async_client.delete(
            f"/api/v1/projects/{project.id}", headers=auth_headers(producer)
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        remaining = await db_session.execute(
            select(func.count(Scene.id)).where(Scene.project_id == project.id)
        )
        assert remaining.scalar_one() == 0

    async def test_member_cannot_delete(
        self, async_client: AsyncClient, project: Project, camera_operator: User
    ):
        response = await async_client.delete(
            f"/api/v1/projects/{project.id}", headers=auth_headers(camera_operator)
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
