"""Tests for budget service writes and report"""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import BudgetEntry, Notification, Project, ProjectMember, User
from nova.schemas.roles import CrewRole
from nova.services.budget_service import BudgetService
from nova.services.exceptions import NotFoundError, PermissionDeniedError

from conftest import auth_headers, context_for, create_user


async def _entries(db: AsyncSession, scene_id):
    result = await db.execute(
        select(BudgetEntry)
        .where(BudgetEntry.scene_id == scene_id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


@pytest.mark.asyncio
class TestSaveBudgetEstimate:
    """Estimate upsert"""

    async def test_second_estimate_overwrites(self, db_session, project, scenes, camera_ctx):
        service = BudgetService(db_session)
        scene = scenes[0]

        await service.save_budget_estimate(camera_ctx, project.id, scene.id, 1000)
        entry = await service.save_budget_estimate(camera_ctx, project.id, scene.id, 1200)

        rows = await _entries(db_session, scene.id)
        assert len(rows) == 1
        assert rows[0].estimated_cost == 1200
        assert rows[0].actual_cost == 0
        assert rows[0].is_finalized is False
        assert rows[0].department == "Camera"
        assert entry.id == rows[0].id

    async def test_estimate_notifies_creator(self, db_session, project, scenes, camera_ctx, producer):
        await BudgetService(db_session).save_budget_estimate(
            camera_ctx, project.id, scenes[0].id, 500
        )

        result = await db_session.execute(
            select(Notification).where(Notification.user_id == producer.id)
        )
        notification = result.scalar_one()
        assert notification.type == "budget_submitted"
        assert notification.related_scene_id == scenes[0].id

    async def test_role_without_department_rejected(self, db_session, project, scenes, producer_ctx):
        with pytest.raises(PermissionDeniedError, match="cannot submit budget entries"):
            await BudgetService(db_session).save_budget_estimate(
                producer_ctx, project.id, scenes[0].id, 100
            )

        assert await _entries(db_session, scenes[0].id) == []

    async def test_scene_from_other_project(self, db_session, project, camera_ctx):
        with pytest.raises(NotFoundError):
            await BudgetService(db_session).save_budget_estimate(
                camera_ctx, project.id, uuid4(), 100
            )


@pytest.mark.asyncio
class TestSaveActualCost:
    """Actual cost upsert"""

    async def test_actual_preserves_estimate(self, db_session, project, scenes, camera_ctx):
        service = BudgetService(db_session)
        scene = scenes[1]

        await service.save_budget_estimate(camera_ctx, project.id, scene.id, 800)
        await service.save_actual_cost(
            camera_ctx,
            project.id,
            scene.id,
            950,
            proof_reason="Night shoot overtime",
            proof_url="https://example.com/receipt.pdf",
        )

        rows = await _entries(db_session, scene.id)
        assert len(rows) == 1
        assert rows[0].estimated_cost == 800
        assert rows[0].actual_cost == 950
        assert rows[0].is_finalized is True
        assert rows[0].proof_reason == "Night shoot overtime"

    async def test_actual_without_estimate_defaults_to_zero(self, db_session, project, scenes, camera_ctx):
        entry = await BudgetService(db_session).save_actual_cost(
            camera_ctx, project.id, scenes[2].id, 75
        )

        assert entry.estimated_cost == 0
        assert entry.actual_cost == 75

    async def test_submitters_are_kept_apart(self, db_session, project, scenes, camera_ctx):
        dop = await create_user(db_session, "dop@example.com", CrewRole.DIRECTOR_OF_PHOTOGRAPHY)
        db_session.add(ProjectMember(project_id=project.id, user_id=dop.id, role=CrewRole.DIRECTOR_OF_PHOTOGRAPHY.value))
        await db_session.commit()

        service = BudgetService(db_session)
        await service.save_budget_estimate(camera_ctx, project.id, scenes[0].id, 100)
        await service.save_budget_estimate(
            context_for(dop, CrewRole.DIRECTOR_OF_PHOTOGRAPHY), project.id, scenes[0].id, 300
        )

        rows = await _entries(db_session, scenes[0].id)
        assert sorted(row.estimated_cost for row in rows) == [100, 300]


@pytest.mark.asyncio
class TestBudgetApi:
    """Budget endpoints"""

    async def test_report(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        project: Project,
        scenes,
        camera_operator: User,
        camera_ctx,
    ):
        service = BudgetService(db_session)
        await service.save_budget_estimate(camera_ctx, project.id, scenes[0].id, 1000)
        await service.save_actual_cost(camera_ctx, project.id, scenes[0].id, 900)

        response = await async_client.get(
            f"/api/v1/projects/{project.id}/budget", headers=auth_headers(camera_operator)
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["totals"]["estimated"] == 1000
        assert data["totals"]["actual"] == 900
        assert data["totals"]["variance"] == 100
        assert data["totals"]["percentage_used"] == "90.0"
        assert [d["department"] for d in data["by_department"]] == ["Camera"]
        assert len(data["by_scene"]) == 3
        assert data["user_department"] == "Camera"

    async def test_put_estimate_negative_amount(
        self, async_client: AsyncClient, project: Project, scenes, camera_operator: User
    ):
        response = await async_client.put(
            f"/api/v1/projects/{project.id}/budget/scenes/{scenes[0].id}/estimate",
            json={"amount": -5},
            headers=auth_headers(camera_operator),
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_put_actual(
        self, async_client: AsyncClient, project: Project, scenes, camera_operator: User
    ):
        response = await async_client.put(
            f"/api/v1/projects/{project.id}/budget/scenes/{scenes[0].id}/actual",
            json={"amount": 420.5, "proof_reason": "Extra battery packs"},
            headers=auth_headers(camera_operator),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["actual_cost"] == 420.5
        assert data["is_finalized"] is True

    async def test_producer_cannot_submit(
        self, async_client: AsyncClient, project: Project, scenes, producer: User
    ):
        response = await async_client.put(
            f"/api/v1/projects/{project.id}/budget/scenes/{scenes[0].id}/estimate",
            json={"amount": 10},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Your role cannot submit budget entries"
