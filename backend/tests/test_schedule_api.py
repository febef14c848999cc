"""Tests for shoot day scheduling endpoints"""

from datetime import date

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import DayScene, Project, ShootDay, User

from conftest import auth_headers


def _days_url(project: Project) -> str:
    return f"/api/v1/projects/{project.id}/shoot-days"


@pytest.mark.asyncio
class TestShootDays:
    """Shoot day CRUD"""

    async def test_create_day(self, async_client: AsyncClient, project: Project, producer: User):
        response = await async_client.post(
            _days_url(project),
            json={"shoot_date": "2026-02-10", "notes": "Night exteriors"},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["shoot_date"] == "2026-02-10"
        assert data["status"] == "planned"
        assert data["scenes"] == []

    async def test_contributor_cannot_create(
        self, async_client: AsyncClient, project: Project, camera_operator: User
    ):
        response = await async_client.post(
            _days_url(project),
            json={"shoot_date": "2026-02-10"},
            headers=auth_headers(camera_operator),
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_list_ordered_by_date(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        project: Project,
        shoot_day: ShootDay,
        camera_operator: User,
    ):
        db_session.add(ShootDay(project_id=project.id, shoot_date=date(2026, 1, 2), status="planned"))
        await db_session.commit()

        response = await async_client.get(_days_url(project), headers=auth_headers(camera_operator))

        assert response.status_code == status.HTTP_200_OK
        assert [d["shoot_date"] for d in response.json()] == ["2026-01-02", "2026-01-05"]

    async def test_update_status(
        self, async_client: AsyncClient, project: Project, shoot_day: ShootDay, producer: User
    ):
        response = await async_client.patch(
            f"{_days_url(project)}/{shoot_day.id}",
            json={"status": "in_progress"},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "in_progress"
        assert data["notes"] == "Bring rain covers"

    async def test_invalid_status(
        self, async_client: AsyncClient, project: Project, shoot_day: ShootDay, producer: User
    ):
        response = await async_client.patch(
            f"{_days_url(project)}/{shoot_day.id}",
            json={"status": "wrapped"},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_delete_day_removes_links(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        project: Project,
        scenes,
        shoot_day: ShootDay,
        producer: User,
    ):
        db_session.add(DayScene(shoot_day_id=shoot_day.id, scene_id=scenes[0].id))
        await db_session.commit()

        response = await async_client.delete(
            f"{_days_url(project)}/{shoot_day.id}", headers=auth_headers(producer)
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        links = await db_session.execute(select(func.count(DayScene.id)))
        assert links.scalar_one() == 0


@pytest.mark.asyncio
class TestDayScenes:
    """Scheduling scenes on a day"""

    async def test_scenes_ordered_by_call_time(
        self,
        async_client: AsyncClient,
        project: Project,
        scenes,
        shoot_day: ShootDay,
        producer: User,
    ):
        headers = auth_headers(producer)
        url = f"{_days_url(project)}/{shoot_day.id}/scenes"

        await async_client.post(url, json={"scene_id": str(scenes[0].id), "call_time": "14:00"}, headers=headers)
        await async_client.post(url, json={"scene_id": str(scenes[1].id), "call_time": "07:30"}, headers=headers)
        await async_client.post(url, json={"scene_id": str(scenes[2].id)}, headers=headers)

        response = await async_client.get(f"{_days_url(project)}/{shoot_day.id}", headers=headers)

        scheduled = response.json()["scenes"]
        # Untimed scenes run last
        assert [s["scene_number"] for s in scheduled] == [2, 1, 3]
        assert scheduled[0]["call_time"] == "07:30"
        assert scheduled[0]["scene_status"] == "scheduled"

    async def test_duplicate_link_conflict(
        self, async_client: AsyncClient, project: Project, scenes, shoot_day: ShootDay, producer: User
    ):
        headers = auth_headers(producer)
        url = f"{_days_url(project)}/{shoot_day.id}/scenes"
        body = {"scene_id": str(scenes[0].id)}

        first = await async_client.post(url, json=body, headers=headers)
        second = await async_client.post(url, json=body, headers=headers)

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_409_CONFLICT

    async def test_bad_call_time(
        self, async_client: AsyncClient, project: Project, scenes, shoot_day: ShootDay, producer: User
    ):
        response = await async_client.post(
            f"{_days_url(project)}/{shoot_day.id}/scenes",
            json={"scene_id": str(scenes[0].id), "call_time": "7am"},
            headers=auth_headers(producer),
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    async def test_mark_shot_then_unschedule(
        self, async_client: AsyncClient, project: Project, scenes, shoot_day: ShootDay, producer: User
    ):
        headers = auth_headers(producer)
        url = f"{_days_url(project)}/{shoot_day.id}/scenes"
        created = await async_client.post(url, json={"scene_id": str(scenes[0].id)}, headers=headers)
        link_id = created.json()["id"]

        updated = await async_client.patch(
            f"{url}/{link_id}", json={"scene_status": "shot", "call_time": "06:00"}, headers=headers
        )
        assert updated.status_code == status.HTTP_200_OK
        assert updated.json()["scene_status"] == "shot"
        assert updated.json()["call_time"] == "06:00"

        removed = await async_client.delete(f"{url}/{link_id}", headers=headers)
        assert removed.status_code == status.HTTP_204_NO_CONTENT

        missing = await async_client.delete(f"{url}/{link_id}", headers=headers)
        assert missing.status_code == status.HTTP_404_NOT_FOUND
