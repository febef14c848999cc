"""Tests for authentication API endpoints"""

import pytest
from httpx import AsyncClient
from fastapi import status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nova.models import Profile, User
from nova.services.auth_service import AuthService

from conftest import TEST_PASSWORD, auth_headers, create_user


@pytest.mark.asyncio
class TestSignupEndpoint:
    """Account creation"""

    async def test_signup_returns_tokens(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/signup",
            json={"email": "new@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["token_type"] == "Bearer"
        assert data["user"]["email"] == "new@example.com"
        assert data["user"]["role"] is None
        assert data["user"]["access_class"] == "contributor"

    async def test_signup_duplicate_email(self, async_client: AsyncClient, producer: User):
        response = await async_client.post(
            "/api/v1/auth/signup",
            json={"email": "producer@example.com", "password": "secret123"},
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["status"] == 409

    async def test_signup_short_password(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/signup",
            json={"email": "new@example.com", "password": "123"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        data = response.json()
        assert data["title"] == "Validation Error"
        assert any(error["field"] == "password" for error in data["errors"])


@pytest.mark.asyncio
class TestLoginEndpoint:
    """Test login endpoint functionality"""

    async def test_login_success(self, async_client: AsyncClient, producer: User):
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "producer@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["expires_in"] == 86400  # 24 hours
        assert data["user"]["role"] == "Producer"
        assert data["user"]["access_class"] == "manager"
        assert data["user"]["department"] is None

    async def test_login_invalid_password(self, async_client: AsyncClient, producer: User, mock_redis):
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "producer@example.com", "password": "WrongPassword"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "invalid email or password" in response.json()["detail"].lower()
        mock_redis.incr.assert_awaited()

    async def test_login_rate_limited(self, async_client: AsyncClient, producer: User, mock_redis):
        mock_redis.get.return_value = "5"

        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "producer@example.com", "password": TEST_PASSWORD},
        )

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS


@pytest.mark.asyncio
class TestSessionEndpoints:
    """Me, refresh, logout"""

    async def test_me_returns_department(self, async_client: AsyncClient, camera_operator: User):
        response = await async_client.get("/api/v1/auth/me", headers=auth_headers(camera_operator))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["role"] == "Camera Operator"
        assert data["access_class"] == "contributor"
        assert data["department"] == "Camera"

    async def test_me_requires_token(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_revoked_token_rejected(self, async_client: AsyncClient, producer: User, mock_redis):
        mock_redis.get.return_value = "1"

        response = await async_client.get("/api/v1/auth/me", headers=auth_headers(producer))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Token has been revoked"

    async def test_refresh(self, async_client: AsyncClient, producer: User):
        refresh = AuthService.create_refresh_token(user_id=str(producer.id))

        response = await async_client.post(
            "/api/v1/auth/refresh", headers={"Authorization": f"Bearer {refresh}"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert AuthService.validate_token(response.json()["access_token"]) is not None

    async def test_logout_blacklists_token(self, async_client: AsyncClient, producer: User, mock_redis):
        response = await async_client.post("/api/v1/auth/logout", headers=auth_headers(producer))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_redis.setex.assert_awaited_once()


@pytest.mark.asyncio
class TestProfileEndpoint:
    """Role selection"""

    async def test_first_role_selection_creates_profile(
        self, async_client: AsyncClient, db_session: AsyncSession
    ):
        user = await create_user(db_session, "fresh@example.com")

        response = await async_client.put(
            "/api/v1/auth/profile", json={"role": "Gaffer"}, headers=auth_headers(user)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["role"] == "Gaffer"

        result = await db_session.execute(select(Profile).where(Profile.user_id == user.id))
        assert result.scalar_one().email == "fresh@example.com"

    async def test_role_change_applies_immediately(
        self, async_client: AsyncClient, camera_operator: User
    ):
        headers = auth_headers(camera_operator)
        await async_client.put("/api/v1/auth/profile", json={"role": "Boom Operator"}, headers=headers)

        response = await async_client.get("/api/v1/auth/me", headers=headers)

        assert response.json()["department"] == "Sound"

    async def test_unknown_role_rejected(self, async_client: AsyncClient, producer: User):
        response = await async_client.put(
            "/api/v1/auth/profile", json={"role": "Chief Vibes Officer"}, headers=auth_headers(producer)
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
