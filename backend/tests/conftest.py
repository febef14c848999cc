"""Pytest configuration and shared fixtures"""

import os

# Must be set before nova.config is imported anywhere
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.pop("GEMINI_API_KEY", None)

from datetime import date
from typing import AsyncGenerator, Dict, List
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from nova.main import app
from nova.database import Base, get_db
from nova.models import (
    Profile,
    Project,
    ProjectMember,
    Scene,
    ShootDay,
    User,
)
from nova.schemas.roles import CrewRole
from nova.services.auth_service import AuthService
from nova.services.context import RequestContext
from nova.services.redis_service import RedisService

TEST_PASSWORD = "TestPassword123!"


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path):
    """Create a throwaway SQLite database per test"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'nova_test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing"""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture(autouse=True)
def mock_redis():
    """Replace the shared Redis client with an AsyncMock"""
    client = AsyncMock()
    client.get.return_value = None
    client.incr.return_value = 1
    client.ping.return_value = True

    previous = RedisService._client
    RedisService._client = client
    yield client
    RedisService._client = previous


@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession):
    """Create async test client with database override"""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def create_user(db: AsyncSession, email: str, role: CrewRole = None) -> User:
    """Insert a user, with a profile when a role is given"""
    user = User(email=email, password_hash=AuthService.hash_password(TEST_PASSWORD))
    db.add(user)
    await db.flush()
    if role is not None:
        db.add(Profile(user_id=user.id, email=email, role=role.value))
    await db.commit()
    await db.refresh(user)
    return user


def context_for(user: User, role: CrewRole = None) -> RequestContext:
    return RequestContext(user_id=user.id, email=user.email, role=role)


def auth_headers(user: User) -> Dict[str, str]:
    token = AuthService.create_access_token(user_id=str(user.id), email=user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def producer(db_session: AsyncSession) -> User:
    return await create_user(db_session, "producer@example.com", CrewRole.PRODUCER)


@pytest_asyncio.fixture
async def camera_operator(db_session: AsyncSession) -> User:
    return await create_user(db_session, "camera@example.com", CrewRole.CAMERA_OPERATOR)


@pytest_asyncio.fixture
async def viewer(db_session: AsyncSession) -> User:
    return await create_user(db_session, "viewer@example.com", CrewRole.VIEWER)


@pytest.fixture
def producer_ctx(producer: User) -> RequestContext:
    return context_for(producer, CrewRole.PRODUCER)


@pytest.fixture
def camera_ctx(camera_operator: User) -> RequestContext:
    return context_for(camera_operator, CrewRole.CAMERA_OPERATOR)


@pytest_asyncio.fixture
async def project(db_session: AsyncSession, producer: User, camera_operator: User) -> Project:
    """Project created by the producer, joined by the camera operator"""
    project = Project(name="Alpha", passkey="secret-pass", creator_id=producer.id)
    db_session.add(project)
    await db_session.flush()
    db_session.add_all([
        ProjectMember(project_id=project.id, user_id=producer.id, role=CrewRole.PRODUCER.value),
        ProjectMember(
            project_id=project.id,
            user_id=camera_operator.id,
            role=CrewRole.CAMERA_OPERATOR.value,
        ),
    ])
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest_asyncio.fixture
async def scenes(db_session: AsyncSession, project: Project) -> List[Scene]:
    """Three scenes in the project"""
    rows = [
        Scene(
            project_id=project.id,
            scene_number=1,
            heading="INT. KITCHEN - DAY",
            location_type="INT",
            specific_location="Kitchen",
            time_of_day="DAY",
            characters_present="ANNA, BEN",
        ),
        Scene(
            project_id=project.id,
            scene_number=2,
            heading="EXT. ROOFTOP - NIGHT",
            location_type="EXT",
            specific_location="Rooftop",
            time_of_day="NIGHT",
            characters_present="ANNA",
        ),
        Scene(
            project_id=project.id,
            scene_number=3,
            heading="INT. CAR - EVENING",
            location_type="INT",
            specific_location="",
            time_of_day="EVENING",
            characters_present="",
        ),
    ]
    db_session.add_all(rows)
    await db_session.commit()
    for row in rows:
        await db_session.refresh(row)
    return rows


@pytest_asyncio.fixture
async def shoot_day(db_session: AsyncSession, project: Project) -> ShootDay:
    day = ShootDay(
        project_id=project.id,
        shoot_date=date(2026, 1, 5),
        status="planned",
        notes="Bring rain covers",
    )
    db_session.add(day)
    await db_session.commit()
    await db_session.refresh(day)
    return day
