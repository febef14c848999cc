"""Authentication and profile endpoints"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from nova.database import get_db
from nova.models import User, Profile
from nova.schemas.auth import (
    LoginRequest,
    SignupRequest,
    ProfileUpdate,
    ProfileResponse,
    TokenResponse,
    RefreshTokenResponse,
    UserInfo,
)
from nova.schemas.roles import access_class_for, department_for, parse_role
from nova.services.auth_service import AuthService
from nova.services.redis_service import RedisService
from nova.api.dependencies import get_current_user
from nova.api.errors import ERROR_TYPE_BASE_URI
from nova.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])
security = HTTPBearer()

MAX_LOGIN_ATTEMPTS = 5


def _user_info(user: User) -> UserInfo:
    role = parse_role(user.profile.role) if user.profile else None
    return UserInfo(
        id=user.id,
        email=user.email,
        role=role,
        access_class=access_class_for(role),
        department=department_for(role),
    )


def _token_response(user: User) -> TokenResponse:
    info = _user_info(user)
    access_token = AuthService.create_access_token(
        user_id=str(user.id),
        email=user.email,
        role=info.role.value if info.role else None,
    )
    refresh_token = AuthService.create_refresh_token(user_id=str(user.id))

    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="Bearer",
        expires_in=settings.jwt_expiration_hours * 3600,
        user=info,
    )


async def _load_user(db: AsyncSession, **criteria) -> User:
    query = select(User).options(selectinload(User.profile))
    for column, value in criteria.items():
        query = query.where(getattr(User, column) == value)
    result = await db.execute(query)
    return result.scalar_one_or_none()


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    signup_data: SignupRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new account and sign it in

    The role is chosen afterwards with PUT /profile.
    """
    email = signup_data.email.lower()

    existing = await db.execute(select(User.id).where(User.email == email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "type": f"{ERROR_TYPE_BASE_URI}/conflict",
                "title": "Conflict",
                "status": 409,
                "detail": "An account with this email already exists",
                "instance": request.url.path
            }
        )

    user = User(email=email, password_hash=AuthService.hash_password(signup_data.password))
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "type": f"{ERROR_TYPE_BASE_URI}/conflict",
                "title": "Conflict",
                "status": 409,
                "detail": "An account with this email already exists",
                "instance": request.url.path
            }
        )

    user = await _load_user(db, id=user.id)
    logger.info(f"User {user.id} signed up")
    return _token_response(user)


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_200_OK)
async def login(
    login_data: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Authenticate user and return JWT tokens

    - **email**: User email address
    - **password**: User password

    Returns access token and refresh token with user information
    """
    redis_service = RedisService()

    # Get client IP for rate limiting
    client_ip = request.client.host if request.client else "unknown"

    # Check rate limiting (max 5 failed attempts per IP per 15 minutes)
    attempts = await redis_service.get_login_attempts(client_ip)
    if attempts >= MAX_LOGIN_ATTEMPTS:
        logger.warning(f"Login blocked for {client_ip} after {attempts} failed attempts")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "type": f"{ERROR_TYPE_BASE_URI}/rate_limit_exceeded",
                "title": "Too Many Requests",
                "status": 429,
                "detail": "Maximum login attempts exceeded. Please try again in 15 minutes.",
                "instance": request.url.path
            }
        )

    user = await _load_user(db, email=login_data.email.lower())

    # Verify user exists and password is correct
    if not user or not AuthService.verify_password(login_data.password, user.password_hash):
        await redis_service.increment_login_attempts(client_ip)

        # Generic message, don't reveal which field failed
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "type": f"{ERROR_TYPE_BASE_URI}/unauthorized",
                "title": "Unauthorized",
                "status": 401,
                "detail": "Invalid email or password",
                "instance": request.url.path
            }
        )

    await redis_service.reset_login_attempts(client_ip)
    return _token_response(user)


@router.post("/refresh", response_model=RefreshTokenResponse, status_code=status.HTTP_200_OK)
async def refresh_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
):
    """
    Refresh access token using refresh token

    - **Authorization**: Bearer {refresh_token}

    Returns new access token
    """
    payload = AuthService.validate_token(credentials.credentials, token_type="refresh")

    user = None
    if payload and payload.get("sub"):
        try:
            user = await _load_user(db, id=UUID(str(payload["sub"])))
        except ValueError:
            user = None

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "type": f"{ERROR_TYPE_BASE_URI}/unauthorized",
                "title": "Unauthorized",
                "status": 401,
                "detail": "Invalid or expired refresh token",
                "instance": request.url.path
            }
        )

    role = parse_role(user.profile.role) if user.profile else None
    access_token = AuthService.create_access_token(
        user_id=str(user.id),
        email=user.email,
        role=role.value if role else None,
    )

    return RefreshTokenResponse(
        access_token=access_token,
        token_type="Bearer",
        expires_in=settings.jwt_expiration_hours * 3600
    )


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    credentials: HTTPAuthorizationCredentials = Depends(security)
):
    """
    Logout user by blacklisting the access token

    - **Authorization**: Bearer {access_token}

    Returns 204 No Content on success
    """
    token = credentials.credentials
    payload = AuthService.decode_token(token)

    if not payload:
        # Even if token is invalid, return success (idempotent operation)
        return

    exp = payload.get("exp")
    if exp:
        expiration_time = datetime.fromtimestamp(exp, tz=timezone.utc)
        now = datetime.now(timezone.utc)

        if expiration_time > now:
            seconds_until_expiration = int((expiration_time - now).total_seconds())
            await RedisService().blacklist_token(token, max(seconds_until_expiration, 1))

    return


@router.get("/me", response_model=UserInfo, status_code=status.HTTP_200_OK)
async def me(current_user: User = Depends(get_current_user)):
    """Current user with role, access class and department"""
    return _user_info(current_user)


@router.put("/profile", response_model=ProfileResponse, status_code=status.HTTP_200_OK)
async def update_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Choose the caller's crew role

    Creates the profile on first selection, replaces the role afterwards.
    """
    profile = current_user.profile
    if profile is None:
        profile = Profile(
            user_id=current_user.id,
            email=current_user.email,
            role=profile_data.role.value,
        )
        db.add(profile)
    else:
        profile.role = profile_data.role.value
        profile.email = current_user.email

    await db.commit()
    await db.refresh(profile)

    logger.info(f"User {current_user.id} selected role {profile_data.role.value}")
    return profile
