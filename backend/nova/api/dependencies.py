"""API dependencies for authentication and the per-request caller context"""

from typing import Optional
from fastapi import Depends, HTTPException, status, Header
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from uuid import UUID

from nova.api.errors import ERROR_TYPE_BASE_URI
from nova.database import get_db
from nova.models import User
from nova.schemas.roles import parse_role
from nova.services.auth_service import AuthService
from nova.services.context import RequestContext
from nova.services.redis_service import RedisService


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "type": f"{ERROR_TYPE_BASE_URI}/unauthorized",
            "title": "Unauthorized",
            "status": 401,
            "detail": detail
        },
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Return the token of a "Bearer <token>" header or raise 401"""
    if not authorization:
        raise _unauthorized("Authorization header missing")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized("Invalid authorization header format")

    return parts[1]


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get current authenticated user from JWT token.

    Args:
        authorization: Authorization header with Bearer token
        db: Database session

    Returns:
        User object with its profile loaded

    Raises:
        HTTPException: If token is invalid, revoked or user not found
    """
    token = extract_bearer_token(authorization)

    # Check if token is blacklisted
    redis_service = RedisService()
    if await redis_service.is_token_blacklisted(token):
        raise _unauthorized("Token has been revoked")

    # Validate token using AuthService
    payload = AuthService.validate_token(token, token_type="access")
    if not payload:
        raise _unauthorized("Invalid or expired token")

    user_id_str: Optional[str] = payload.get("sub")
    if not user_id_str:
        raise _unauthorized("Invalid token payload")

    try:
        user_id = UUID(user_id_str)
    except ValueError:
        raise _unauthorized("Invalid user ID in token")

    result = await db.execute(
        select(User).options(selectinload(User.profile)).where(User.id == user_id)
    )
    user = result.scalar_one_or_none()

    if not user:
        raise _unauthorized("User not found")

    return user


async def get_request_context(
    user: User = Depends(get_current_user),
) -> RequestContext:
    """
    Build the caller context handed to services.
    The role is read from the stored profile on every request, so a role
    change takes effect without issuing a new token.
    """
    role = parse_role(user.profile.role) if user.profile else None
    return RequestContext(user_id=user.id, email=user.email, role=role)
