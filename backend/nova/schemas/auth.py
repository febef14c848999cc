"""Authentication and profile schemas"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from uuid import UUID

from nova.schemas.roles import AccessClass, CrewRole, Department


class LoginRequest(BaseModel):
    """Login request schema"""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=6, description="User password (minimum 6 characters)")


class SignupRequest(LoginRequest):
    """Signup request schema"""


class ProfileUpdate(BaseModel):
    """Role selection after sign-in"""
    role: CrewRole = Field(..., description="Job title on this production")


class UserInfo(BaseModel):
    """User information in token and profile responses"""
    id: UUID = Field(..., description="User UUID")
    email: str = Field(..., description="User email")
    role: Optional[CrewRole] = Field(None, description="Crew role, unset until chosen")
    access_class: AccessClass = Field(..., description="manager or contributor")
    department: Optional[Department] = Field(None, description="Budget department for the role")


class TokenResponse(BaseModel):
    """Token response schema"""
    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")
    user: UserInfo = Field(..., description="User information")


class RefreshTokenResponse(BaseModel):
    """Refresh token response schema"""
    access_token: str = Field(..., description="New JWT access token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")


class ProfileResponse(BaseModel):
    """Stored profile"""
    user_id: UUID
    email: str
    role: CrewRole
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
