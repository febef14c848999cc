"""Project and membership schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


class ProjectCreate(BaseModel):
    """Project creation schema"""
    name: str = Field(..., min_length=3, max_length=255, description="Unique project name")
    passkey: str = Field(..., min_length=4, max_length=255, description="Shared join passkey")


class ProjectJoin(BaseModel):
    """Join a project with its name and passkey"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    passkey: str = Field(..., min_length=1, max_length=255, description="Project passkey")


class ProjectResponse(BaseModel):
    """Project response schema; passkey only shown to managers and the creator"""
    id: UUID
    name: str
    creator_id: UUID
    passkey: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    """List of projects response"""
    projects: list[ProjectResponse]
    total: int = Field(..., description="Total number of projects")


class JoinedProject(BaseModel):
    """Minimal project reference returned by a join"""
    id: UUID
    name: str


class JoinProjectResult(BaseModel):
    """Outcome of a passkey join"""
    success: bool
    error: Optional[str] = None
    project: Optional[JoinedProject] = None
