"""Crew schemas"""

from typing import Optional
from pydantic import BaseModel
from datetime import datetime
from uuid import UUID

from nova.schemas.roles import AccessClass, Department


class CrewMemberResponse(BaseModel):
    """Project member with contact and classification"""
    id: UUID
    project_id: UUID
    user_id: UUID
    email: str
    role: str
    access_class: AccessClass
    department: Optional[Department] = None
    is_creator: bool = False
    joined_at: datetime
