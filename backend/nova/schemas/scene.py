"""Scene schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID


class SceneFields(BaseModel):
    """Descriptive breakdown fields shared by create/update/response"""
    heading: Optional[str] = None
    content: Optional[str] = None
    location_type: Optional[str] = Field(None, max_length=50)
    specific_location: Optional[str] = None
    time_of_day: Optional[str] = Field(None, max_length=50)
    characters_present: Optional[str] = None
    speaking_roles: Optional[str] = None
    extras: Optional[str] = None
    functional_props: Optional[str] = None
    decorative_props: Optional[str] = None
    camera_movement: Optional[str] = None
    framing: Optional[str] = None
    lighting: Optional[str] = None
    lighting_mood: Optional[str] = None
    diegetic_sounds: Optional[str] = None
    scene_mood: Optional[str] = None
    emotional_arc: Optional[str] = None
    primary_action: Optional[str] = None
    pacing: Optional[str] = None
    shoot_type: Optional[str] = None


class SceneCreate(SceneFields):
    """Manually added scene"""
    scene_number: int = Field(..., ge=0, description="Ordering key within the project")
    status: str = Field(default="pending", max_length=50)


class SceneUpdate(SceneFields):
    """Scene update schema - all fields optional"""
    scene_number: Optional[int] = Field(None, ge=0)
    status: Optional[str] = Field(None, max_length=50)


class SceneResponse(SceneFields):
    """Scene response schema"""
    id: UUID
    project_id: UUID
    scene_number: int
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
