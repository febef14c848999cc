"""Shoot day and day-scene schemas"""

import re
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from uuid import UUID

from nova.models.shoot_day import ShootDayStatus, DaySceneStatus

_CALL_TIME = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_call_time(value: Optional[str]) -> Optional[str]:
    if value is not None and not _CALL_TIME.match(value):
        raise ValueError("call_time must be HH:MM (24h)")
    return value


class ShootDayCreate(BaseModel):
    """New shoot day"""
    shoot_date: date
    notes: Optional[str] = None


class ShootDayUpdate(BaseModel):
    """Shoot day update - all fields optional"""
    shoot_date: Optional[date] = None
    status: Optional[ShootDayStatus] = None
    notes: Optional[str] = None


class DaySceneCreate(BaseModel):
    """Schedule a scene on a day"""
    scene_id: UUID
    call_time: Optional[str] = Field(None, description="HH:MM")

    @field_validator("call_time")
    @classmethod
    def validate_call_time(cls, v):
        return _check_call_time(v)


class DaySceneUpdate(BaseModel):
    """Update a scheduled scene"""
    call_time: Optional[str] = Field(None, description="HH:MM")
    scene_status: Optional[DaySceneStatus] = None

    @field_validator("call_time")
    @classmethod
    def validate_call_time(cls, v):
        return _check_call_time(v)


class DaySceneResponse(BaseModel):
    """Scene scheduled on a day"""
    id: UUID
    shoot_day_id: UUID
    scene_id: UUID
    call_time: Optional[str] = None
    scene_status: DaySceneStatus
    scene_number: Optional[int] = None
    heading: Optional[str] = None
    created_at: datetime


class ShootDayResponse(BaseModel):
    """Shoot day with its scheduled scenes"""
    id: UUID
    project_id: UUID
    shoot_date: date
    status: ShootDayStatus
    notes: Optional[str] = None
    created_at: datetime
    scenes: list[DaySceneResponse] = Field(default_factory=list)
