"""Shoot day and day-scene models"""

import enum
from sqlalchemy import Column, Date, String, Text, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from nova.models.base import BaseModel


class ShootDayStatus(str, enum.Enum):
    """Progress of a shoot day"""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class DaySceneStatus(str, enum.Enum):
    """Progress of a scene on a given shoot day"""

    SCHEDULED = "scheduled"
    SHOT = "shot"
    POSTPONED = "postponed"


class ShootDay(BaseModel):
    """A calendar day of principal photography"""

    __tablename__ = "shoot_days"

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    shoot_date = Column(Date, nullable=False)
    status = Column(String(50), nullable=False, default=ShootDayStatus.PLANNED.value)
    notes = Column(Text, nullable=True)

    # Relationships
    project = relationship("Project", back_populates="shoot_days")
    day_scenes = relationship(
        "DayScene", back_populates="shoot_day", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<ShootDay(id={self.id}, shoot_date={self.shoot_date}, status={self.status})>"


class DayScene(BaseModel):
    """Link between a shoot day and a scene scheduled on it"""

    __tablename__ = "day_scenes"

    shoot_day_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("shoot_days.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    scene_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("scenes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    call_time = Column(String(5), nullable=True)  # HH:MM
    scene_status = Column(
        String(50), nullable=False, default=DaySceneStatus.SCHEDULED.value
    )

    shoot_day = relationship("ShootDay", back_populates="day_scenes")
    scene = relationship("Scene", back_populates="day_links")

    def __repr__(self):
        return f"<DayScene(shoot_day_id={self.shoot_day_id}, scene_id={self.scene_id})>"
