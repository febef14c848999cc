"""Scene model"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from nova.models.base import BaseModel


# Descriptive breakdown fields, all free text
SCENE_TEXT_FIELDS = (
    "heading",
    "content",
    "location_type",
    "specific_location",
    "time_of_day",
    "characters_present",
    "speaking_roles",
    "extras",
    "functional_props",
    "decorative_props",
    "camera_movement",
    "framing",
    "lighting",
    "lighting_mood",
    "diegetic_sounds",
    "scene_mood",
    "emotional_arc",
    "primary_action",
    "pacing",
    "shoot_type",
)


class Scene(BaseModel):
    """
    One screenplay unit with its breakdown metadata.
    Ordered by scene_number within a project.
    """

    __tablename__ = "scenes"
    __table_args__ = (
        Index("ix_scenes_project_scene_number", "project_id", "scene_number"),
    )

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    scene_number = Column(Integer, nullable=False)

    heading = Column(Text, nullable=True)
    content = Column(Text, nullable=True)
    location_type = Column(String(50), nullable=True, default="INT")
    specific_location = Column(Text, nullable=True)
    time_of_day = Column(String(50), nullable=True, default="DAY")
    characters_present = Column(Text, nullable=True)
    speaking_roles = Column(Text, nullable=True)
    extras = Column(Text, nullable=True)
    functional_props = Column(Text, nullable=True)
    decorative_props = Column(Text, nullable=True)
    camera_movement = Column(Text, nullable=True)
    framing = Column(Text, nullable=True)
    lighting = Column(Text, nullable=True)
    lighting_mood = Column(Text, nullable=True)
    diegetic_sounds = Column(Text, nullable=True)
    scene_mood = Column(Text, nullable=True)
    emotional_arc = Column(Text, nullable=True)
    primary_action = Column(Text, nullable=True)
    pacing = Column(Text, nullable=True)
    shoot_type = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="pending")

    # Relationships
    project = relationship("Project", back_populates="scenes")
    budget_entries = relationship(
        "BudgetEntry", back_populates="scene", cascade="all, delete-orphan"
    )
    day_links = relationship(
        "DayScene", back_populates="scene", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Scene(id={self.id}, scene_number={self.scene_number})>"
