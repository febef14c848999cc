"""Notification model"""

import enum
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from nova.models.base import BaseModel


class NotificationType(str, enum.Enum):
    """Kinds of notification a user can receive"""

    SCRIPT_UPLOADED = "script_uploaded"
    BUDGET_SUBMITTED = "budget_submitted"
    COST_SUBMITTED = "cost_submitted"
    SCENE_UPDATED = "scene_updated"
    MEMBER_JOINED = "member_joined"
    GENERAL = "general"


class Notification(BaseModel):
    """A message addressed to one user, optionally about a project/scene"""

    __tablename__ = "notifications"

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    type = Column(String(50), nullable=False, default=NotificationType.GENERAL.value)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    related_scene_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("scenes.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_read = Column(Boolean, nullable=False, default=False)

    project = relationship("Project", back_populates="notifications")

    def __repr__(self):
        return f"<Notification(id={self.id}, type={self.type}, is_read={self.is_read})>"
