"""Project and membership models"""

from datetime import datetime
from sqlalchemy import Column, String, ForeignKey, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from nova.models.base import BaseModel


class Project(BaseModel):
    """
    A film production. Crew join it with the shared passkey; scenes,
    budget entries and shoot days all hang off it.
    """

    __tablename__ = "projects"

    name = Column(String(255), unique=True, nullable=False, index=True)
    passkey = Column(String(255), nullable=False)
    creator_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )

    # Relationships
    members = relationship(
        "ProjectMember", back_populates="project", cascade="all, delete-orphan"
    )
    scenes = relationship(
        "Scene", back_populates="project", cascade="all, delete-orphan"
    )
    budget_entries = relationship(
        "BudgetEntry", back_populates="project", cascade="all, delete-orphan"
    )
    shoot_days = relationship(
        "ShootDay", back_populates="project", cascade="all, delete-orphan"
    )
    notifications = relationship(
        "Notification", back_populates="project", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name})>"


class ProjectMember(BaseModel):
    """Membership of a user in a project, one row per (project, user)"""

    __tablename__ = "project_members"
    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_members_project_user"),
    )

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(String(100), nullable=False, default="Owner")
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    project = relationship("Project", back_populates="members")
    user = relationship("User", back_populates="memberships")

    def __repr__(self):
        return f"<ProjectMember(project_id={self.project_id}, user_id={self.user_id})>"
