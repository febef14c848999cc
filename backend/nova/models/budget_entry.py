"""Budget entry model"""

from sqlalchemy import (
    Column,
    String,
    Text,
    Boolean,
    Numeric,
    ForeignKey,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from nova.models.base import BaseModel


class BudgetEntry(BaseModel):
    """
    One department's estimate and actual cost for a scene, per submitter.
    Re-submitting overwrites the row; no history is kept.
    """

    __tablename__ = "budget_entries"
    __table_args__ = (
        UniqueConstraint(
            "scene_id",
            "department",
            "submitted_by",
            name="uq_budget_entries_scene_department_submitter",
        ),
    )

    project_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    scene_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("scenes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    department = Column(String(100), nullable=False)
    estimated_cost = Column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    actual_cost = Column(Numeric(14, 2, asdecimal=False), nullable=False, default=0)
    proof_reason = Column(Text, nullable=True)
    proof_url = Column(String(1024), nullable=True)
    submitted_by = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    is_finalized = Column(Boolean, nullable=False, default=False)

    # Relationships
    project = relationship("Project", back_populates="budget_entries")
    scene = relationship("Scene", back_populates="budget_entries")

    def __repr__(self):
        return (
            f"<BudgetEntry(scene_id={self.scene_id}, department={self.department}, "
            f"estimated={self.estimated_cost}, actual={self.actual_cost})>"
        )
