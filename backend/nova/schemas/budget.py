"""Budget schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID

from nova.schemas.roles import Department


class BudgetEstimateRequest(BaseModel):
    """Department estimate for one scene"""
    amount: float = Field(..., ge=0, description="Estimated cost")


class ActualCostRequest(BaseModel):
    """Final spend for one scene, with optional justification"""
    amount: float = Field(..., ge=0, description="Actual cost")
    proof_reason: Optional[str] = Field(None, description="Why the spend differs from the estimate")
    proof_url: Optional[str] = Field(None, max_length=1024, description="Receipt or invoice URL")


class BudgetEntryResponse(BaseModel):
    """Stored budget entry"""
    id: UUID
    project_id: UUID
    scene_id: UUID
    department: str
    estimated_cost: float
    actual_cost: float
    proof_reason: Optional[str] = None
    proof_url: Optional[str] = None
    submitted_by: UUID
    is_finalized: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BudgetTotals(BaseModel):
    """Project-wide totals"""
    estimated: float
    actual: float
    variance: float = Field(..., description="estimated - actual; positive means under budget")
    percentage_used: str = Field(..., description="actual/estimated*100 to one decimal, or '0'")


class DepartmentBudget(BaseModel):
    """Sums for one department"""
    department: Department
    estimated: float
    actual: float
    variance: float
    entry_count: int


class SceneBudget(BaseModel):
    """Sums for one scene"""
    scene_id: UUID
    scene_number: int
    heading: Optional[str] = None
    estimated: float
    actual: float
    variance: float


class BudgetReport(BaseModel):
    """Everything the budget page shows"""
    project_id: UUID
    totals: BudgetTotals
    by_department: list[DepartmentBudget]
    by_scene: list[SceneBudget]
    entries: list[BudgetEntryResponse]
    entries_with_proofs: list[BudgetEntryResponse]
    user_department: Optional[Department] = None


class ProofUploadResponse(BaseModel):
    """Uploaded proof document"""
    proof_url: str
    key: str
