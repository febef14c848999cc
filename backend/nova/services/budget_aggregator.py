"""
Budget aggregation over already-fetched entries and scenes.

Pure functions, no database access. Variance is estimated - actual, so a
positive variance means the work came in under budget.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from nova.models import BudgetEntry, Scene
from nova.schemas.budget import (
    BudgetEntryResponse,
    BudgetReport,
    BudgetTotals,
    DepartmentBudget,
    SceneBudget,
)
from nova.schemas.roles import Department


def _money(value) -> float:
    return round(float(value or 0), 2)


def percentage_used(estimated: float, actual: float) -> str:
    """actual/estimated as a one-decimal percentage string, "0" with no estimate"""
    if not estimated:
        return "0"
    return f"{actual / estimated * 100:.1f}"


def project_totals(entries: Iterable[BudgetEntry]) -> BudgetTotals:
    estimated = 0.0
    actual = 0.0
    for entry in entries:
        estimated += float(entry.estimated_cost or 0)
        actual += float(entry.actual_cost or 0)

    return BudgetTotals(
        estimated=_money(estimated),
        actual=_money(actual),
        variance=_money(estimated - actual),
        percentage_used=percentage_used(estimated, actual),
    )


def summarize_by_department(entries: Iterable[BudgetEntry]) -> List[DepartmentBudget]:
    """
    Sums per department in the fixed Department order.
    Departments whose estimated and actual sums are both zero are left out,
    as are entries whose department is not a known Department.
    """
    estimated: Dict[str, float] = defaultdict(float)
    actual: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)

    for entry in entries:
        estimated[entry.department] += float(entry.estimated_cost or 0)
        actual[entry.department] += float(entry.actual_cost or 0)
        counts[entry.department] += 1

    summaries = []
    for department in Department:
        dept_estimated = estimated.get(department.value, 0.0)
        dept_actual = actual.get(department.value, 0.0)
        if dept_estimated == 0 and dept_actual == 0:
            continue
        summaries.append(
            DepartmentBudget(
                department=department,
                estimated=_money(dept_estimated),
                actual=_money(dept_actual),
                variance=_money(dept_estimated - dept_actual),
                entry_count=counts[department.value],
            )
        )
    return summaries


def summarize_by_scene(
    entries: Iterable[BudgetEntry], scenes: Sequence[Scene]
) -> List[SceneBudget]:
    """Sums per scene, ordered by scene_number; scenes without entries show zeros"""
    estimated: Dict[UUID, float] = defaultdict(float)
    actual: Dict[UUID, float] = defaultdict(float)

    for entry in entries:
        estimated[entry.scene_id] += float(entry.estimated_cost or 0)
        actual[entry.scene_id] += float(entry.actual_cost or 0)

    summaries = []
    for scene in sorted(scenes, key=lambda s: s.scene_number):
        scene_estimated = estimated.get(scene.id, 0.0)
        scene_actual = actual.get(scene.id, 0.0)
        summaries.append(
            SceneBudget(
                scene_id=scene.id,
                scene_number=scene.scene_number,
                heading=scene.heading,
                estimated=_money(scene_estimated),
                actual=_money(scene_actual),
                variance=_money(scene_estimated - scene_actual),
            )
        )
    return summaries


def entries_with_proofs(entries: Iterable[BudgetEntry]) -> List[BudgetEntry]:
    """Entries carrying a justification or a receipt"""
    return [entry for entry in entries if entry.proof_url or entry.proof_reason]


def build_budget_report(
    project_id: UUID,
    entries: Sequence[BudgetEntry],
    scenes: Sequence[Scene],
    user_department: Optional[Department] = None,
) -> BudgetReport:
    return BudgetReport(
        project_id=project_id,
        totals=project_totals(entries),
        by_department=summarize_by_department(entries),
        by_scene=summarize_by_scene(entries, scenes),
        entries=[BudgetEntryResponse.model_validate(e) for e in entries],
        entries_with_proofs=[
            BudgetEntryResponse.model_validate(e) for e in entries_with_proofs(entries)
        ],
        user_department=user_department,
    )
