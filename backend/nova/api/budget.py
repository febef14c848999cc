"""Budget endpoints: report, estimates, actual costs and proof uploads"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from nova.database import get_db
from nova.api.dependencies import get_request_context
from nova.schemas.budget import (
    ActualCostRequest,
    BudgetEntryResponse,
    BudgetEstimateRequest,
    BudgetReport,
    ProofUploadResponse,
)
from nova.services.budget_service import BudgetService
from nova.services.context import RequestContext
from nova.services.project_service import get_member_project
from nova.services.s3_service import S3Service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects/{project_id}/budget", tags=["Budget"])


@router.get("", response_model=BudgetReport, status_code=status.HTTP_200_OK)
async def get_budget(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Totals, per-department and per-scene sums, and every entry of the project

    Also tells the caller which department (if any) they submit for.
    """
    return await BudgetService(db).get_report(ctx, project_id)


@router.put(
    "/scenes/{scene_id}/estimate",
    response_model=BudgetEntryResponse,
    status_code=status.HTTP_200_OK,
)
async def save_estimate(
    project_id: UUID,
    scene_id: UUID,
    estimate: BudgetEstimateRequest,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Save the caller's department estimate for a scene"""
    return await BudgetService(db).save_budget_estimate(ctx, project_id, scene_id, estimate.amount)


@router.put(
    "/scenes/{scene_id}/actual",
    response_model=BudgetEntryResponse,
    status_code=status.HTTP_200_OK,
)
async def save_actual(
    project_id: UUID,
    scene_id: UUID,
    actual: ActualCostRequest,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Record what the caller's department actually spent on a scene"""
    return await BudgetService(db).save_actual_cost(
        ctx,
        project_id,
        scene_id,
        actual.amount,
        proof_reason=actual.proof_reason,
        proof_url=actual.proof_url,
    )


@router.post("/proofs", response_model=ProofUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_proof(
    project_id: UUID,
    file: UploadFile = File(..., description="Receipt or invoice (JPEG, PNG or PDF)"),
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """
    Store a proof-of-expense document and return its URL

    Pass the URL as proof_url when saving the actual cost.
    """
    await get_member_project(db, ctx, project_id)

    data = await file.read()
    s3_service = S3Service()
    url, key = await run_in_threadpool(
        s3_service.upload_proof, str(project_id), file.filename, data, file.content_type
    )

    logger.info(f"Proof {key} uploaded by {ctx.user_id}")
    return ProofUploadResponse(proof_url=url, key=key)
