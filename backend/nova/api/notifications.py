"""Notification inbox endpoints"""

from uuid import UUID
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from nova.database import get_db
from nova.api.dependencies import get_request_context
from nova.schemas.notification import NotificationListResponse, NotificationResponse
from nova.services.context import RequestContext
from nova.services.notification_service import NotificationService

router = APIRouter(prefix="/api/v1/notifications", tags=["Notifications"])


class BulkUpdateResponse(BaseModel):
    """Number of notifications touched"""
    updated: int


@router.get("", response_model=NotificationListResponse, status_code=status.HTTP_200_OK)
async def list_notifications(
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """The caller's 50 most recent notifications and how many are unread"""
    notifications, unread = await NotificationService(db).list_for_user(ctx)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        unread_count=unread,
    )


@router.post("/read-all", response_model=BulkUpdateResponse, status_code=status.HTTP_200_OK)
async def mark_all_read(
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    updated = await NotificationService(db).mark_all_as_read(ctx)
    return BulkUpdateResponse(updated=updated)


@router.post(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    status_code=status.HTTP_200_OK,
)
async def mark_read(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    return await NotificationService(db).mark_as_read(ctx, notification_id)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: UUID,
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    await NotificationService(db).delete(ctx, notification_id)


@router.delete("", response_model=BulkUpdateResponse, status_code=status.HTTP_200_OK)
async def clear_notifications(
    db: AsyncSession = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context)
):
    """Delete every notification of the caller"""
    deleted = await NotificationService(db).clear_all(ctx)
    return BulkUpdateResponse(updated=deleted)
