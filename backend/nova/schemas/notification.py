"""Notification schemas"""

from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID

from nova.models.notification import NotificationType


class NotificationResponse(BaseModel):
    """Notification as delivered to its owner"""
    id: UUID
    user_id: UUID
    project_id: Optional[UUID] = None
    type: NotificationType
    title: str
    message: str
    related_scene_id: Optional[UUID] = None
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    """Latest notifications and unread count"""
    notifications: list[NotificationResponse]
    unread_count: int = Field(..., description="Unread notifications in this page")
