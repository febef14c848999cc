"""Notification service: per-user inbox plus live push"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from nova.api.websocket_routes import publish_notification
from nova.models import Notification, NotificationType, ProjectMember
from nova.monitoring.metrics import metrics_collector
from nova.schemas.notification import NotificationResponse
from nova.services.context import RequestContext
from nova.services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

NOTIFICATION_PAGE_SIZE = 50


class NotificationService:
    """
    Creates notifications for users and manages a user's own inbox.
    Live pushes are queued until the caller commits through commit(),
    and push errors never fail the calling mutation.
    """

    def __init__(self, db: AsyncSession):
        """Initialize with database session"""
        self.db = db
        self._pending_pushes: List[Tuple[str, Dict[str, Any]]] = []

    async def create(
        self,
        user_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        project_id: Optional[UUID] = None,
        related_scene_id: Optional[UUID] = None,
    ) -> Notification:
        """
        Store a notification for one user and queue a push to their live sockets.
        The row is flushed in the caller's transaction; the push goes out on commit().
        """
        notification = Notification(
            user_id=user_id,
            project_id=project_id,
            type=notification_type.value,
            title=title,
            message=message,
            related_scene_id=related_scene_id,
            is_read=False,
        )
        self.db.add(notification)
        await self.db.flush()
        await self.db.refresh(notification)

        metrics_collector.record_notification(notification_type.value)

        payload = NotificationResponse.model_validate(notification).model_dump(mode="json")
        self._pending_pushes.append((str(user_id), payload))

        return notification

    async def commit(self) -> None:
        """Commit the caller's transaction, then push the queued notifications"""
        await self.db.commit()
        pushes, self._pending_pushes = self._pending_pushes, []

        for user_id, payload in pushes:
            try:
                await publish_notification(user_id, payload)
            except Exception as e:
                metrics_collector.record_push_failure()
                logger.warning(f"Failed to push notification {payload['id']} to user {user_id}: {e}")

    def discard_pending(self) -> None:
        """Drop queued pushes after a rollback"""
        self._pending_pushes = []

    async def notify_members(
        self,
        project_id: UUID,
        notification_type: NotificationType,
        title: str,
        message: str,
        exclude_user_ids: Iterable[UUID] = (),
        related_scene_id: Optional[UUID] = None,
    ) -> int:
        """Notify every member of a project except the excluded users"""
        excluded = set(exclude_user_ids)
        result = await self.db.execute(
            select(ProjectMember.user_id).where(ProjectMember.project_id == project_id)
        )
        recipients = [uid for uid in result.scalars().all() if uid not in excluded]

        for user_id in recipients:
            await self.create(
                user_id=user_id,
                notification_type=notification_type,
                title=title,
                message=message,
                project_id=project_id,
                related_scene_id=related_scene_id,
            )
        return len(recipients)

    async def list_for_user(self, ctx: RequestContext) -> tuple[List[Notification], int]:
        """Latest notifications of the caller and how many of them are unread"""
        result = await self.db.execute(
            select(Notification)
            .where(Notification.user_id == ctx.user_id)
            .order_by(Notification.created_at.desc())
            .limit(NOTIFICATION_PAGE_SIZE)
        )
        notifications = list(result.scalars().all())
        unread = sum(1 for n in notifications if not n.is_read)
        return notifications, unread

    async def unread_count(self, ctx: RequestContext) -> int:
        result = await self.db.execute(
            select(func.count(Notification.id)).where(
                Notification.user_id == ctx.user_id,
                Notification.is_read.is_(False),
            )
        )
        return result.scalar_one()

    async def _get_owned(self, ctx: RequestContext, notification_id: UUID) -> Notification:
        result = await self.db.execute(
            select(Notification).where(
                Notification.id == notification_id,
                Notification.user_id == ctx.user_id,
            )
        )
        notification = result.scalar_one_or_none()
        if not notification:
            raise NotFoundError(f"Notification with id {notification_id} not found")
        return notification

    async def mark_as_read(self, ctx: RequestContext, notification_id: UUID) -> Notification:
        notification = await self._get_owned(ctx, notification_id)
        notification.is_read = True
        await self.db.commit()
        await self.db.refresh(notification)
        return notification

    async def mark_all_as_read(self, ctx: RequestContext) -> int:
        result = await self.db.execute(
            update(Notification)
            .where(Notification.user_id == ctx.user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session="fetch")
        )
        await self.db.commit()
        return result.rowcount or 0

    async def delete(self, ctx: RequestContext, notification_id: UUID) -> None:
        notification = await self._get_owned(ctx, notification_id)
        await self.db.delete(notification)
        await self.db.commit()

    async def clear_all(self, ctx: RequestContext) -> int:
        result = await self.db.execute(
            delete(Notification)
            .where(Notification.user_id == ctx.user_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        logger.info(f"Cleared {result.rowcount} notifications for user {ctx.user_id}")
        return result.rowcount or 0
