"""PostgreSQL implementation of Notification repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.domain.model import Notification
from fieldops.domain.repository import NotificationRepository
from fieldops.domain.value import (
    IdentityId,
    InviteId,
    NotificationId,
    NotificationType,
)
from fieldops.persistence.mappers import notification_to_dict, row_to_notification
from fieldops.persistence.tables import user_notifications_table

notifications = user_notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, notification: Notification) -> Notification:
        """Store a new notification."""
        stmt = insert(notifications).values(**notification_to_dict(notification))
        await self.session.execute(stmt)
        await self.session.flush()
        return notification

    async def find_for_recipient(
        self,
        notification_id: NotificationId,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> Optional[Notification]:
        """Find a notification only if it belongs to the recipient."""
        stmt = select(notifications).where(
            and_(
                notifications.c.id == notification_id,
                notifications.c.user_id == recipient_id,
                notifications.c.type == type.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_notification(dict(row)) if row else None

    async def list_for_recipient(
        self,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> list[Notification]:
        """List a recipient's notifications, newest first."""
        stmt = (
            select(notifications)
            .where(
                and_(
                    notifications.c.user_id == recipient_id,
                    notifications.c.type == type.value,
                )
            )
            .order_by(notifications.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(dict(row)) for row in result.mappings().all()]

    async def count_unread(
        self,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> int:
        """Count a recipient's unread notifications."""
        stmt = (
            select(func.count())
            .select_from(notifications)
            .where(
                and_(
                    notifications.c.user_id == recipient_id,
                    notifications.c.type == type.value,
                    notifications.c.read_at.is_(None),
                )
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: IdentityId, at: datetime
    ) -> None:
        """Mark a recipient's notification as read."""
        stmt = (
            update(notifications)
            .where(
                and_(
                    notifications.c.id == notification_id,
                    notifications.c.user_id == recipient_id,
                    notifications.c.read_at.is_(None),
                )
            )
            .values(read_at=at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_all_for_invite(
        self, invite_id: InviteId, except_recipient_id: IdentityId
    ) -> int:
        """Delete every other recipient's notification referencing an invite."""
        stmt = delete(notifications).where(
            and_(
                notifications.c.invite_id == invite_id,
                notifications.c.user_id != except_recipient_id,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
