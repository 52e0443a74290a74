"""In-memory notification repository for testing."""

from datetime import datetime
from typing import Optional

from fieldops.domain.model.notification import Notification
from fieldops.domain.repository.notification import NotificationRepository
from fieldops.domain.value import (
    IdentityId,
    InviteId,
    NotificationId,
    NotificationType,
)


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self) -> None:
        self._notifications: dict[NotificationId, Notification] = {}

    async def save(self, notification: Notification) -> Notification:
        """Store a new notification."""
        self._notifications[notification.id] = notification
        return notification

    async def find_for_recipient(
        self,
        notification_id: NotificationId,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> Optional[Notification]:
        """Find a notification only if it belongs to the recipient."""
        notification = self._notifications.get(notification_id)
        if (
            notification is None
            or notification.recipient_id != recipient_id
            or notification.type != type
        ):
            return None
        return notification

    async def list_for_recipient(
        self,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> list[Notification]:
        """List a recipient's notifications, newest first."""
        matches = [
            n
            for n in self._notifications.values()
            if n.recipient_id == recipient_id and n.type == type
        ]
        matches.sort(key=lambda n: n.created_at, reverse=True)
        return matches

    async def count_unread(
        self,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> int:
        """Count a recipient's unread notifications."""
        return sum(
            1
            for n in await self.list_for_recipient(recipient_id, type)
            if n.read_at is None
        )

    async def mark_read(
        self, notification_id: NotificationId, recipient_id: IdentityId, at: datetime
    ) -> None:
        """Mark a recipient's notification as read."""
        notification = await self.find_for_recipient(notification_id, recipient_id)
        if notification is not None and notification.read_at is None:
            self._notifications[notification_id] = notification.model_copy(
                update={"read_at": at}
            )

    async def delete_all_for_invite(
        self, invite_id: InviteId, except_recipient_id: IdentityId
    ) -> int:
        """Delete every other recipient's notification referencing an invite."""
        doomed = [
            n.id
            for n in self._notifications.values()
            if n.invite_id == invite_id and n.recipient_id != except_recipient_id
        ]
        for notification_id in doomed:
            del self._notifications[notification_id]
        return len(doomed)

    def all(self) -> list[Notification]:
        """All stored notifications."""
        return list(self._notifications.values())
