"""Notification repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from fieldops.domain.model.notification import Notification
from fieldops.domain.value import (
    IdentityId,
    InviteId,
    NotificationId,
    NotificationType,
)


class NotificationRepository(ABC):
    """Repository for per-recipient inbox notifications."""

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Store a new notification."""
        pass

    @abstractmethod
    async def find_for_recipient(
        self,
        notification_id: NotificationId,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> Notification | None:
        """Find a notification only if it belongs to the recipient.

        Args:
            notification_id: Notification ID
            recipient_id: Identity that must own the notification
            type: Expected notification type

        Returns:
            The notification if found and owned, None otherwise
        """
        pass

    @abstractmethod
    async def list_for_recipient(
        self,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> list[Notification]:
        """List a recipient's notifications, newest first."""
        pass

    @abstractmethod
    async def count_unread(
        self,
        recipient_id: IdentityId,
        type: NotificationType = NotificationType.COMPANY_INVITE,
    ) -> int:
        """Count a recipient's unread notifications."""
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: NotificationId, recipient_id: IdentityId, at: datetime
    ) -> None:
        """Mark a recipient's notification as read."""
        pass

    @abstractmethod
    async def delete_all_for_invite(
        self, invite_id: InviteId, except_recipient_id: IdentityId
    ) -> int:
        """Delete every other recipient's notification referencing an invite.

        Returns:
            Number of notifications deleted
        """
        pass
