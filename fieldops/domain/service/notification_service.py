"""Notification domain service."""

from datetime import datetime

import logfire

from fieldops.domain.model.common import utcnow
from fieldops.domain.repository import (
    CompanyRepository,
    InviteRepository,
    NotificationRepository,
)
from fieldops.domain.value import (
    CompanyId,
    IdentityId,
    InviteId,
    MemberRole,
    NotificationId,
)
from fieldops.domain.value.common import ValueObject

from .base import Service


class InviteInboxItem(ValueObject):
    """Pending invite as shown in the recipient's inbox."""

    notification_id: NotificationId
    invite_id: InviteId
    company_id: CompanyId
    company_name: str | None = None
    role: MemberRole
    expires_at: datetime
    created_at: datetime
    read: bool


class NotificationService(Service):
    """Domain service for the invite inbox."""

    def __init__(
        self,
        notification_repository: NotificationRepository,
        invite_repository: InviteRepository,
        company_repository: CompanyRepository,
        operation_timeout: float | None = None,
    ) -> None:
        self.notification_repository = notification_repository
        self.invite_repository = invite_repository
        self.company_repository = company_repository
        self.operation_timeout = operation_timeout

    async def inbox(self, recipient_id: IdentityId) -> list[InviteInboxItem]:
        """List the recipient's invite notifications that can still be acted on.

        Notifications whose invite is no longer pending or has expired are
        left out. Newest first.
        """
        with logfire.span("notification_service.inbox", recipient_id=str(recipient_id)):
            notifications = await self._call(
                "notification.list_for_recipient",
                self.notification_repository.list_for_recipient(recipient_id),
            )
            now = utcnow()
            items: list[InviteInboxItem] = []
            company_names: dict[CompanyId, str | None] = {}
            for notification in notifications:
                invite = await self._call(
                    "invite.find_by_id",
                    self.invite_repository.find_by_id(notification.invite_id),
                )
                if invite is None or not invite.is_acceptable(now):
                    continue
                if invite.company_id not in company_names:
                    company = await self._call(
                        "company.find_by_id",
                        self.company_repository.find_by_id(invite.company_id),
                    )
                    company_names[invite.company_id] = company.name if company else None
                items.append(
                    InviteInboxItem(
                        notification_id=notification.id,
                        invite_id=invite.id,
                        company_id=invite.company_id,
                        company_name=company_names[invite.company_id],
                        role=invite.role,
                        expires_at=invite.expires_at,
                        created_at=notification.created_at,
                        read=notification.read_at is not None,
                    )
                )
            logfire.info("Invite inbox retrieved", count=len(items))
            return items

    async def unread_count(self, recipient_id: IdentityId) -> int:
        """Count the recipient's unread invite notifications."""
        with logfire.span(
            "notification_service.unread_count", recipient_id=str(recipient_id)
        ):
            return await self._call(
                "notification.count_unread",
                self.notification_repository.count_unread(recipient_id),
            )
