"""Inbox notification entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from fieldops.domain.model.common import DomainModel, utcnow
from fieldops.domain.value import (
    CompanyId,
    IdentityId,
    InviteId,
    NotificationId,
    NotificationType,
)


class Notification(DomainModel):
    """Inbox entry telling an identity about a pending invite.

    Several notifications may reference the same invite; once one recipient
    acts on it, the copies of every other recipient are deleted.
    """

    id: NotificationId
    recipient_id: IdentityId
    type: NotificationType = NotificationType.COMPANY_INVITE
    invite_id: InviteId
    company_id: CompanyId
    read_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
