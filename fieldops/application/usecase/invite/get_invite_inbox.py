"""Get invite inbox use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.error import UnauthenticatedError
from fieldops.domain.model import Identity
from fieldops.domain.service import InviteInboxItem, NotificationService


class GetInviteInboxRequest(BaseModel):
    """Get invite inbox request."""

    caller: Identity | None = None


class GetInviteInboxResponse(BaseModel):
    """Get invite inbox response."""

    invites: list[InviteInboxItem]


class GetInviteInboxUseCase(BaseUseCase[GetInviteInboxRequest, GetInviteInboxResponse]):
    """Use case for listing the pending invites in the caller's inbox."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: GetInviteInboxRequest) -> GetInviteInboxResponse:
        if request.caller is None:
            raise UnauthenticatedError()
        with logfire.span("get_invite_inbox.execute", caller_id=str(request.caller.id)):
            items = await self.notification_service.inbox(request.caller.id)
            return GetInviteInboxResponse(invites=items)
