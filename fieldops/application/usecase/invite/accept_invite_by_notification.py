"""Accept invite by notification use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.application.usecase.invite.accept_invite import (
    AcceptInviteResponse,
    to_accept_response,
)
from fieldops.domain.model import Identity
from fieldops.domain.service import InviteService
from fieldops.domain.value import NotificationId


class AcceptInviteByNotificationRequest(BaseModel):
    """Accept invite by notification request."""

    notification_id: NotificationId
    caller: Identity | None = None


class AcceptInviteByNotificationUseCase(
    BaseUseCase[AcceptInviteByNotificationRequest, AcceptInviteResponse]
):
    """Use case for accepting an invite from the signed-in user's inbox."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: AcceptInviteByNotificationRequest
    ) -> AcceptInviteResponse:
        with logfire.span(
            "accept_invite_by_notification.execute",
            notification_id=str(request.notification_id),
        ):
            result = await self.invite_service.accept_by_notification(
                request.notification_id, request.caller
            )
            return to_accept_response(result)
