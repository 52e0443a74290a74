"""Decline invite by notification use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.model import Identity
from fieldops.domain.service import InviteService
from fieldops.domain.value import NotificationId


class DeclineInviteByNotificationRequest(BaseModel):
    """Decline invite by notification request."""

    notification_id: NotificationId
    caller: Identity | None = None


class DeclineInviteByNotificationResponse(BaseModel):
    """Decline invite by notification response."""

    success: bool = True
    declined: bool


class DeclineInviteByNotificationUseCase(
    BaseUseCase[DeclineInviteByNotificationRequest, DeclineInviteByNotificationResponse]
):
    """Use case for declining an invite from the signed-in user's inbox."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(
        self, request: DeclineInviteByNotificationRequest
    ) -> DeclineInviteByNotificationResponse:
        with logfire.span(
            "decline_invite_by_notification.execute",
            notification_id=str(request.notification_id),
        ):
            declined = await self.invite_service.decline_by_notification(
                request.notification_id, request.caller
            )
            return DeclineInviteByNotificationResponse(declined=declined)
