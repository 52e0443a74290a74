"""Count invite notifications use case."""

from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.error import UnauthenticatedError
from fieldops.domain.model import Identity
from fieldops.domain.service import NotificationService


class CountInviteNotificationsRequest(BaseModel):
    """Count invite notifications request."""

    caller: Identity | None = None


class CountInviteNotificationsResponse(BaseModel):
    """Count invite notifications response."""

    unread: int


class CountInviteNotificationsUseCase(
    BaseUseCase[CountInviteNotificationsRequest, CountInviteNotificationsResponse]
):
    """Use case for the unread invite badge."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: CountInviteNotificationsRequest
    ) -> CountInviteNotificationsResponse:
        if request.caller is None:
            raise UnauthenticatedError()
        unread = await self.notification_service.unread_count(request.caller.id)
        return CountInviteNotificationsResponse(unread=unread)
