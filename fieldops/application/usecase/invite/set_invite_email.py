"""Set invite email use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.service import InviteService


class SetInviteEmailRequest(BaseModel):
    """Set invite email request."""

    token: str | None = None
    email: str | None = None


class SetInviteEmailResponse(BaseModel):
    """Set invite email response."""

    success: bool = True


class SetInviteEmailUseCase(BaseUseCase[SetInviteEmailRequest, SetInviteEmailResponse]):
    """Use case for the invitee supplying an email the employee record lacks."""

    def __init__(self, invite_service: InviteService) -> None:
        self.invite_service = invite_service

    async def execute(self, request: SetInviteEmailRequest) -> SetInviteEmailResponse:
        with logfire.span("set_invite_email.execute"):
            await self.invite_service.set_invite_email(request.token, request.email)
            return SetInviteEmailResponse()
