"""Accept invite use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.model import Identity
from fieldops.domain.service import AcceptResult, InviteService
from fieldops.domain.value import CompanyId, EmployeeId, MemberRole


class AcceptInviteRequest(BaseModel):
    """Accept invite request.

    ``caller`` is the signed-in identity, if any. Without one, ``email`` and
    ``password`` are used to create a new account.
    """

    token: str | None = None
    email: str | None = None
    password: str | None = None
    caller: Identity | None = None


class AcceptInviteResponse(BaseModel):
    """Accept invite response."""

    success: bool = True
    employee_id: EmployeeId
    company_id: CompanyId
    role: MemberRole
    requires_login: bool = False


class AcceptInviteUseCase(BaseUseCase[AcceptInviteRequest, AcceptInviteResponse]):
    """Use case for accepting an invite from its link."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize accept invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: AcceptInviteRequest) -> AcceptInviteResponse:
        """Accept an invite.

        Raises:
            InviteError: The classified reason the invite cannot be accepted
            TransientError: If a store or the identity provider failed
        """
        with logfire.span(
            "accept_invite.execute", has_session=request.caller is not None
        ):
            result = await self.invite_service.accept(
                raw_secret=request.token,
                caller=request.caller,
                supplied_email=request.email,
                supplied_password=request.password,
            )
            return to_accept_response(result)


def to_accept_response(result: AcceptResult) -> AcceptInviteResponse:
    return AcceptInviteResponse(
        employee_id=result.employee_id,
        company_id=result.company_id,
        role=result.role,
        requires_login=result.requires_login,
    )
