"""Resend invite email use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.service import InviteService, MembershipService
from fieldops.domain.value import CompanyId, EmployeeId, IdentityId


class ResendInviteEmailRequest(BaseModel):
    """Resend invite email request."""

    company_id: CompanyId
    employee_id: EmployeeId
    issuer_id: IdentityId


class ResendInviteEmailResponse(BaseModel):
    """Resend invite email response."""

    sent: bool
    message: str


class ResendInviteEmailUseCase(
    BaseUseCase[ResendInviteEmailRequest, ResendInviteEmailResponse]
):
    """Use case for resending the invite email.

    Outbound email is not wired up, so the response always tells the
    administrator to share the link by hand.
    """

    def __init__(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> None:
        self.invite_service = invite_service
        self.membership_service = membership_service

    async def execute(
        self, request: ResendInviteEmailRequest
    ) -> ResendInviteEmailResponse:
        with logfire.span(
            "resend_invite_email.execute",
            company_id=str(request.company_id),
            employee_id=str(request.employee_id),
        ):
            await self.membership_service.require_manager(
                request.company_id, request.issuer_id
            )
            message = await self.invite_service.resend_email(
                company_id=request.company_id,
                employee_id=request.employee_id,
                issuer_id=request.issuer_id,
            )
            return ResendInviteEmailResponse(sent=False, message=message)
