"""Regenerate invite use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.application.usecase.invite.issue_invite import IssueInviteResponse
from fieldops.domain.service import InviteService, MembershipService
from fieldops.domain.value import CompanyId, EmployeeId, IdentityId


class RegenerateInviteRequest(BaseModel):
    """Regenerate invite request."""

    company_id: CompanyId
    employee_id: EmployeeId
    issuer_id: IdentityId


class RegenerateInviteUseCase(
    BaseUseCase[RegenerateInviteRequest, IssueInviteResponse]
):
    """Use case for replacing an employee's invite link."""

    def __init__(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> None:
        self.invite_service = invite_service
        self.membership_service = membership_service

    async def execute(self, request: RegenerateInviteRequest) -> IssueInviteResponse:
        """Revoke the current link and issue a new one with the same role."""
        with logfire.span(
            "regenerate_invite.execute",
            company_id=str(request.company_id),
            employee_id=str(request.employee_id),
        ):
            await self.membership_service.require_manager(
                request.company_id, request.issuer_id
            )
            invite, link = await self.invite_service.regenerate(
                company_id=request.company_id,
                employee_id=request.employee_id,
                issuer_id=request.issuer_id,
            )
            return IssueInviteResponse(
                invite_id=invite.id,
                employee_id=invite.employee_id,
                role=invite.role,
                expires_at=invite.expires_at,
                link=link,
            )
