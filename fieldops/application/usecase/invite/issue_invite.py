"""Issue invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.service import InviteService, MembershipService
from fieldops.domain.value import CompanyId, EmployeeId, IdentityId, InviteId, MemberRole


class IssueInviteRequest(BaseModel):
    """Issue invite request."""

    company_id: CompanyId
    employee_id: EmployeeId
    issuer_id: IdentityId
    role: str | None = None


class IssueInviteResponse(BaseModel):
    """Issue invite response.

    ``link`` carries the raw secret and is only ever returned here.
    """

    invite_id: InviteId
    employee_id: EmployeeId
    role: MemberRole
    expires_at: datetime
    link: str


class IssueInviteUseCase(BaseUseCase[IssueInviteRequest, IssueInviteResponse]):
    """Use case for an administrator inviting an employee."""

    def __init__(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> None:
        """Initialize issue invite use case.

        Args:
            invite_service: Invite domain service
            membership_service: Membership domain service
        """
        self.invite_service = invite_service
        self.membership_service = membership_service

    async def execute(self, request: IssueInviteRequest) -> IssueInviteResponse:
        """Issue an invite.

        Raises:
            NotAuthorizedError: If the issuer is not an owner or admin
            NotFoundError: If the employee does not belong to the company
        """
        with logfire.span(
            "issue_invite.execute",
            company_id=str(request.company_id),
            employee_id=str(request.employee_id),
        ):
            await self.membership_service.require_manager(
                request.company_id, request.issuer_id
            )
            invite, link = await self.invite_service.issue(
                company_id=request.company_id,
                employee_id=request.employee_id,
                issuer_id=request.issuer_id,
                role=request.role,
            )
            return IssueInviteResponse(
                invite_id=invite.id,
                employee_id=invite.employee_id,
                role=invite.role,
                expires_at=invite.expires_at,
                link=link,
            )
