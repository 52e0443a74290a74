"""Revoke invite use case."""

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.service import InviteService, MembershipService
from fieldops.domain.value import CompanyId, EmployeeId, IdentityId


class RevokeInviteRequest(BaseModel):
    """Revoke invite request."""

    company_id: CompanyId
    employee_id: EmployeeId
    issuer_id: IdentityId


class RevokeInviteResponse(BaseModel):
    """Revoke invite response."""

    revoked: int


class RevokeInviteUseCase(BaseUseCase[RevokeInviteRequest, RevokeInviteResponse]):
    """Use case for revoking an employee's pending invites."""

    def __init__(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> None:
        self.invite_service = invite_service
        self.membership_service = membership_service

    async def execute(self, request: RevokeInviteRequest) -> RevokeInviteResponse:
        with logfire.span(
            "revoke_invite.execute",
            company_id=str(request.company_id),
            employee_id=str(request.employee_id),
        ):
            await self.membership_service.require_manager(
                request.company_id, request.issuer_id
            )
            revoked = await self.invite_service.revoke(
                company_id=request.company_id,
                employee_id=request.employee_id,
                issuer_id=request.issuer_id,
            )
            return RevokeInviteResponse(revoked=revoked)
