"""Validate invite use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from fieldops.application.usecase.base import BaseUseCase
from fieldops.domain.service import InviteService
from fieldops.domain.value import CompanyId, EmployeeId, InviteId


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    token: str | None = None


class InviteCompany(BaseModel):
    id: CompanyId
    name: str | None = None
    logo_url: str | None = None


class InviteEmployee(BaseModel):
    id: EmployeeId
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


class InviteSummary(BaseModel):
    id: InviteId
    expires_at: datetime


class ValidateInviteResponse(BaseModel):
    """Validate invite response."""

    valid: bool = True
    company: InviteCompany
    employee: InviteEmployee
    invite: InviteSummary


class ValidateInviteUseCase(BaseUseCase[ValidateInviteRequest, ValidateInviteResponse]):
    """Use case for validating an invite link.

    Lets the landing page show who is inviting whom before the invitee
    signs in or creates an account. Never changes any state.
    """

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize validate invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        """Validate an invite token.

        Args:
            request: Validation request with token

        Returns:
            Company, employee and invite details

        Raises:
            InviteError: The classified reason the invite cannot be used
        """
        with logfire.span("validate_invite.execute"):
            preview = await self.invite_service.validate(request.token)
            return ValidateInviteResponse(
                company=InviteCompany(
                    id=preview.company_id,
                    name=preview.company_name,
                    logo_url=preview.company_logo_url,
                ),
                employee=InviteEmployee(
                    id=preview.employee_id,
                    first_name=preview.employee_first_name,
                    last_name=preview.employee_last_name,
                    email=preview.email,
                ),
                invite=InviteSummary(id=preview.invite_id, expires_at=preview.expires_at),
            )
