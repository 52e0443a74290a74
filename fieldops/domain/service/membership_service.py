"""Membership domain service."""

import logfire

from fieldops.domain.error import NotAuthorizedError
from fieldops.domain.model import Membership
from fieldops.domain.repository import MembershipRepository
from fieldops.domain.value import CompanyId, IdentityId

from .base import Service


class MembershipService(Service):
    """Domain service for company membership checks."""

    def __init__(
        self,
        membership_repository: MembershipRepository,
        operation_timeout: float | None = None,
    ) -> None:
        """Initialize membership service.

        Args:
            membership_repository: Membership repository
            operation_timeout: Upper bound for each store call, in seconds
        """
        self.membership_repository = membership_repository
        self.operation_timeout = operation_timeout

    async def require_manager(
        self, company_id: CompanyId, identity_id: IdentityId, action: str = "manage invites"
    ) -> Membership:
        """Require an active owner or admin membership.

        Args:
            company_id: Active company of the caller
            identity_id: Caller identity
            action: Action name used in the error message

        Returns:
            The caller's membership

        Raises:
            NotAuthorizedError: If the caller is not an owner or admin
        """
        with logfire.span(
            "membership_service.require_manager",
            company_id=str(company_id),
            identity_id=str(identity_id),
        ):
            membership = await self._call(
                "membership.find",
                self.membership_repository.find(company_id, identity_id),
            )
            if (
                membership is None
                or not membership.is_active
                or not membership.role.can_manage_invites
            ):
                logfire.warn(
                    "Invite management denied",
                    company_id=str(company_id),
                    identity_id=str(identity_id),
                )
                raise NotAuthorizedError(action, str(company_id), str(identity_id))
            return membership
