"""Membership repository interface."""

from abc import ABC, abstractmethod

from fieldops.domain.model.membership import Membership
from fieldops.domain.value import CompanyId, IdentityId


class MembershipRepository(ABC):
    """Repository for company memberships keyed by (company_id, identity_id)."""

    @abstractmethod
    async def find(
        self, company_id: CompanyId, identity_id: IdentityId
    ) -> Membership | None:
        """Find the membership of an identity in a company.

        Returns:
            The membership if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert(self, membership: Membership) -> Membership:
        """Insert or update a membership by its composite key.

        Calling twice with identical arguments leaves a single, identical row.

        Args:
            membership: Membership to write

        Returns:
            The stored membership
        """
        pass
