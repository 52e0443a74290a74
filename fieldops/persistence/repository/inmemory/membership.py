"""In-memory membership repository for testing."""

from typing import Optional

from fieldops.domain.model.membership import Membership
from fieldops.domain.repository.membership import MembershipRepository
from fieldops.domain.value import CompanyId, IdentityId


class InMemoryMembershipRepository(MembershipRepository):
    """In-memory implementation of MembershipRepository for testing."""

    def __init__(self) -> None:
        self._memberships: dict[tuple[CompanyId, IdentityId], Membership] = {}

    async def find(
        self, company_id: CompanyId, identity_id: IdentityId
    ) -> Optional[Membership]:
        """Find the membership of an identity in a company."""
        return self._memberships.get((company_id, identity_id))

    async def upsert(self, membership: Membership) -> Membership:
        """Insert or update a membership, keeping the original created_at."""
        key = (membership.company_id, membership.identity_id)
        existing = self._memberships.get(key)
        if existing is not None:
            membership = membership.model_copy(
                update={"created_at": existing.created_at}
            )
        self._memberships[key] = membership
        return membership

    def all(self) -> list[Membership]:
        """All stored memberships."""
        return list(self._memberships.values())
