"""Company membership entity."""

from datetime import datetime

from pydantic import Field

from fieldops.domain.model.common import DomainModel, utcnow
from fieldops.domain.value import CompanyId, IdentityId, MemberRole, MembershipStatus


class Membership(DomainModel):
    """Authorization record granting an identity access to a company.

    Keyed by (company_id, identity_id); written through an idempotent upsert.
    """

    company_id: CompanyId
    identity_id: IdentityId
    role: MemberRole = MemberRole.MEMBER
    status: MembershipStatus = MembershipStatus.ACTIVE
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == MembershipStatus.ACTIVE
