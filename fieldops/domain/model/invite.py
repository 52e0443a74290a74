"""Invite entity.

An invite offers membership of one company to one employee record. The raw
secret of the accept link is never stored; invites are looked up by the
SHA-256 hash of that secret.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from fieldops.domain.model.common import DomainModel, utcnow
from fieldops.domain.value import (
    CompanyId,
    EmployeeId,
    IdentityId,
    InviteId,
    InviteStatus,
    MemberRole,
    TokenHash,
)


class Invite(DomainModel):
    """Invite entity.

    Business rules:
    - At most one pending invite per employee (older ones are revoked on issue)
    - Accepted and revoked are terminal
    - Expiry is derived at read time and never written as a status
    - accepted_at / accepted_by are set together, once
    - Invites are never deleted
    """

    id: InviteId
    company_id: CompanyId
    employee_id: EmployeeId
    role: MemberRole = MemberRole.MEMBER
    email: Optional[str] = None  # May be filled in lazily by the invitee
    token_hash: TokenHash
    status: InviteStatus = InviteStatus.PENDING
    created_by: Optional[IdentityId] = None
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[IdentityId] = None
    revoked_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        """Whether a pending invite has passed its expiry."""
        return self.status == InviteStatus.PENDING and now > self.expires_at

    def is_acceptable(self, now: datetime) -> bool:
        return self.status == InviteStatus.PENDING and not self.is_expired(now)
