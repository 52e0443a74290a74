"""Employee entity (company-side profile an invite grants access to).

Only the fields the invite flow reads or writes are modeled here.
"""

from typing import Optional

from fieldops.domain.model.common import DomainModel
from fieldops.domain.value import CompanyId, EmployeeId, IdentityId, InviteStatus


class Employee(DomainModel):
    """Employee record.

    ``identity_id`` links the record to an authenticated identity once an
    invite is accepted; ``invitation_status`` mirrors the invite status for
    display.
    """

    id: EmployeeId
    company_id: CompanyId
    identity_id: Optional[IdentityId] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    invitation_status: Optional[InviteStatus] = None

    @property
    def is_linked(self) -> bool:
        return self.identity_id is not None
