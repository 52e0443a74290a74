"""Repository interfaces for the invite flow.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from fieldops.domain.repository.company import CompanyRepository
from fieldops.domain.repository.employee import EmployeeRepository
from fieldops.domain.repository.invite import InviteRepository
from fieldops.domain.repository.membership import MembershipRepository
from fieldops.domain.repository.notification import NotificationRepository

__all__ = [
    "CompanyRepository",
    "EmployeeRepository",
    "InviteRepository",
    "MembershipRepository",
    "NotificationRepository",
]
