"""Domain value objects for the invite flow."""

from fieldops.domain.value.identifiers import (
    CompanyId,
    EmployeeId,
    IdentityId,
    InviteId,
    NotificationId,
)
from fieldops.domain.value.types import (
    Email,
    InviteSecret,
    InviteStatus,
    MemberRole,
    MembershipStatus,
    NotificationType,
    TokenHash,
)

__all__ = [
    # Identifiers
    "CompanyId",
    "EmployeeId",
    "IdentityId",
    "InviteId",
    "NotificationId",
    # Types
    "Email",
    "InviteSecret",
    "InviteStatus",
    "MemberRole",
    "MembershipStatus",
    "NotificationType",
    "TokenHash",
]
