"""Strongly typed identifiers for field-service domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

CompanyId = NewType("CompanyId", UUID)
EmployeeId = NewType("EmployeeId", UUID)
InviteId = NewType("InviteId", UUID)
NotificationId = NewType("NotificationId", UUID)

# Identities are owned by the external identity provider
IdentityId = NewType("IdentityId", UUID)
