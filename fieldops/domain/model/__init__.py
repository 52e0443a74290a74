"""Domain model entities for the invite flow."""

from fieldops.domain.model.company import Company
from fieldops.domain.model.employee import Employee
from fieldops.domain.model.identity import Identity
from fieldops.domain.model.invite import Invite
from fieldops.domain.model.membership import Membership
from fieldops.domain.model.notification import Notification

__all__ = [
    "Company",
    "Employee",
    "Identity",
    "Invite",
    "Membership",
    "Notification",
]
