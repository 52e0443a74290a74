"""PostgreSQL repository implementations."""

from fieldops.persistence.repository.company import PostgresCompanyRepository
from fieldops.persistence.repository.employee import PostgresEmployeeRepository
from fieldops.persistence.repository.invite import PostgresInviteRepository
from fieldops.persistence.repository.membership import PostgresMembershipRepository
from fieldops.persistence.repository.notification import (
    PostgresNotificationRepository,
)

__all__ = [
    "PostgresCompanyRepository",
    "PostgresEmployeeRepository",
    "PostgresInviteRepository",
    "PostgresMembershipRepository",
    "PostgresNotificationRepository",
]
