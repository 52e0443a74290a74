"""In-memory repository implementations for testing."""

from .company import InMemoryCompanyRepository
from .employee import InMemoryEmployeeRepository
from .invite import InMemoryInviteRepository
from .membership import InMemoryMembershipRepository
from .notification import InMemoryNotificationRepository

__all__ = [
    "InMemoryCompanyRepository",
    "InMemoryEmployeeRepository",
    "InMemoryInviteRepository",
    "InMemoryMembershipRepository",
    "InMemoryNotificationRepository",
]
