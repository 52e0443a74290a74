"""Domain layer DI providers."""

from dishka import Scope, provide

from fieldops.config import Settings
from fieldops.domain.repository import (
    CompanyRepository,
    EmployeeRepository,
    InviteRepository,
    MembershipRepository,
    NotificationRepository,
)
from fieldops.domain.service import (
    IdentityProvider,
    InviteService,
    MembershipService,
    NotificationService,
)
from fieldops.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        employee_repository: EmployeeRepository,
        company_repository: CompanyRepository,
        membership_repository: MembershipRepository,
        notification_repository: NotificationRepository,
        identity_provider: IdentityProvider,
        settings: Settings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            employee_repository=employee_repository,
            company_repository=company_repository,
            membership_repository=membership_repository,
            notification_repository=notification_repository,
            identity_provider=identity_provider,
            settings=settings,
        )

    @provide
    def get_membership_service(
        self, membership_repository: MembershipRepository, settings: Settings
    ) -> MembershipService:
        """Provide membership domain service."""
        return MembershipService(
            membership_repository=membership_repository,
            operation_timeout=settings.invitations.operation_timeout_seconds,
        )

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        invite_repository: InviteRepository,
        company_repository: CompanyRepository,
        settings: Settings,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            invite_repository=invite_repository,
            company_repository=company_repository,
            operation_timeout=settings.invitations.operation_timeout_seconds,
        )
