"""Application layer DI providers."""

from dishka import Scope, provide

from fieldops.application.usecase.invite import (
    AcceptInviteByNotificationUseCase,
    AcceptInviteUseCase,
    CountInviteNotificationsUseCase,
    DeclineInviteByNotificationUseCase,
    GetInviteInboxUseCase,
    IssueInviteUseCase,
    RegenerateInviteUseCase,
    ResendInviteEmailUseCase,
    RevokeInviteUseCase,
    SetInviteEmailUseCase,
    ValidateInviteUseCase,
)
from fieldops.domain.service import (
    InviteService,
    MembershipService,
    NotificationService,
)
from fieldops.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Administrator use cases
    @provide(scope=Scope.REQUEST)
    def get_issue_invite_use_case(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> IssueInviteUseCase:
        """Provide issue invite use case."""
        return IssueInviteUseCase(
            invite_service=invite_service, membership_service=membership_service
        )

    @provide(scope=Scope.REQUEST)
    def get_regenerate_invite_use_case(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> RegenerateInviteUseCase:
        """Provide regenerate invite use case."""
        return RegenerateInviteUseCase(
            invite_service=invite_service, membership_service=membership_service
        )

    @provide(scope=Scope.REQUEST)
    def get_revoke_invite_use_case(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> RevokeInviteUseCase:
        """Provide revoke invite use case."""
        return RevokeInviteUseCase(
            invite_service=invite_service, membership_service=membership_service
        )

    @provide(scope=Scope.REQUEST)
    def get_resend_invite_email_use_case(
        self, invite_service: InviteService, membership_service: MembershipService
    ) -> ResendInviteEmailUseCase:
        """Provide resend invite email use case."""
        return ResendInviteEmailUseCase(
            invite_service=invite_service, membership_service=membership_service
        )

    # Invitee use cases
    @provide(scope=Scope.REQUEST)
    def get_validate_invite_use_case(
        self, invite_service: InviteService
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invite_use_case(
        self, invite_service: InviteService
    ) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_set_invite_email_use_case(
        self, invite_service: InviteService
    ) -> SetInviteEmailUseCase:
        """Provide set invite email use case."""
        return SetInviteEmailUseCase(invite_service=invite_service)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_accept_invite_by_notification_use_case(
        self, invite_service: InviteService
    ) -> AcceptInviteByNotificationUseCase:
        """Provide accept invite by notification use case."""
        return AcceptInviteByNotificationUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_decline_invite_by_notification_use_case(
        self, invite_service: InviteService
    ) -> DeclineInviteByNotificationUseCase:
        """Provide decline invite by notification use case."""
        return DeclineInviteByNotificationUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_get_invite_inbox_use_case(
        self, notification_service: NotificationService
    ) -> GetInviteInboxUseCase:
        """Provide get invite inbox use case."""
        return GetInviteInboxUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_count_invite_notifications_use_case(
        self, notification_service: NotificationService
    ) -> CountInviteNotificationsUseCase:
        """Provide count invite notifications use case."""
        return CountInviteNotificationsUseCase(notification_service=notification_service)
