"""Invite use cases."""

from fieldops.application.usecase.invite.accept_invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
)
from fieldops.application.usecase.invite.accept_invite_by_notification import (
    AcceptInviteByNotificationRequest,
    AcceptInviteByNotificationUseCase,
)
from fieldops.application.usecase.invite.count_invite_notifications import (
    CountInviteNotificationsRequest,
    CountInviteNotificationsResponse,
    CountInviteNotificationsUseCase,
)
from fieldops.application.usecase.invite.decline_invite_by_notification import (
    DeclineInviteByNotificationRequest,
    DeclineInviteByNotificationResponse,
    DeclineInviteByNotificationUseCase,
)
from fieldops.application.usecase.invite.get_invite_inbox import (
    GetInviteInboxRequest,
    GetInviteInboxResponse,
    GetInviteInboxUseCase,
)
from fieldops.application.usecase.invite.issue_invite import (
    IssueInviteRequest,
    IssueInviteResponse,
    IssueInviteUseCase,
)
from fieldops.application.usecase.invite.regenerate_invite import (
    RegenerateInviteRequest,
    RegenerateInviteUseCase,
)
from fieldops.application.usecase.invite.resend_invite_email import (
    ResendInviteEmailRequest,
    ResendInviteEmailResponse,
    ResendInviteEmailUseCase,
)
from fieldops.application.usecase.invite.revoke_invite import (
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
)
from fieldops.application.usecase.invite.set_invite_email import (
    SetInviteEmailRequest,
    SetInviteEmailResponse,
    SetInviteEmailUseCase,
)
from fieldops.application.usecase.invite.validate_invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "AcceptInviteByNotificationRequest",
    "AcceptInviteByNotificationUseCase",
    "AcceptInviteRequest",
    "AcceptInviteResponse",
    "AcceptInviteUseCase",
    "CountInviteNotificationsRequest",
    "CountInviteNotificationsResponse",
    "CountInviteNotificationsUseCase",
    "DeclineInviteByNotificationRequest",
    "DeclineInviteByNotificationResponse",
    "DeclineInviteByNotificationUseCase",
    "GetInviteInboxRequest",
    "GetInviteInboxResponse",
    "GetInviteInboxUseCase",
    "IssueInviteRequest",
    "IssueInviteResponse",
    "IssueInviteUseCase",
    "RegenerateInviteRequest",
    "RegenerateInviteUseCase",
    "ResendInviteEmailRequest",
    "ResendInviteEmailResponse",
    "ResendInviteEmailUseCase",
    "RevokeInviteRequest",
    "RevokeInviteResponse",
    "RevokeInviteUseCase",
    "SetInviteEmailRequest",
    "SetInviteEmailResponse",
    "SetInviteEmailUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
]
