"""Domain services."""

from .base import Service
from .identity_provider import IdentityProvider
from .invite_service import AcceptResult, InvitePreview, InviteService
from .membership_service import MembershipService
from .notification_service import InviteInboxItem, NotificationService

__all__ = [
    "AcceptResult",
    "IdentityProvider",
    "InviteInboxItem",
    "InvitePreview",
    "InviteService",
    "MembershipService",
    "NotificationService",
    "Service",
]
