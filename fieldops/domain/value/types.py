"""Domain value objects for the invite flow.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from fieldops.domain.value.common import RootValueObject

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InviteStatus(str, Enum):
    """Stored status of an invite.

    ``expired`` is never stored; it is derived from ``expires_at`` at read time.
    The same values are mirrored on the employee record.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REVOKED = "revoked"


class MemberRole(str, Enum):
    """Role an identity holds inside a company."""

    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def normalize(cls, *candidates: "str | MemberRole | None") -> "MemberRole":
        """Pick the first known role among the candidates, defaulting to member.

        Role strings arrive from invites and employee records in free form;
        anything that is not owner or admin collapses to member.
        """
        for candidate in candidates:
            if candidate is None:
                continue
            value = candidate.value if isinstance(candidate, MemberRole) else candidate
            value = value.strip().lower()
            if value == cls.OWNER.value:
                return cls.OWNER
            if value == cls.ADMIN.value:
                return cls.ADMIN
            if value:
                return cls.MEMBER
        return cls.MEMBER

    @property
    def can_manage_invites(self) -> bool:
        return self in (MemberRole.OWNER, MemberRole.ADMIN)


class MembershipStatus(str, Enum):
    """Status of a company membership."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class NotificationType(str, Enum):
    """Type of an inbox notification."""

    COMPANY_INVITE = "company_invite"


class Email(RootValueObject[str]):
    """Email address, normalized to lowercase without surrounding spaces."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Normalize and check the address shape."""
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v

    def matches(self, other: "Email | str | None") -> bool:
        """Case-insensitive comparison against another address."""
        if other is None:
            return False
        other_value = other.root if isinstance(other, Email) else other
        return self.root == other_value.strip().lower()


class InviteSecret(RootValueObject[str]):
    """Raw invite secret embedded in the accept link.

    Only ever held in memory; the store keeps the lookup hash instead.
    """

    @field_validator("root")
    @classmethod
    def validate_secret_format(cls, v: str) -> str:
        """Validate secret is URL-safe and long enough to carry 128+ bits."""
        v = v.strip()
        if len(v) < 32 or len(v) > 255:
            raise ValueError("Invite secret must be 32-255 characters")
        if not re.match(r"^[A-Za-z0-9_-]+$", v):
            raise ValueError("Invite secret must be URL-safe")
        return v

    def __repr__(self) -> str:
        return "InviteSecret('***')"


class TokenHash(RootValueObject[str]):
    """SHA-256 hex digest of an invite secret, used as the lookup key."""

    @field_validator("root")
    @classmethod
    def validate_hash_format(cls, v: str) -> str:
        """Validate 64 lowercase hex characters."""
        if not re.match(r"^[0-9a-f]{64}$", v):
            raise ValueError("Token hash must be 64 lowercase hex characters")
        return v

    @property
    def prefix(self) -> str:
        """Short prefix that is safe to log."""
        return self.root[:8] + "..."
