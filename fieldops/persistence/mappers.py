"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from fieldops.domain.model import Company, Employee, Invite, Membership, Notification
from fieldops.domain.value import (
    CompanyId,
    EmployeeId,
    IdentityId,
    InviteId,
    InviteStatus,
    MemberRole,
    MembershipStatus,
    NotificationId,
    NotificationType,
    TokenHash,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value else None


def row_to_company(row: Dict[str, Any]) -> Company:
    """Convert database row to Company domain model."""
    return Company(
        id=CompanyId(_uuid(row["id"])),
        name=row["name"],
        logo_url=row.get("logo_url"),
    )


def row_to_employee(row: Dict[str, Any]) -> Employee:
    """Convert database row to Employee domain model.

    Args:
        row: Database row as dict

    Returns:
        Employee domain model
    """
    user_id = _optional_uuid(row.get("user_id"))
    status = row.get("invitation_status")
    return Employee(
        id=EmployeeId(_uuid(row["id"])),
        company_id=CompanyId(_uuid(row["company_id"])),
        identity_id=IdentityId(user_id) if user_id else None,
        email=row.get("email"),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        role=row.get("role"),
        invitation_status=InviteStatus(status) if status else None,
    )


def row_to_invite(row: Dict[str, Any]) -> Invite:
    """Convert database row to Invite domain model.

    Args:
        row: Database row as dict

    Returns:
        Invite domain model
    """
    created_by = _optional_uuid(row.get("created_by"))
    accepted_by = _optional_uuid(row.get("accepted_by"))
    return Invite(
        id=InviteId(_uuid(row["id"])),
        company_id=CompanyId(_uuid(row["company_id"])),
        employee_id=EmployeeId(_uuid(row["employee_id"])),
        role=MemberRole.normalize(row.get("role")),
        email=row.get("email"),
        token_hash=TokenHash(row["token_hash"]),
        status=InviteStatus(row["status"]),
        created_by=IdentityId(created_by) if created_by else None,
        created_at=row["created_at"],
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        accepted_by=IdentityId(accepted_by) if accepted_by else None,
        revoked_at=row.get("revoked_at"),
    )


def invite_to_dict(invite: Invite) -> Dict[str, Any]:
    """Convert Invite domain model to database dict.

    Args:
        invite: Invite domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": invite.id,
        "company_id": invite.company_id,
        "employee_id": invite.employee_id,
        "role": invite.role.value,
        "email": invite.email,
        "token_hash": invite.token_hash.root,
        "status": invite.status.value,
        "created_by": invite.created_by,
        "created_at": invite.created_at,
        "expires_at": invite.expires_at,
        "accepted_at": invite.accepted_at,
        "accepted_by": invite.accepted_by,
        "revoked_at": invite.revoked_at,
    }


def row_to_membership(row: Dict[str, Any]) -> Membership:
    """Convert database row to Membership domain model."""
    return Membership(
        company_id=CompanyId(_uuid(row["company_id"])),
        identity_id=IdentityId(_uuid(row["user_id"])),
        role=MemberRole.normalize(row.get("role")),
        status=MembershipStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def membership_to_dict(membership: Membership) -> Dict[str, Any]:
    """Convert Membership domain model to database dict."""
    return {
        "company_id": membership.company_id,
        "user_id": membership.identity_id,
        "role": membership.role.value,
        "status": membership.status.value,
        "created_at": membership.created_at,
        "updated_at": membership.updated_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model."""
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=IdentityId(_uuid(row["user_id"])),
        type=NotificationType(row["type"]),
        invite_id=InviteId(_uuid(row["invite_id"])),
        company_id=CompanyId(_uuid(row["company_id"])),
        read_at=row.get("read_at"),
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    return {
        "id": notification.id,
        "user_id": notification.recipient_id,
        "type": notification.type.value,
        "invite_id": notification.invite_id,
        "company_id": notification.company_id,
        "read_at": notification.read_at,
        "created_at": notification.created_at,
    }
