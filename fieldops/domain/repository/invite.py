"""Invite repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from fieldops.domain.model.invite import Invite
from fieldops.domain.value import EmployeeId, IdentityId, InviteId, TokenHash


class InviteRepository(ABC):
    """Repository for Invite entity.

    Owns the two consistency points of the invite flow: per-employee
    serialized issuance and the compare-and-swap acceptance transition.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, invite_id: InviteId) -> Invite | None:
        """Find an invite by ID.

        Args:
            invite_id: The invite's unique identifier

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token_hash(self, token_hash: TokenHash) -> Invite | None:
        """Find an invite by the hash of its secret.

        Used when the invitee opens the accept link.

        Args:
            token_hash: SHA-256 hash of the raw secret

        Returns:
            The invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_employee(self, employee_id: EmployeeId) -> Invite | None:
        """Find the pending invite of an employee, if any.

        Args:
            employee_id: The employee the invite targets

        Returns:
            The pending invite if found, None otherwise
        """
        pass

    @abstractmethod
    async def issue(self, invite: Invite) -> Invite:
        """Insert a new pending invite, revoking the employee's other pending ones.

        The revoke and the insert happen in one transaction and are serialized
        per employee, so two pending invites are never visible together.

        Args:
            invite: The new pending invite

        Returns:
            The stored invite
        """
        pass

    @abstractmethod
    async def transition_to_accepted(
        self, invite_id: InviteId, identity_id: IdentityId, occurred_at: datetime
    ) -> Invite:
        """Atomically move a pending, unexpired invite to accepted.

        Args:
            invite_id: Invite to accept
            identity_id: Identity accepting it
            occurred_at: Acceptance time (also the expiry reference)

        Returns:
            The accepted invite

        Raises:
            InviteNotFoundError: If the invite does not exist
            InviteTransitionConflictError: If the invite is no longer pending
            InviteExpiredError: If the invite is pending but expired
        """
        pass

    @abstractmethod
    async def revoke_pending_for_employee(
        self,
        employee_id: EmployeeId,
        occurred_at: datetime,
        exclude_invite_id: InviteId | None = None,
    ) -> int:
        """Revoke every pending invite of an employee.

        Args:
            employee_id: The employee
            occurred_at: Revocation time
            exclude_invite_id: Optional invite to leave untouched

        Returns:
            Number of invites revoked
        """
        pass

    @abstractmethod
    async def revoke(self, invite_id: InviteId, occurred_at: datetime) -> bool:
        """Revoke a single invite if it is still pending.

        Returns:
            True if the invite was pending and is now revoked
        """
        pass

    @abstractmethod
    async def set_email(self, invite_id: InviteId, email: str) -> None:
        """Record the target email of an invite."""
        pass
