"""In-memory invite repository for testing."""

import asyncio
from collections import defaultdict
from datetime import datetime
from typing import Optional

from fieldops.domain.error import (
    InviteExpiredError,
    InviteNotFoundError,
    InviteTransitionConflictError,
)
from fieldops.domain.model.invite import Invite
from fieldops.domain.repository.invite import InviteRepository
from fieldops.domain.value import (
    EmployeeId,
    IdentityId,
    InviteId,
    InviteStatus,
    TokenHash,
)


class InMemoryInviteRepository(InviteRepository):
    """In-memory implementation of InviteRepository for testing."""

    def __init__(self) -> None:
        self._invites: dict[InviteId, Invite] = {}
        self._employee_locks: defaultdict[EmployeeId, asyncio.Lock] = defaultdict(
            asyncio.Lock
        )

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        return self._invites.get(invite_id)

    async def find_by_token_hash(self, token_hash: TokenHash) -> Optional[Invite]:
        """Find an invite by the hash of its secret."""
        for invite in self._invites.values():
            if invite.token_hash == token_hash:
                return invite
        return None

    async def find_pending_by_employee(
        self, employee_id: EmployeeId
    ) -> Optional[Invite]:
        """Find the pending invite of an employee."""
        pending = [
            invite
            for invite in self._invites.values()
            if invite.employee_id == employee_id
            and invite.status == InviteStatus.PENDING
        ]
        pending.sort(key=lambda inv: inv.created_at, reverse=True)
        return pending[0] if pending else None

    async def issue(self, invite: Invite) -> Invite:
        """Revoke pending invites of the employee and store the new one."""
        async with self._employee_locks[invite.employee_id]:
            await self.revoke_pending_for_employee(
                invite.employee_id, invite.created_at
            )
            self._invites[invite.id] = invite
            return invite

    async def transition_to_accepted(
        self, invite_id: InviteId, identity_id: IdentityId, occurred_at: datetime
    ) -> Invite:
        """Compare-and-swap the invite from pending to accepted."""
        current = self._invites.get(invite_id)
        if current is None:
            raise InviteNotFoundError()
        if current.status != InviteStatus.PENDING:
            raise InviteTransitionConflictError(current.status)
        if occurred_at > current.expires_at:
            raise InviteExpiredError()

        accepted = current.model_copy(
            update={
                "status": InviteStatus.ACCEPTED,
                "accepted_at": occurred_at,
                "accepted_by": identity_id,
            }
        )
        self._invites[invite_id] = accepted
        return accepted

    async def revoke_pending_for_employee(
        self,
        employee_id: EmployeeId,
        occurred_at: datetime,
        exclude_invite_id: Optional[InviteId] = None,
    ) -> int:
        """Revoke every pending invite of an employee."""
        count = 0
        for invite_id, invite in list(self._invites.items()):
            if (
                invite.employee_id == employee_id
                and invite.status == InviteStatus.PENDING
                and invite_id != exclude_invite_id
            ):
                self._invites[invite_id] = self._revoked(invite, occurred_at)
                count += 1
        return count

    async def revoke(self, invite_id: InviteId, occurred_at: datetime) -> bool:
        """Revoke a single invite if it is still pending."""
        invite = self._invites.get(invite_id)
        if invite is None or invite.status != InviteStatus.PENDING:
            return False
        self._invites[invite_id] = self._revoked(invite, occurred_at)
        return True

    async def set_email(self, invite_id: InviteId, email: str) -> None:
        """Record the target email of an invite."""
        invite = self._invites.get(invite_id)
        if invite is not None:
            self._invites[invite_id] = invite.model_copy(update={"email": email})

    @staticmethod
    def _revoked(invite: Invite, occurred_at: datetime) -> Invite:
        return invite.model_copy(
            update={"status": InviteStatus.REVOKED, "revoked_at": occurred_at}
        )
