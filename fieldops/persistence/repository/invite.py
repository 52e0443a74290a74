"""PostgreSQL implementation of Invite repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.domain.error import (
    InviteExpiredError,
    InviteNotFoundError,
    InviteTransitionConflictError,
)
from fieldops.domain.model import Invite
from fieldops.domain.repository import InviteRepository
from fieldops.domain.value import (
    EmployeeId,
    IdentityId,
    InviteId,
    InviteStatus,
    TokenHash,
)
from fieldops.persistence.mappers import invite_to_dict, row_to_invite
from fieldops.persistence.tables import employees_table, invites_table


class PostgresInviteRepository(InviteRepository):
    """PostgreSQL implementation of InviteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invite_id: InviteId) -> Optional[Invite]:
        """Find an invite by ID."""
        stmt = select(invites_table).where(invites_table.c.id == invite_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_by_token_hash(self, token_hash: TokenHash) -> Optional[Invite]:
        """Find an invite by the hash of its secret."""
        stmt = select(invites_table).where(
            invites_table.c.token_hash == token_hash.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def find_pending_by_employee(
        self, employee_id: EmployeeId
    ) -> Optional[Invite]:
        """Find the pending invite of an employee."""
        stmt = (
            select(invites_table)
            .where(
                and_(
                    invites_table.c.employee_id == employee_id,
                    invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .order_by(invites_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invite(dict(row)) if row else None

    async def issue(self, invite: Invite) -> Invite:
        """Revoke pending invites of the employee and insert the new one.

        The employee row is locked first so concurrent issues for the same
        employee run one after the other.
        """
        lock = (
            select(employees_table.c.id)
            .where(employees_table.c.id == invite.employee_id)
            .with_for_update()
        )
        await self.session.execute(lock)

        await self.revoke_pending_for_employee(invite.employee_id, invite.created_at)

        stmt = insert(invites_table).values(**invite_to_dict(invite))
        await self.session.execute(stmt)
        await self.session.flush()
        return invite

    async def transition_to_accepted(
        self, invite_id: InviteId, identity_id: IdentityId, occurred_at: datetime
    ) -> Invite:
        """Compare-and-swap the invite from pending to accepted.

        Only one concurrent caller can match the ``status = 'pending'``
        predicate; the others update zero rows and are told why.
        """
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.status == InviteStatus.PENDING.value,
                    invites_table.c.expires_at >= occurred_at,
                )
            )
            .values(
                status=InviteStatus.ACCEPTED.value,
                accepted_at=occurred_at,
                accepted_by=identity_id,
            )
            .returning(invites_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row:
            await self.session.flush()
            return row_to_invite(dict(row))

        current = await self.find_by_id(invite_id)
        if current is None:
            raise InviteNotFoundError()
        if current.status != InviteStatus.PENDING:
            raise InviteTransitionConflictError(current.status)
        raise InviteExpiredError()

    async def revoke_pending_for_employee(
        self,
        employee_id: EmployeeId,
        occurred_at: datetime,
        exclude_invite_id: Optional[InviteId] = None,
    ) -> int:
        """Revoke every pending invite of an employee."""
        conditions = [
            invites_table.c.employee_id == employee_id,
            invites_table.c.status == InviteStatus.PENDING.value,
        ]
        if exclude_invite_id is not None:
            conditions.append(invites_table.c.id != exclude_invite_id)

        stmt = (
            update(invites_table)
            .where(and_(*conditions))
            .values(status=InviteStatus.REVOKED.value, revoked_at=occurred_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def revoke(self, invite_id: InviteId, occurred_at: datetime) -> bool:
        """Revoke a single invite if it is still pending."""
        stmt = (
            update(invites_table)
            .where(
                and_(
                    invites_table.c.id == invite_id,
                    invites_table.c.status == InviteStatus.PENDING.value,
                )
            )
            .values(status=InviteStatus.REVOKED.value, revoked_at=occurred_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return (result.rowcount or 0) > 0

    async def set_email(self, invite_id: InviteId, email: str) -> None:
        """Record the target email of an invite."""
        stmt = (
            update(invites_table)
            .where(invites_table.c.id == invite_id)
            .values(email=email)
        )
        await self.session.execute(stmt)
        await self.session.flush()
