"""PostgreSQL implementation of Membership repository."""

from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.domain.model import Membership
from fieldops.domain.repository import MembershipRepository
from fieldops.domain.value import CompanyId, IdentityId
from fieldops.persistence.mappers import membership_to_dict, row_to_membership
from fieldops.persistence.tables import company_memberships_table


class PostgresMembershipRepository(MembershipRepository):
    """PostgreSQL implementation of MembershipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(
        self, company_id: CompanyId, identity_id: IdentityId
    ) -> Optional[Membership]:
        """Find the membership of an identity in a company."""
        stmt = select(company_memberships_table).where(
            and_(
                company_memberships_table.c.company_id == company_id,
                company_memberships_table.c.user_id == identity_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_membership(dict(row)) if row else None

    async def upsert(self, membership: Membership) -> Membership:
        """Insert or update a membership by (company_id, user_id).

        ``created_at`` of an existing row is kept.
        """
        values = membership_to_dict(membership)
        stmt = insert(company_memberships_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                company_memberships_table.c.company_id,
                company_memberships_table.c.user_id,
            ],
            set_={
                "role": stmt.excluded.role,
                "status": stmt.excluded.status,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(company_memberships_table)
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_membership(dict(row))
