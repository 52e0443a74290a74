"""PostgreSQL implementation of Company repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.domain.model import Company
from fieldops.domain.repository import CompanyRepository
from fieldops.domain.value import CompanyId
from fieldops.persistence.mappers import row_to_company
from fieldops.persistence.tables import companies_table


class PostgresCompanyRepository(CompanyRepository):
    """PostgreSQL implementation of CompanyRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, company_id: CompanyId) -> Optional[Company]:
        """Find a company by ID."""
        stmt = select(companies_table).where(companies_table.c.id == company_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_company(dict(row)) if row else None
