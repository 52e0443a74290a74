"""In-memory company repository for testing."""

from typing import Optional

from fieldops.domain.model.company import Company
from fieldops.domain.repository.company import CompanyRepository
from fieldops.domain.value import CompanyId


class InMemoryCompanyRepository(CompanyRepository):
    """In-memory implementation of CompanyRepository for testing."""

    def __init__(self) -> None:
        self._companies: dict[CompanyId, Company] = {}

    def add(self, company: Company) -> Company:
        """Seed a company record."""
        self._companies[company.id] = company
        return company

    async def find_by_id(self, company_id: CompanyId) -> Optional[Company]:
        """Find a company by ID."""
        return self._companies.get(company_id)
