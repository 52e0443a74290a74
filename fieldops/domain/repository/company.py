"""Company repository interface."""

from abc import ABC, abstractmethod

from fieldops.domain.model.company import Company
from fieldops.domain.value import CompanyId


class CompanyRepository(ABC):
    """Read-only access to company records."""

    @abstractmethod
    async def find_by_id(self, company_id: CompanyId) -> Company | None:
        """Find a company by ID.

        Args:
            company_id: Company ID

        Returns:
            The company if found, None otherwise
        """
        pass
