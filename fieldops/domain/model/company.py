"""Company entity (read-only for the invite flow)."""

from typing import Optional

from fieldops.domain.model.common import DomainModel
from fieldops.domain.value import CompanyId


class Company(DomainModel):
    """Tenant company shown on the invite landing page."""

    id: CompanyId
    name: str
    logo_url: Optional[str] = None
