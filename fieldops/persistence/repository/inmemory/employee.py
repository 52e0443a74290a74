"""In-memory employee repository for testing."""

from typing import Optional

from fieldops.domain.model.employee import Employee
from fieldops.domain.repository.employee import EmployeeRepository
from fieldops.domain.value import EmployeeId, IdentityId, InviteStatus


class InMemoryEmployeeRepository(EmployeeRepository):
    """In-memory implementation of EmployeeRepository for testing."""

    def __init__(self) -> None:
        self._employees: dict[EmployeeId, Employee] = {}

    def add(self, employee: Employee) -> Employee:
        """Seed an employee record."""
        self._employees[employee.id] = employee
        return employee

    async def find_by_id(self, employee_id: EmployeeId) -> Optional[Employee]:
        """Find an employee by ID."""
        return self._employees.get(employee_id)

    async def link_identity(
        self, employee_id: EmployeeId, identity_id: IdentityId, email: Optional[str]
    ) -> Optional[Employee]:
        """Link an employee to an identity and mark the invitation accepted."""
        employee = self._employees.get(employee_id)
        if employee is None or employee.identity_id not in (None, identity_id):
            return None
        linked = employee.model_copy(
            update={
                "identity_id": identity_id,
                "invitation_status": InviteStatus.ACCEPTED,
                "email": employee.email or email,
            }
        )
        self._employees[employee_id] = linked
        return linked

    async def unlink_identity(self, employee_id: EmployeeId) -> None:
        """Clear the identity link and reset the mirror to pending."""
        self._update(
            employee_id, identity_id=None, invitation_status=InviteStatus.PENDING
        )

    async def set_invitation_status(
        self, employee_id: EmployeeId, status: InviteStatus
    ) -> None:
        """Update the invitation-status mirror."""
        self._update(employee_id, invitation_status=status)

    async def set_email(self, employee_id: EmployeeId, email: str) -> None:
        """Record the employee's email."""
        self._update(employee_id, email=email)

    def _update(self, employee_id: EmployeeId, **changes) -> None:
        employee = self._employees.get(employee_id)
        if employee is not None:
            self._employees[employee_id] = employee.model_copy(update=changes)
