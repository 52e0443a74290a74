"""Employee repository interface."""

from abc import ABC, abstractmethod

from fieldops.domain.model.employee import Employee
from fieldops.domain.value import EmployeeId, IdentityId, InviteStatus


class EmployeeRepository(ABC):
    """Repository for the invite-related fields of Employee records.

    Employee CRUD lives elsewhere; this contract only covers the identity
    link, the email and the invitation-status mirror.
    """

    @abstractmethod
    async def find_by_id(self, employee_id: EmployeeId) -> Employee | None:
        """Find an employee by ID.

        Args:
            employee_id: Employee ID

        Returns:
            The employee if found, None otherwise
        """
        pass

    @abstractmethod
    async def link_identity(
        self, employee_id: EmployeeId, identity_id: IdentityId, email: str | None
    ) -> Employee | None:
        """Link an employee to an identity and mark the invitation accepted.

        Args:
            employee_id: Employee to link
            identity_id: Identity to link to
            email: Email to record when the employee has none yet

        Returns:
            The updated employee, or None if the employee no longer exists or
            is already linked to a different identity
        """
        pass

    @abstractmethod
    async def unlink_identity(self, employee_id: EmployeeId) -> None:
        """Clear the identity link and reset the mirror to pending.

        Only used to compensate a failed new-account acceptance.
        """
        pass

    @abstractmethod
    async def set_invitation_status(
        self, employee_id: EmployeeId, status: InviteStatus
    ) -> None:
        """Update the invitation-status mirror."""
        pass

    @abstractmethod
    async def set_email(self, employee_id: EmployeeId, email: str) -> None:
        """Record the employee's email."""
        pass
