"""PostgreSQL implementation of Employee repository."""

from typing import Optional

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.domain.model import Employee
from fieldops.domain.repository import EmployeeRepository
from fieldops.domain.value import EmployeeId, IdentityId, InviteStatus
from fieldops.persistence.mappers import row_to_employee
from fieldops.persistence.tables import employees_table


class PostgresEmployeeRepository(EmployeeRepository):
    """PostgreSQL implementation of EmployeeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, employee_id: EmployeeId) -> Optional[Employee]:
        """Find an employee by ID."""
        stmt = select(employees_table).where(employees_table.c.id == employee_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_employee(dict(row)) if row else None

    async def link_identity(
        self, employee_id: EmployeeId, identity_id: IdentityId, email: Optional[str]
    ) -> Optional[Employee]:
        """Link an employee to an identity and mark the invitation accepted.

        Leaves an employee linked to a different identity untouched.
        """
        values = {
            "user_id": identity_id,
            "invitation_status": InviteStatus.ACCEPTED.value,
            "updated_at": func.now(),
        }
        if email:
            # Only fills a missing email
            values["email"] = func.coalesce(employees_table.c.email, email)

        stmt = (
            update(employees_table)
            .where(
                and_(
                    employees_table.c.id == employee_id,
                    or_(
                        employees_table.c.user_id.is_(None),
                        employees_table.c.user_id == identity_id,
                    ),
                )
            )
            .values(**values)
            .returning(employees_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_employee(dict(row)) if row else None

    async def unlink_identity(self, employee_id: EmployeeId) -> None:
        """Clear the identity link and reset the mirror to pending."""
        stmt = (
            update(employees_table)
            .where(employees_table.c.id == employee_id)
            .values(
                user_id=None,
                invitation_status=InviteStatus.PENDING.value,
                updated_at=func.now(),
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_invitation_status(
        self, employee_id: EmployeeId, status: InviteStatus
    ) -> None:
        """Update the invitation-status mirror."""
        stmt = (
            update(employees_table)
            .where(employees_table.c.id == employee_id)
            .values(invitation_status=status.value, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def set_email(self, employee_id: EmployeeId, email: str) -> None:
        """Record the employee's email."""
        stmt = (
            update(employees_table)
            .where(employees_table.c.id == employee_id)
            .values(email=email, updated_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
