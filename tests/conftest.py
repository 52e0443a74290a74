"""Test configuration and fixtures."""

import asyncio
import functools
import inspect
from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse
from uuid import uuid4

import logfire

from fieldops.domain.model import Company, Employee, Identity, Invite, Membership
from fieldops.domain.model.common import utcnow
from fieldops.domain.value import (
    CompanyId,
    EmployeeId,
    IdentityId,
    InviteId,
    MemberRole,
)
from fieldops.util.token import issue_secret

# Local-only logfire; nothing is sent during tests
logfire.configure(send_to_logfire=False, console=False)


def make_company(name: str = "Acme Field Services") -> Company:
    """Build a company with a fresh ID."""
    return Company(id=CompanyId(uuid4()), name=name, logo_url="https://cdn.example.com/acme.png")


def make_employee(
    company: Company,
    email: str | None = "maria@example.com",
    role: str | None = "technician",
    identity_id: IdentityId | None = None,
) -> Employee:
    """Build an employee of ``company`` with a fresh ID."""
    return Employee(
        id=EmployeeId(uuid4()),
        company_id=company.id,
        identity_id=identity_id,
        email=email,
        first_name="Maria",
        last_name="Silva",
        role=role,
    )


def make_manager_membership(
    company: Company, identity: Identity, role: MemberRole = MemberRole.OWNER
) -> Membership:
    return Membership(company_id=company.id, identity_id=identity.id, role=role)


def make_invite(
    employee: Employee,
    expires_at: datetime | None = None,
    email: str | None = None,
) -> tuple[Invite, str]:
    """Build a pending invite and return it with its raw secret.

    Useful for planting invites with a chosen expiry straight into a store.
    """
    secret, token_hash = issue_secret()
    now = utcnow()
    invite = Invite(
        id=InviteId(uuid4()),
        company_id=employee.company_id,
        employee_id=employee.id,
        role=MemberRole.MEMBER,
        email=email if email is not None else employee.email,
        token_hash=token_hash,
        created_at=now - timedelta(days=8),
        expires_at=expires_at or now + timedelta(days=7),
    )
    return invite, secret.root


def secret_from_link(link: str) -> str:
    """Extract the raw secret from an accept link."""
    return parse_qs(urlparse(link).query)["token"][0]


def yield_on_every_call(monkeypatch, *stores) -> None:
    """Make every public coroutine of ``stores`` yield to the event loop first.

    The in-memory stores never suspend, so without this ``asyncio.gather``
    runs concurrent flows one after the other instead of interleaving them.
    """
    for store in stores:
        for name in dir(type(store)):
            if name.startswith("_"):
                continue
            method = getattr(store, name)
            if inspect.iscoroutinefunction(method):
                monkeypatch.setattr(store, name, _yielding(method))


def _yielding(method):
    @functools.wraps(method)
    async def wrapper(*args, **kwargs):
        await asyncio.sleep(0)
        return await method(*args, **kwargs)

    return wrapper
