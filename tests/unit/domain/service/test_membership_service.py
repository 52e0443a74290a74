"""Tests for MembershipService."""

from uuid import uuid4

import pytest

from sqlalchemy.exc import OperationalError

from fieldops.domain.error import NotAuthorizedError, TransientError
from fieldops.domain.model import Membership
from fieldops.domain.repository import MembershipRepository
from fieldops.domain.service import MembershipService
from fieldops.domain.value import CompanyId, IdentityId, MemberRole, MembershipStatus
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRequireManager:
    """Tests for MembershipService.require_manager."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", [MemberRole.OWNER, MemberRole.ADMIN])
    async def test_owner_and_admin_pass(self, unit_env, role):
        # Arrange
        service = await unit_env.get(MembershipService)
        memberships = await unit_env.get(MembershipRepository)
        company_id, identity_id = CompanyId(uuid4()), IdentityId(uuid4())
        await memberships.upsert(
            Membership(company_id=company_id, identity_id=identity_id, role=role)
        )

        # Act
        membership = await service.require_manager(company_id, identity_id)

        # Assert
        assert membership.role == role

    @pytest.mark.asyncio
    async def test_member_is_denied(self, unit_env):
        service = await unit_env.get(MembershipService)
        memberships = await unit_env.get(MembershipRepository)
        company_id, identity_id = CompanyId(uuid4()), IdentityId(uuid4())
        await memberships.upsert(
            Membership(company_id=company_id, identity_id=identity_id)
        )

        with pytest.raises(NotAuthorizedError) as exc_info:
            await service.require_manager(company_id, identity_id)
        assert exc_info.value.action == "manage invites"

    @pytest.mark.asyncio
    async def test_inactive_owner_is_denied(self, unit_env):
        service = await unit_env.get(MembershipService)
        memberships = await unit_env.get(MembershipRepository)
        company_id, identity_id = CompanyId(uuid4()), IdentityId(uuid4())
        await memberships.upsert(
            Membership(
                company_id=company_id,
                identity_id=identity_id,
                role=MemberRole.OWNER,
                status=MembershipStatus.INACTIVE,
            )
        )

        with pytest.raises(NotAuthorizedError):
            await service.require_manager(company_id, identity_id)

    @pytest.mark.asyncio
    async def test_owner_of_other_company_is_denied(self, unit_env):
        service = await unit_env.get(MembershipService)
        memberships = await unit_env.get(MembershipRepository)
        identity_id = IdentityId(uuid4())
        await memberships.upsert(
            Membership(
                company_id=CompanyId(uuid4()),
                identity_id=identity_id,
                role=MemberRole.OWNER,
            )
        )

        with pytest.raises(NotAuthorizedError):
            await service.require_manager(CompanyId(uuid4()), identity_id)

    @pytest.mark.asyncio
    async def test_store_failure_is_transient(self, unit_env, monkeypatch):
        memberships = await unit_env.get(MembershipRepository)

        async def unavailable(company_id, identity_id):
            raise OperationalError("SELECT", {}, ConnectionError("connection reset"))

        monkeypatch.setattr(memberships, "find", unavailable)
        service = MembershipService(memberships, operation_timeout=1.0)

        with pytest.raises(TransientError):
            await service.require_manager(CompanyId(uuid4()), IdentityId(uuid4()))
