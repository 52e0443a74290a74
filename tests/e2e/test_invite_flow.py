"""End-to-end tests for the invite flow over HTTP."""

from uuid import uuid4

import pytest
import pytest_asyncio

from fieldops.domain.error import TransientError
from fieldops.domain.repository import (
    CompanyRepository,
    EmployeeRepository,
    InviteRepository,
    MembershipRepository,
)
from fieldops.domain.service import IdentityProvider
from fieldops.domain.value import MemberRole
from tests.conftest import (
    make_company,
    make_employee,
    make_manager_membership,
    secret_from_link,
)
from tests.harness import create_http_fixtures

# HTTP test fixtures
container, client = create_http_fixtures()


@pytest_asyncio.fixture
async def world(container):
    """A company with an owner session and one uninvited employee."""
    company = make_company()
    employee = make_employee(company)
    (await container.get(CompanyRepository)).add(company)
    (await container.get(EmployeeRepository)).add(employee)

    identity_provider = await container.get(IdentityProvider)
    owner = identity_provider.add_identity("owner@acme.example.com")
    await (await container.get(MembershipRepository)).upsert(
        make_manager_membership(company, owner)
    )
    return {
        "company": company,
        "employee": employee,
        "identity_provider": identity_provider,
        "admin_headers": {
            "Authorization": f"Bearer {identity_provider.open_session(owner)}",
            "X-Company-Id": str(company.id),
        },
    }


async def issue(client, world) -> str:
    response = await client.post(
        "/invites/issue",
        json={"employee_id": str(world["employee"].id)},
        headers=world["admin_headers"],
    )
    assert response.status_code == 200
    return secret_from_link(response.json()["link"])


def session_for(world, email: str = "maria@example.com") -> dict:
    identity_provider = world["identity_provider"]
    identity = identity_provider.add_identity(email)
    return {"Authorization": f"Bearer {identity_provider.open_session(identity)}"}


class TestInviteFlow:
    """Issue, validate and accept through the API."""

    @pytest.mark.asyncio
    async def test_existing_account_joins_company(self, client, container, world):
        # Arrange
        secret = await issue(client, world)
        headers = session_for(world)

        # Act
        preview = await client.get("/invites/validate", params={"token": secret})
        accepted = await client.post(
            "/invites/accept", json={"token": secret}, headers=headers
        )

        # Assert
        assert preview.status_code == 200
        body = preview.json()
        assert body["valid"] is True
        assert body["company"]["name"] == "Acme Field Services"
        assert body["employee"]["first_name"] == "Maria"
        assert body["employee"]["email"] == "maria@example.com"

        assert accepted.status_code == 200
        data = accepted.json()
        assert data["success"] is True
        assert data["role"] == MemberRole.MEMBER.value
        assert data["requires_login"] is False
        assert data["company_id"] == str(world["company"].id)

        memberships = await container.get(MembershipRepository)
        assert len(memberships.all()) == 2

    @pytest.mark.asyncio
    async def test_replayed_accept_succeeds(self, client, world):
        secret = await issue(client, world)
        headers = session_for(world)

        first = await client.post("/invites/accept", json={"token": secret}, headers=headers)
        second = await client.post("/invites/accept", json={"token": secret}, headers=headers)

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["employee_id"] == first.json()["employee_id"]

    @pytest.mark.asyncio
    async def test_session_cookie_is_accepted(self, client, world):
        secret = await issue(client, world)
        token = session_for(world)["Authorization"].removeprefix("Bearer ")
        client.cookies.set("sb-access-token", token)

        response = await client.post("/invites/accept", json={"token": secret})

        assert response.status_code == 200
        assert response.json()["requires_login"] is False

    @pytest.mark.asyncio
    async def test_new_account_must_log_in(self, client, world):
        secret = await issue(client, world)

        response = await client.post(
            "/invites/accept",
            json={
                "token": secret,
                "email": "maria@example.com",
                "password": "correct-horse-battery",
            },
        )

        assert response.status_code == 200
        assert response.json()["requires_login"] is True

    @pytest.mark.asyncio
    async def test_regenerated_link_replaces_old_one(self, client, world):
        old_secret = await issue(client, world)

        response = await client.post(
            "/invites/regenerate",
            json={"employee_id": str(world["employee"].id)},
            headers=world["admin_headers"],
        )
        new_secret = secret_from_link(response.json()["link"])

        old = await client.get("/invites/validate", params={"token": old_secret})
        new = await client.get("/invites/validate", params={"token": new_secret})
        assert old.status_code == 410
        assert old.json()["error"] == "invite_revoked"
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_revoke_and_resend(self, client, world):
        secret = await issue(client, world)
        body = {"employee_id": str(world["employee"].id)}

        resend = await client.post(
            "/invites/resend-email", json=body, headers=world["admin_headers"]
        )
        revoke = await client.post(
            "/invites/revoke", json=body, headers=world["admin_headers"]
        )
        validate = await client.get("/invites/validate", params={"token": secret})

        assert resend.status_code == 200
        assert resend.json()["sent"] is False
        assert revoke.json() == {"revoked": 1}
        assert validate.status_code == 410

    @pytest.mark.asyncio
    async def test_invitee_can_fill_in_missing_email(self, client, container, world):
        employees = await container.get(EmployeeRepository)
        employee = employees.add(make_employee(world["company"], email=None))
        response = await client.post(
            "/invites/issue",
            json={"employee_id": str(employee.id)},
            headers=world["admin_headers"],
        )
        secret = secret_from_link(response.json()["link"])

        result = await client.post(
            "/invites/email", json={"token": secret, "email": "new@example.com"}
        )

        assert result.status_code == 200
        assert (await employees.find_by_id(employee.id)).email == "new@example.com"


class TestInbox:
    """Inbox routes for identities that already have an account."""

    @pytest.mark.asyncio
    async def test_accept_from_inbox(self, client, world):
        # Arrange
        headers = session_for(world)
        await issue(client, world)

        # Act
        count = await client.get("/invites/notifications/count", headers=headers)
        inbox = await client.get("/invites/inbox", headers=headers)
        notification_id = inbox.json()["invites"][0]["notification_id"]
        accepted = await client.post(
            "/invites/accept-by-notification",
            json={"notification_id": notification_id},
            headers=headers,
        )
        after = await client.get("/invites/inbox", headers=headers)

        # Assert
        assert count.json() == {"unread": 1}
        assert inbox.json()["invites"][0]["company_name"] == "Acme Field Services"
        assert accepted.status_code == 200
        assert after.json() == {"invites": []}

    @pytest.mark.asyncio
    async def test_decline_from_inbox(self, client, world):
        headers = session_for(world)
        secret = await issue(client, world)
        inbox = await client.get("/invites/inbox", headers=headers)
        notification_id = inbox.json()["invites"][0]["notification_id"]

        declined = await client.post(
            "/invites/decline-by-notification",
            json={"notification_id": notification_id},
            headers=headers,
        )
        validate = await client.get("/invites/validate", params={"token": secret})

        assert declined.json() == {"success": True, "declined": True}
        assert validate.status_code == 410

    @pytest.mark.asyncio
    async def test_inbox_requires_session(self, client):
        response = await client.get("/invites/inbox")

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"


class TestErrorResponses:
    """Domain outcomes map to stable status codes and error codes."""

    @pytest.mark.asyncio
    async def test_issue_requires_session(self, client, world):
        response = await client.post(
            "/invites/issue",
            json={"employee_id": str(world["employee"].id)},
            headers={"X-Company-Id": str(world["company"].id)},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_issue_requires_manager(self, client, world):
        headers = session_for(world, "tech@acme.example.com")
        headers["X-Company-Id"] = str(world["company"].id)

        response = await client.post(
            "/invites/issue",
            json={"employee_id": str(world["employee"].id)},
            headers=headers,
        )

        assert response.status_code == 403
        assert response.json()["error"] == "not_authorized"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("company_header", [None, "not-a-uuid"])
    async def test_issue_requires_company(self, client, world, company_header):
        headers = {"Authorization": world["admin_headers"]["Authorization"]}
        if company_header:
            headers["X-Company-Id"] = company_header

        response = await client.post(
            "/invites/issue",
            json={"employee_id": str(world["employee"].id)},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "missing_company"

    @pytest.mark.asyncio
    async def test_issue_for_unknown_employee(self, client, world):
        response = await client.post(
            "/invites/issue",
            json={"employee_id": str(uuid4())},
            headers=world["admin_headers"],
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_validate_malformed_token(self, client):
        response = await client.get("/invites/validate", params={"token": "short"})

        assert response.status_code == 400
        assert response.json() == {
            "error": "invalid_invite_token",
            "detail": "Invalid invite token",
            "retryable": False,
        }

    @pytest.mark.asyncio
    async def test_validate_unknown_token(self, client):
        response = await client.get("/invites/validate", params={"token": "d" * 64})

        assert response.status_code == 404
        assert response.json()["error"] == "invite_not_found"

    @pytest.mark.asyncio
    async def test_wrong_account(self, client, world):
        secret = await issue(client, world)
        headers = session_for(world, "someone.else@example.com")

        response = await client.post(
            "/invites/accept", json={"token": secret}, headers=headers
        )

        assert response.status_code == 409
        assert response.json()["error"] == "wrong_account"

    @pytest.mark.asyncio
    async def test_weak_password(self, client, world):
        secret = await issue(client, world)

        response = await client.post(
            "/invites/accept",
            json={"token": secret, "email": "maria@example.com", "password": "123"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "weak_credential"

    @pytest.mark.asyncio
    async def test_existing_email_must_log_in(self, client, world):
        secret = await issue(client, world)
        world["identity_provider"].add_identity("maria@example.com")

        response = await client.post(
            "/invites/accept",
            json={
                "token": secret,
                "email": "maria@example.com",
                "password": "correct-horse-battery",
            },
        )

        assert response.status_code == 409
        assert response.json()["error"] == "identity_already_exists"

    @pytest.mark.asyncio
    async def test_transient_failure_is_retryable(
        self, client, container, world, monkeypatch
    ):
        secret = await issue(client, world)
        invites = await container.get(InviteRepository)

        async def unavailable(token_hash):
            raise TransientError("database unavailable")

        monkeypatch.setattr(invites, "find_by_token_hash", unavailable)

        response = await client.get("/invites/validate", params={"token": secret})

        assert response.status_code == 503
        assert response.json()["retryable"] is True
        assert "database" not in response.json()["detail"]
