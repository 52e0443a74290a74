"""GoTrue identity provider adapter.

Talks to the admin REST API of a GoTrue-compatible auth server (the auth
component of Supabase) with the service-role key. Session tokens are JWTs
signed by the same server and are verified locally.
"""

from uuid import UUID, uuid4

import httpx
import logfire

from fieldops.adapter.error import ProviderError
from fieldops.config import AuthSettings, IdentityProviderSettings
from fieldops.domain.error import (
    IdentityAlreadyExistsError,
    TransientError,
    WeakCredentialError,
)
from fieldops.domain.model import Identity
from fieldops.domain.service.identity_provider import IdentityProvider
from fieldops.domain.value import Email, IdentityId
from fieldops.util.jwt import JWTError, verify_token


class GoTrueError(ProviderError):
    """GoTrue admin API error."""

    pass


class GoTrueIdentityProvider(IdentityProvider):
    """Base class for GoTrue identity providers.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoTrueIdentityProvider(GoTrueIdentityProvider):
    """Identity provider backed by the GoTrue admin API."""

    def __init__(
        self,
        settings: IdentityProviderSettings,
        auth_settings: AuthSettings,
        min_password_length: int = 8,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize GoTrue client.

        Args:
            settings: Admin API URL, service-role key and timeout
            auth_settings: Session token verification settings
            min_password_length: Reported when the server rejects a password
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = settings.url.rstrip("/")
        self.service_role_key = settings.service_role_key
        self.timeout = settings.timeout_seconds
        self.auth_settings = auth_settings
        self.min_password_length = min_password_length
        self.transport = transport

    async def current_session(self, access_token: str | None) -> Identity | None:
        """Resolve the identity behind a session access token."""
        if not access_token:
            return None
        try:
            claims = verify_token(access_token, self.auth_settings)
            return Identity(id=IdentityId(UUID(claims.sub)), email=Email(claims.email))
        except (JWTError, ValueError) as e:
            logfire.info("Session token rejected", error=str(e))
            return None

    async def create_identity(self, email: Email, password: str) -> Identity:
        """Create a confirmed identity with a password credential.

        Raises:
            IdentityAlreadyExistsError: If the email is already registered
            WeakCredentialError: If the server rejects the password
            TransientError: If the server cannot be reached or fails
        """
        response = await self._request(
            "POST",
            "/admin/users",
            json={"email": email.root, "password": password, "email_confirm": True},
        )
        if response.status_code in (200, 201):
            return self._to_identity(self._json(response, "create user"))

        detail = self._error_detail(response)
        if response.status_code in (409, 422) and (
            "already" in detail or "email_exists" in detail
        ):
            raise IdentityAlreadyExistsError()
        if response.status_code == 422 and (
            "weak_password" in detail or "password" in detail
        ):
            raise WeakCredentialError(self.min_password_length)

        logfire.error(
            "GoTrue create user failed",
            status_code=response.status_code,
            error=detail,
        )
        raise TransientError(
            "Identity provider rejected account creation",
            cause=GoTrueError(detail, status_code=response.status_code),
        )

    async def find_identity_by_email(self, email: Email) -> Identity | None:
        """Find an existing identity by email."""
        response = await self._request(
            "GET", "/admin/users", params={"filter": email.root, "per_page": 50}
        )
        if response.status_code != 200:
            self._raise_transient("list users", response)

        body = self._json(response, "list users")
        users = body.get("users", []) if isinstance(body, dict) else None
        if not isinstance(users, list):
            self._raise_malformed("list users", "missing users list")
        for user in users:
            if isinstance(user, dict) and email.matches(user.get("email")):
                return self._to_identity(user)
        return None

    async def delete_identity(self, identity_id: IdentityId) -> None:
        """Delete an identity; a missing identity counts as deleted."""
        response = await self._request("DELETE", f"/admin/users/{identity_id}")
        if response.status_code not in (200, 204, 404):
            self._raise_transient("delete user", response)
        logfire.info("Identity deleted", identity_id=str(identity_id))

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {self.service_role_key}",
            "apikey": self.service_role_key,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                return await client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logfire.error("GoTrue HTTP error", method=method, path=path, error=str(e))
            raise TransientError(f"Identity provider unreachable: {e}", cause=e) from e

    def _raise_transient(self, action: str, response: httpx.Response) -> None:
        detail = self._error_detail(response)
        logfire.error(
            f"GoTrue {action} failed", status_code=response.status_code, error=detail
        )
        raise TransientError(
            f"Identity provider failed to {action}",
            cause=GoTrueError(detail, status_code=response.status_code),
        )

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text.lower()
        if not isinstance(body, dict):
            return str(body).lower()
        parts = [
            str(body.get(key, ""))
            for key in ("error_code", "code", "msg", "message", "error_description")
        ]
        return " ".join(p for p in parts if p).lower()

    def _json(self, response: httpx.Response, action: str):
        try:
            return response.json()
        except ValueError as e:
            self._raise_malformed(action, str(e), cause=e)

    def _to_identity(self, user) -> Identity:
        try:
            return Identity(id=IdentityId(UUID(user["id"])), email=Email(user["email"]))
        except (KeyError, TypeError, ValueError) as e:
            # pydantic's ValidationError is a ValueError
            self._raise_malformed("read user", repr(e), cause=e)

    @staticmethod
    def _raise_malformed(
        action: str, detail: str, cause: Exception | None = None
    ) -> None:
        logfire.error(f"GoTrue {action} returned a malformed body", error=detail)
        raise TransientError(
            f"Identity provider returned a malformed response to {action}",
            cause=cause or GoTrueError(detail),
        )


class MockGoTrueIdentityProvider(GoTrueIdentityProvider):
    """In-memory identity provider for development and testing.

    Session tokens are opaque strings handed out by ``open_session``.
    """

    def __init__(self) -> None:
        # Don't call super().__init__() - mock doesn't need real config
        self._identities: dict[IdentityId, Identity] = {}
        self._passwords: dict[IdentityId, str] = {}
        self._sessions: dict[str, IdentityId] = {}
        self.fail_next_delete = False

    def add_identity(self, email: str) -> Identity:
        """Seed an existing identity."""
        identity = Identity(id=IdentityId(uuid4()), email=Email(email))
        self._identities[identity.id] = identity
        return identity

    def open_session(self, identity: Identity) -> str:
        """Issue a session token for an identity."""
        token = f"session-{uuid4().hex}"
        self._sessions[token] = identity.id
        return token

    def get(self, identity_id: IdentityId) -> Identity | None:
        return self._identities.get(identity_id)

    def all(self) -> list[Identity]:
        return list(self._identities.values())

    async def current_session(self, access_token: str | None) -> Identity | None:
        if not access_token:
            return None
        identity_id = self._sessions.get(access_token)
        return self._identities.get(identity_id) if identity_id else None

    async def create_identity(self, email: Email, password: str) -> Identity:
        if any(email.matches(i.email) for i in self._identities.values()):
            raise IdentityAlreadyExistsError()
        identity = Identity(id=IdentityId(uuid4()), email=email)
        self._identities[identity.id] = identity
        self._passwords[identity.id] = password
        return identity

    async def find_identity_by_email(self, email: Email) -> Identity | None:
        for identity in self._identities.values():
            if email.matches(identity.email):
                return identity
        return None

    async def delete_identity(self, identity_id: IdentityId) -> None:
        if self.fail_next_delete:
            self.fail_next_delete = False
            raise TransientError("Identity provider unreachable")
        self._identities.pop(identity_id, None)
        self._passwords.pop(identity_id, None)
        self._sessions = {
            token: owner
            for token, owner in self._sessions.items()
            if owner != identity_id
        }
