"""Identity provider interface."""

from abc import ABC, abstractmethod

from fieldops.domain.model.identity import Identity
from fieldops.domain.value import Email, IdentityId


class IdentityProvider(ABC):
    """Narrow interface to the external authentication provider.

    Implementations raise ``TransientError`` when the provider cannot be
    reached, ``IdentityAlreadyExistsError`` / ``WeakCredentialError`` when it
    rejects a new account.
    """

    @abstractmethod
    async def current_session(self, access_token: str | None) -> Identity | None:
        """Resolve the identity behind a session access token.

        Args:
            access_token: Token from the session cookie or bearer header

        Returns:
            The identity if the token is present and valid, None otherwise
        """
        pass

    @abstractmethod
    async def create_identity(self, email: Email, password: str) -> Identity:
        """Create a new identity with a password credential.

        Args:
            email: Email of the new account
            password: Password credential

        Returns:
            The created identity
        """
        pass

    @abstractmethod
    async def find_identity_by_email(self, email: Email) -> Identity | None:
        """Find an existing identity by email.

        Returns:
            The identity if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete_identity(self, identity_id: IdentityId) -> None:
        """Delete an identity.

        Only used to compensate a partially failed account creation.
        """
        pass
