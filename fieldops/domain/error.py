"""Domain layer errors."""

from fieldops.domain.value import InviteStatus


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when an identity lacks the company role an operation needs."""

    def __init__(self, action: str, company_id: str, identity_id: str):
        self.action = action
        super().__init__(
            f"Identity {identity_id} is not allowed to {action} in company {company_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TransientError(DomainError):
    """Store or identity provider failure; the caller may retry."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


# ============================================================================
# Invite flow outcomes
# ============================================================================


class InviteError(DomainError):
    """Base class for expected invite flow outcomes shown to the caller."""

    pass


class InvalidInviteTokenError(InviteError, ValidationError):
    """Raw secret is malformed; rejected before any lookup."""

    def __init__(self) -> None:
        super().__init__("Invalid invite token")


class InvalidEmailError(InviteError, ValidationError):
    """No usable email address for the invite."""

    def __init__(self, message: str = "Invalid email address") -> None:
        super().__init__(message)


class InviteNotFoundError(InviteError):
    """No invite for the token or notification."""

    def __init__(self) -> None:
        super().__init__("Invite not found")


class InviteExpiredError(InviteError):
    """Invite is still pending but past its expiry."""

    def __init__(self) -> None:
        super().__init__("Invite has expired")


class InviteRevokedError(InviteError):
    """Invite was explicitly revoked or superseded."""

    def __init__(self) -> None:
        super().__init__("Invite has expired or was revoked")


class InviteAlreadyAcceptedError(InviteError):
    """Invite was already used, or the employee is linked to another identity."""

    def __init__(self) -> None:
        super().__init__("Invite was already accepted")


class WrongAccountError(InviteError):
    """Signed-in identity does not match the invited email."""

    def __init__(self, invited_email: str) -> None:
        self.invited_email = invited_email
        super().__init__(
            "Signed in with a different account; sign out and sign in with the invited email"
        )


class WeakCredentialError(InviteError):
    """New account password does not meet the strength policy."""

    def __init__(self, min_length: int) -> None:
        self.min_length = min_length
        super().__init__(f"Password must be at least {min_length} characters")


class IdentityAlreadyExistsError(InviteError):
    """An account already exists for the email; the invitee should log in."""

    def __init__(self) -> None:
        super().__init__("An account already exists for this email; log in instead")


class UnauthenticatedError(InviteError):
    """A session is required but absent."""

    def __init__(self) -> None:
        super().__init__("Not authenticated")


class InviteTransitionConflictError(DomainError):
    """Compare-and-swap on the invite status found it no longer pending."""

    def __init__(self, status: InviteStatus):
        self.status = status
        super().__init__(f"Invite is {status.value}, expected pending")
