"""Interface layer errors and their HTTP mapping."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
import logfire
from sqlalchemy.exc import SQLAlchemyError

from fieldops.domain.error import (
    DomainError,
    IdentityAlreadyExistsError,
    InviteAlreadyAcceptedError,
    InviteExpiredError,
    InviteNotFoundError,
    InviteRevokedError,
    InviteTransitionConflictError,
    NotAuthorizedError,
    NotFoundError,
    TransientError,
    UnauthenticatedError,
    ValidationError,
    WeakCredentialError,
    WrongAccountError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class MissingCompanyError(InterfaceError):
    """Administrator request without an active company."""

    def __init__(self) -> None:
        super().__init__("Active company required (X-Company-Id header)")


# First match wins; subclasses before their bases
STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (InviteNotFoundError, status.HTTP_404_NOT_FOUND),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InviteExpiredError, status.HTTP_410_GONE),
    (InviteRevokedError, status.HTTP_410_GONE),
    (InviteAlreadyAcceptedError, status.HTTP_409_CONFLICT),
    (WrongAccountError, status.HTTP_409_CONFLICT),
    (IdentityAlreadyExistsError, status.HTTP_409_CONFLICT),
    (InviteTransitionConflictError, status.HTTP_409_CONFLICT),
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (WeakCredentialError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (MissingCompanyError, status.HTTP_400_BAD_REQUEST),
    (TransientError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (SQLAlchemyError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: Exception) -> int:
    """HTTP status for an error raised by a use case."""
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_code(error: Exception) -> str:
    """Stable machine-readable code, e.g. ``invite_expired``."""
    name = type(error).__name__.removesuffix("Error")
    return "".join(
        f"_{c.lower()}" if c.isupper() and i else c.lower() for i, c in enumerate(name)
    )


def register_error_handlers(app: FastAPI) -> None:
    """Translate domain and store errors into JSON responses."""

    async def handle(request: Request, exc: Exception) -> JSONResponse:
        code = status_for(exc)
        retryable = code == status.HTTP_503_SERVICE_UNAVAILABLE
        if retryable:
            logfire.error(
                "Request failed with transient error",
                path=request.url.path,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            detail = "Service temporarily unavailable, please retry"
        else:
            detail = str(exc)
        body = {"error": error_code(exc), "detail": detail, "retryable": retryable}
        return JSONResponse(status_code=code, content=body)

    app.add_exception_handler(DomainError, handle)
    app.add_exception_handler(InterfaceError, handle)
    app.add_exception_handler(SQLAlchemyError, handle)
