"""Invite routes.

Administrator routes act on the company named by the ``X-Company-Id``
header. Sessions come from the identity provider's cookie or a bearer
token. Domain errors are turned into responses by the app's error handlers.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Header, Query, Request
from pydantic import BaseModel

from fieldops.application.usecase.invite import (
    AcceptInviteByNotificationRequest,
    AcceptInviteByNotificationUseCase,
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
    CountInviteNotificationsRequest,
    CountInviteNotificationsResponse,
    CountInviteNotificationsUseCase,
    DeclineInviteByNotificationRequest,
    DeclineInviteByNotificationResponse,
    DeclineInviteByNotificationUseCase,
    GetInviteInboxRequest,
    GetInviteInboxResponse,
    GetInviteInboxUseCase,
    IssueInviteRequest,
    IssueInviteResponse,
    IssueInviteUseCase,
    RegenerateInviteRequest,
    RegenerateInviteUseCase,
    ResendInviteEmailRequest,
    ResendInviteEmailResponse,
    ResendInviteEmailUseCase,
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
    SetInviteEmailRequest,
    SetInviteEmailResponse,
    SetInviteEmailUseCase,
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from fieldops.config import Settings
from fieldops.domain.error import UnauthenticatedError
from fieldops.domain.model import Identity
from fieldops.domain.service import IdentityProvider
from fieldops.domain.value import CompanyId, EmployeeId, NotificationId
from fieldops.interface.error import MissingCompanyError

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)


class EmployeeAPIRequest(BaseModel):
    """API request naming the employee an administrator acts on."""

    employee_id: EmployeeId
    role: str | None = None


class AcceptInviteAPIRequest(BaseModel):
    """API request for accepting an invite from its link."""

    token: str
    email: str | None = None
    password: str | None = None


class SetInviteEmailAPIRequest(BaseModel):
    """API request for recording the invitee's email."""

    token: str
    email: str


class NotificationAPIRequest(BaseModel):
    """API request naming an inbox notification."""

    notification_id: NotificationId


async def current_identity(
    request: Request, settings: Settings, identity_provider: IdentityProvider
) -> Identity | None:
    """Resolve the session from the auth cookie or a bearer header."""
    token = request.cookies.get(settings.auth.session_cookie)
    if not token:
        authorization = request.headers.get("authorization", "")
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials.strip()
    return await identity_provider.current_session(token)


async def require_identity(
    request: Request, settings: Settings, identity_provider: IdentityProvider
) -> Identity:
    identity = await current_identity(request, settings, identity_provider)
    if identity is None:
        raise UnauthenticatedError()
    return identity


def require_company(company_id: str | None) -> CompanyId:
    if not company_id:
        raise MissingCompanyError()
    try:
        return CompanyId(UUID(company_id))
    except ValueError as e:
        raise MissingCompanyError() from e


# ============================================================================
# Administrator routes
# ============================================================================


@router.post("/issue", response_model=IssueInviteResponse)
async def issue_invite(
    body: EmployeeAPIRequest,
    request: Request,
    use_case: FromDishka[IssueInviteUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
    x_company_id: str | None = Header(default=None),
) -> IssueInviteResponse:
    """Issue an invite link for an employee.

    Any pending invite of the employee stops working.
    """
    identity = await require_identity(request, settings, identity_provider)
    return await use_case.execute(
        IssueInviteRequest(
            company_id=require_company(x_company_id),
            employee_id=body.employee_id,
            issuer_id=identity.id,
            role=body.role,
        )
    )


@router.post("/regenerate", response_model=IssueInviteResponse)
async def regenerate_invite(
    body: EmployeeAPIRequest,
    request: Request,
    use_case: FromDishka[RegenerateInviteUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
    x_company_id: str | None = Header(default=None),
) -> IssueInviteResponse:
    """Replace an employee's invite link, keeping its role."""
    identity = await require_identity(request, settings, identity_provider)
    return await use_case.execute(
        RegenerateInviteRequest(
            company_id=require_company(x_company_id),
            employee_id=body.employee_id,
            issuer_id=identity.id,
        )
    )


@router.post("/revoke", response_model=RevokeInviteResponse)
async def revoke_invite(
    body: EmployeeAPIRequest,
    request: Request,
    use_case: FromDishka[RevokeInviteUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
    x_company_id: str | None = Header(default=None),
) -> RevokeInviteResponse:
    """Revoke every pending invite of an employee."""
    identity = await require_identity(request, settings, identity_provider)
    return await use_case.execute(
        RevokeInviteRequest(
            company_id=require_company(x_company_id),
            employee_id=body.employee_id,
            issuer_id=identity.id,
        )
    )


@router.post("/resend-email", response_model=ResendInviteEmailResponse)
async def resend_invite_email(
    body: EmployeeAPIRequest,
    request: Request,
    use_case: FromDishka[ResendInviteEmailUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
    x_company_id: str | None = Header(default=None),
) -> ResendInviteEmailResponse:
    """Resend the invite email of an employee."""
    identity = await require_identity(request, settings, identity_provider)
    return await use_case.execute(
        ResendInviteEmailRequest(
            company_id=require_company(x_company_id),
            employee_id=body.employee_id,
            issuer_id=identity.id,
        )
    )


# ============================================================================
# Invitee routes
# ============================================================================


@router.get("/validate", response_model=ValidateInviteResponse)
async def validate_invite(
    use_case: FromDishka[ValidateInviteUseCase],
    token: str | None = Query(default=None),
) -> ValidateInviteResponse:
    """Describe the invite behind a link without changing anything."""
    return await use_case.execute(ValidateInviteRequest(token=token))


@router.post("/accept", response_model=AcceptInviteResponse)
async def accept_invite(
    body: AcceptInviteAPIRequest,
    request: Request,
    use_case: FromDishka[AcceptInviteUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
) -> AcceptInviteResponse:
    """Accept an invite.

    Signed-in callers are linked with their own account; everyone else gets
    a new account from the supplied email and password and must log in.
    """
    caller = await current_identity(request, settings, identity_provider)
    return await use_case.execute(
        AcceptInviteRequest(
            token=body.token,
            email=body.email,
            password=body.password,
            caller=caller,
        )
    )


@router.post("/email", response_model=SetInviteEmailResponse)
async def set_invite_email(
    body: SetInviteEmailAPIRequest,
    use_case: FromDishka[SetInviteEmailUseCase],
) -> SetInviteEmailResponse:
    """Record the invitee's email when the employee has none."""
    return await use_case.execute(
        SetInviteEmailRequest(token=body.token, email=body.email)
    )


# ============================================================================
# Notification routes
# ============================================================================


@router.post("/accept-by-notification", response_model=AcceptInviteResponse)
async def accept_invite_by_notification(
    body: NotificationAPIRequest,
    request: Request,
    use_case: FromDishka[AcceptInviteByNotificationUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
) -> AcceptInviteResponse:
    """Accept the invite behind one of the caller's notifications."""
    caller = await current_identity(request, settings, identity_provider)
    return await use_case.execute(
        AcceptInviteByNotificationRequest(
            notification_id=body.notification_id, caller=caller
        )
    )


@router.post(
    "/decline-by-notification", response_model=DeclineInviteByNotificationResponse
)
async def decline_invite_by_notification(
    body: NotificationAPIRequest,
    request: Request,
    use_case: FromDishka[DeclineInviteByNotificationUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
) -> DeclineInviteByNotificationResponse:
    """Decline the invite behind one of the caller's notifications."""
    caller = await current_identity(request, settings, identity_provider)
    return await use_case.execute(
        DeclineInviteByNotificationRequest(
            notification_id=body.notification_id, caller=caller
        )
    )


@router.get("/inbox", response_model=GetInviteInboxResponse)
async def get_invite_inbox(
    request: Request,
    use_case: FromDishka[GetInviteInboxUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
) -> GetInviteInboxResponse:
    """List the pending invites in the caller's inbox."""
    caller = await current_identity(request, settings, identity_provider)
    return await use_case.execute(GetInviteInboxRequest(caller=caller))


@router.get("/notifications/count", response_model=CountInviteNotificationsResponse)
async def count_invite_notifications(
    request: Request,
    use_case: FromDishka[CountInviteNotificationsUseCase],
    settings: FromDishka[Settings],
    identity_provider: FromDishka[IdentityProvider],
) -> CountInviteNotificationsResponse:
    """Count the caller's unread invite notifications."""
    caller = await current_identity(request, settings, identity_provider)
    return await use_case.execute(CountInviteNotificationsRequest(caller=caller))
