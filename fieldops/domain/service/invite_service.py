"""Invite lifecycle domain service.

Owns the invite state machine::

    pending -> accepted   (terminal)
    pending -> revoked    (terminal)
    pending -> expired    (terminal, derived at read time, never stored)

Acceptance touches several records that do not share a transaction. The
invite transition is the commit point: writes before it are either
idempotent (membership upsert, employee link to the same identity) or
compensated (identity creation) when the transition fails.
"""

from collections.abc import Callable
from datetime import datetime, timedelta
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from fieldops.config import Settings
from fieldops.domain.error import (
    DomainError,
    InvalidEmailError,
    InvalidInviteTokenError,
    InviteAlreadyAcceptedError,
    InviteExpiredError,
    InviteNotFoundError,
    InviteRevokedError,
    InviteTransitionConflictError,
    NotFoundError,
    TransientError,
    UnauthenticatedError,
    WeakCredentialError,
    WrongAccountError,
)
from fieldops.domain.model import Employee, Identity, Invite, Membership, Notification
from fieldops.domain.model.common import utcnow
from fieldops.domain.repository import (
    CompanyRepository,
    EmployeeRepository,
    InviteRepository,
    MembershipRepository,
    NotificationRepository,
)
from fieldops.domain.value import (
    CompanyId,
    Email,
    EmployeeId,
    IdentityId,
    InviteId,
    InviteSecret,
    InviteStatus,
    MemberRole,
    MembershipStatus,
    NotificationId,
)
from fieldops.domain.value.common import ValueObject
from fieldops.util.token import hash_secret, issue_secret

from .base import Service
from .identity_provider import IdentityProvider

RESEND_UNAVAILABLE_MESSAGE = (
    "Email delivery is not configured. Copy the invite link and share it manually."
)


class InvitePreview(ValueObject):
    """Read-only data shown on the invite landing page."""

    invite_id: InviteId
    expires_at: datetime
    company_id: CompanyId
    company_name: str | None = None
    company_logo_url: str | None = None
    employee_id: EmployeeId
    employee_first_name: str | None = None
    employee_last_name: str | None = None
    email: str | None = None


class AcceptResult(ValueObject):
    """Outcome of a successful acceptance."""

    employee_id: EmployeeId
    company_id: CompanyId
    identity_id: IdentityId
    role: MemberRole
    # New accounts have no session yet and must log in
    requires_login: bool = False
    # The invite had already been accepted by this identity
    replayed: bool = False


class InviteService(Service):
    """Domain service for the invite-and-membership activation flow."""

    def __init__(
        self,
        invite_repository: InviteRepository,
        employee_repository: EmployeeRepository,
        company_repository: CompanyRepository,
        membership_repository: MembershipRepository,
        notification_repository: NotificationRepository,
        identity_provider: IdentityProvider,
        settings: Settings,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """Initialize invite service.

        Args:
            invite_repository: Invite repository
            employee_repository: Employee repository
            company_repository: Company repository
            membership_repository: Membership repository
            notification_repository: Notification repository
            identity_provider: External identity provider
            settings: Application settings
            clock: Source of the current time
        """
        self.invite_repository = invite_repository
        self.employee_repository = employee_repository
        self.company_repository = company_repository
        self.membership_repository = membership_repository
        self.notification_repository = notification_repository
        self.identity_provider = identity_provider
        self.settings = settings
        self.clock = clock
        self.operation_timeout = settings.invitations.operation_timeout_seconds

    # ------------------------------------------------------------------
    # Administrator operations
    # ------------------------------------------------------------------

    async def issue(
        self,
        company_id: CompanyId,
        employee_id: EmployeeId,
        issuer_id: IdentityId,
        role: MemberRole | str | None = None,
    ) -> tuple[Invite, str]:
        """Issue a new invite for an employee.

        Any pending invite of the employee is revoked in the same store
        transaction.

        Args:
            company_id: Company the employee belongs to
            employee_id: Employee to invite
            issuer_id: Identity issuing the invite
            role: Requested role; defaults to the employee's role, then member

        Returns:
            Tuple of (stored invite, accept link carrying the raw secret)

        Raises:
            NotFoundError: If the employee does not exist in the company
        """
        with logfire.span(
            "invite_service.issue",
            company_id=str(company_id),
            employee_id=str(employee_id),
            issuer_id=str(issuer_id),
        ):
            employee = await self._get_company_employee(company_id, employee_id)
            return await self._issue(employee, issuer_id, MemberRole.normalize(role, employee.role))

    async def regenerate(
        self, company_id: CompanyId, employee_id: EmployeeId, issuer_id: IdentityId
    ) -> tuple[Invite, str]:
        """Replace the employee's invite with a fresh one, keeping its role.

        Returns:
            Tuple of (stored invite, accept link carrying the raw secret)

        Raises:
            NotFoundError: If the employee does not exist in the company
        """
        with logfire.span(
            "invite_service.regenerate",
            company_id=str(company_id),
            employee_id=str(employee_id),
            issuer_id=str(issuer_id),
        ):
            employee = await self._get_company_employee(company_id, employee_id)
            previous = await self._call(
                "invite.find_pending_by_employee",
                self.invite_repository.find_pending_by_employee(employee.id),
            )
            role = MemberRole.normalize(
                previous.role if previous else None, employee.role
            )
            return await self._issue(employee, issuer_id, role)

    async def revoke(
        self, company_id: CompanyId, employee_id: EmployeeId, issuer_id: IdentityId
    ) -> int:
        """Revoke every pending invite of an employee.

        The employee mirror is set to revoked only while the employee has no
        linked identity; once linked, the membership governs access.

        Returns:
            Number of invites revoked

        Raises:
            NotFoundError: If the employee does not exist in the company
        """
        with logfire.span(
            "invite_service.revoke",
            company_id=str(company_id),
            employee_id=str(employee_id),
            issuer_id=str(issuer_id),
        ):
            employee = await self._get_company_employee(company_id, employee_id)
            revoked = await self._call(
                "invite.revoke_pending_for_employee",
                self.invite_repository.revoke_pending_for_employee(
                    employee.id, self.clock()
                ),
            )
            if not employee.is_linked:
                await self._call(
                    "employee.set_invitation_status",
                    self.employee_repository.set_invitation_status(
                        employee.id, InviteStatus.REVOKED
                    ),
                )
            logfire.info(
                "Invites revoked",
                employee_id=str(employee.id),
                revoked=revoked,
                employee_linked=employee.is_linked,
            )
            return revoked

    async def resend_email(
        self, company_id: CompanyId, employee_id: EmployeeId, issuer_id: IdentityId
    ) -> str:
        """Resend the invite email of an employee.

        Outbound mail is not configured, so this only checks that there is
        something to send and tells the administrator to share the link.

        Returns:
            Message for the administrator

        Raises:
            NotFoundError: If the employee does not exist in the company
            InvalidEmailError: If the employee has no email
            InviteNotFoundError: If there is no pending invite to resend
        """
        with logfire.span(
            "invite_service.resend_email",
            company_id=str(company_id),
            employee_id=str(employee_id),
            issuer_id=str(issuer_id),
        ):
            employee = await self._get_company_employee(company_id, employee_id)
            if not employee.email:
                raise InvalidEmailError("Employee has no email")
            invite = await self._call(
                "invite.find_pending_by_employee",
                self.invite_repository.find_pending_by_employee(employee.id),
            )
            if invite is None:
                raise InviteNotFoundError()
            logfire.info("Invite email requested", invite_id=str(invite.id))
            return RESEND_UNAVAILABLE_MESSAGE

    # ------------------------------------------------------------------
    # Invitee operations
    # ------------------------------------------------------------------

    async def validate(self, raw_secret: str | None) -> InvitePreview:
        """Classify an invite without changing anything.

        Safe to call unauthenticated and repeatedly.

        Raises:
            InvalidInviteTokenError: If the secret is malformed
            InviteNotFoundError: If no invite matches
            InviteAlreadyAcceptedError: If the invite was used
            InviteRevokedError: If the invite was revoked
            InviteExpiredError: If the invite is past expiry
        """
        secret = self._parse_secret(raw_secret)
        token_hash = hash_secret(secret)
        with logfire.span("invite_service.validate", hash_prefix=token_hash.prefix):
            invite = await self._find_by_secret(secret)
            employee = await self._find_employee(invite.employee_id)
            self._classify(invite, employee)

            company = await self._call(
                "company.find_by_id",
                self.company_repository.find_by_id(invite.company_id),
            )
            logfire.info("Valid invite found", invite_id=str(invite.id))
            return InvitePreview(
                invite_id=invite.id,
                expires_at=invite.expires_at,
                company_id=invite.company_id,
                company_name=company.name if company else None,
                company_logo_url=company.logo_url if company else None,
                employee_id=invite.employee_id,
                employee_first_name=employee.first_name,
                employee_last_name=employee.last_name,
                email=invite.email or employee.email,
            )

    async def accept(
        self,
        raw_secret: str | None,
        caller: Identity | None,
        supplied_email: str | None = None,
        supplied_password: str | None = None,
    ) -> AcceptResult:
        """Accept an invite from its link.

        With a session the caller's identity is linked; without one a new
        account is created from the supplied email and password.
        """
        secret = self._parse_secret(raw_secret)
        if caller is not None:
            with logfire.span(
                "invite_service.accept",
                hash_prefix=hash_secret(secret).prefix,
                caller_id=str(caller.id),
            ):
                invite = await self._find_by_secret(secret)
                return await self._accept_with_session(invite, caller)

        email = self._parse_email(supplied_email)
        self._check_password(supplied_password)
        with logfire.span(
            "invite_service.accept_new_account", hash_prefix=hash_secret(secret).prefix
        ):
            invite = await self._find_by_secret(secret)
            return await self._accept_new_account(invite, email, supplied_password or "")

    async def accept_by_notification(
        self, notification_id: NotificationId, caller: Identity | None
    ) -> AcceptResult:
        """Accept the invite referenced by one of the caller's notifications.

        Raises:
            UnauthenticatedError: If there is no session
            InviteNotFoundError: If the notification or invite does not exist
        """
        if caller is None:
            raise UnauthenticatedError()
        with logfire.span(
            "invite_service.accept_by_notification",
            notification_id=str(notification_id),
            caller_id=str(caller.id),
        ):
            notification, invite = await self._resolve_notification(
                notification_id, caller
            )
            return await self._accept_with_session(
                invite, caller, notification_id=notification.id
            )

    async def decline_by_notification(
        self, notification_id: NotificationId, caller: Identity | None
    ) -> bool:
        """Decline the invite referenced by one of the caller's notifications.

        Returns:
            True if a pending invite was revoked

        Raises:
            UnauthenticatedError: If there is no session
            InviteNotFoundError: If the notification or invite does not exist
        """
        if caller is None:
            raise UnauthenticatedError()
        with logfire.span(
            "invite_service.decline_by_notification",
            notification_id=str(notification_id),
            caller_id=str(caller.id),
        ):
            notification, invite = await self._resolve_notification(
                notification_id, caller
            )
            declined = False
            if invite.status == InviteStatus.PENDING:
                declined = await self._call(
                    "invite.revoke",
                    self.invite_repository.revoke(invite.id, self.clock()),
                )
                employee = await self._call(
                    "employee.find_by_id",
                    self.employee_repository.find_by_id(invite.employee_id),
                )
                if declined and employee is not None and not employee.is_linked:
                    await self._call(
                        "employee.set_invitation_status",
                        self.employee_repository.set_invitation_status(
                            employee.id, InviteStatus.REVOKED
                        ),
                    )

            await self._call(
                "notification.mark_read",
                self.notification_repository.mark_read(
                    notification.id, caller.id, self.clock()
                ),
            )
            await self._call(
                "notification.delete_all_for_invite",
                self.notification_repository.delete_all_for_invite(invite.id, caller.id),
            )
            logfire.info("Invite declined", invite_id=str(invite.id), declined=declined)
            return declined

    async def set_invite_email(self, raw_secret: str | None, supplied_email: str | None) -> None:
        """Record the invitee's email on an invite whose employee has none.

        An employee that already has an email is left unchanged.
        """
        secret = self._parse_secret(raw_secret)
        email = self._parse_email(supplied_email)
        with logfire.span(
            "invite_service.set_invite_email", hash_prefix=hash_secret(secret).prefix
        ):
            invite = await self._find_by_secret(secret)
            employee = await self._find_employee(invite.employee_id)
            self._classify(invite, employee)
            if employee.email:
                return

            await self._call(
                "employee.set_email",
                self.employee_repository.set_email(employee.id, email.root),
            )
            await self._call(
                "invite.set_email", self.invite_repository.set_email(invite.id, email.root)
            )
            logfire.info("Invite email recorded", invite_id=str(invite.id))

    # ------------------------------------------------------------------
    # Acceptance flows
    # ------------------------------------------------------------------

    async def _accept_with_session(
        self,
        invite: Invite,
        caller: Identity,
        notification_id: NotificationId | None = None,
    ) -> AcceptResult:
        employee = await self._find_employee(invite.employee_id)
        role = MemberRole.normalize(invite.role, employee.role)

        if (
            invite.status == InviteStatus.ACCEPTED
            and invite.accepted_by == caller.id
            and employee.identity_id in (None, caller.id)
        ):
            # Replay by the identity that already accepted
            logfire.info("Invite already accepted by caller", invite_id=str(invite.id))
            await self._upsert_membership(invite.company_id, caller.id, role)
            await self._reconcile(invite, caller.id, notification_id)
            return AcceptResult(
                employee_id=employee.id,
                company_id=invite.company_id,
                identity_id=caller.id,
                role=role,
                replayed=True,
            )

        self._classify(invite, employee)

        canonical = self._canonical_email(invite, employee, caller)
        if not canonical.matches(caller.email):
            logfire.warn(
                "Invite accepted with wrong account",
                invite_id=str(invite.id),
                caller_id=str(caller.id),
            )
            raise WrongAccountError(canonical.root)

        if employee.identity_id is not None and employee.identity_id != caller.id:
            raise InviteAlreadyAcceptedError()

        linked = await self._call(
            "employee.link_identity",
            self.employee_repository.link_identity(
                employee.id, caller.id, None if employee.email else canonical.root
            ),
        )
        if linked is None:
            await self._raise_link_failure(employee.id)

        await self._upsert_membership(invite.company_id, caller.id, role)

        try:
            accepted = await self._call(
                "invite.transition_to_accepted",
                self.invite_repository.transition_to_accepted(
                    invite.id, caller.id, self.clock()
                ),
            )
        except InviteTransitionConflictError as e:
            # Lost a race; the winner's writes match ours
            logfire.warn(
                "Invite acceptance conflict",
                invite_id=str(invite.id),
                status=e.status.value,
            )
            if e.status == InviteStatus.ACCEPTED:
                raise InviteAlreadyAcceptedError() from e
            raise InviteRevokedError() from e

        await self._reconcile(accepted, caller.id, notification_id)
        logfire.info(
            "Invite accepted",
            invite_id=str(invite.id),
            identity_id=str(caller.id),
            role=role.value,
        )
        return AcceptResult(
            employee_id=employee.id,
            company_id=invite.company_id,
            identity_id=caller.id,
            role=role,
        )

    async def _accept_new_account(
        self, invite: Invite, email: Email, password: str
    ) -> AcceptResult:
        employee = await self._find_employee(invite.employee_id)
        self._classify(invite, employee)
        if employee.is_linked:
            raise InviteAlreadyAcceptedError()

        role = MemberRole.normalize(invite.role, employee.role)
        identity = await self._call(
            "identity.create_identity",
            self.identity_provider.create_identity(email, password),
        )
        logfire.info(
            "Identity created for invite",
            invite_id=str(invite.id),
            identity_id=str(identity.id),
        )

        try:
            linked = await self._call(
                "employee.link_identity",
                self.employee_repository.link_identity(
                    employee.id, identity.id, None if employee.email else email.root
                ),
            )
            if linked is None:
                await self._raise_link_failure(employee.id)
        except DomainError as error:
            await self._compensate(error, identity.id)
            raise

        try:
            await self._call(
                "invite.transition_to_accepted",
                self.invite_repository.transition_to_accepted(
                    invite.id, identity.id, self.clock()
                ),
            )
        except InviteTransitionConflictError as error:
            await self._compensate(error, identity.id, unlink=employee.id)
            if error.status == InviteStatus.ACCEPTED:
                raise InviteAlreadyAcceptedError() from error
            raise InviteRevokedError() from error
        except DomainError as error:
            await self._compensate(error, identity.id, unlink=employee.id)
            raise

        await self._upsert_membership(invite.company_id, identity.id, role)
        await self._reconcile(invite, identity.id, None)
        logfire.info(
            "Invite accepted with new account",
            invite_id=str(invite.id),
            identity_id=str(identity.id),
            role=role.value,
        )
        return AcceptResult(
            employee_id=employee.id,
            company_id=invite.company_id,
            identity_id=identity.id,
            role=role,
            requires_login=True,
        )

    async def _compensate(
        self,
        error: Exception,
        identity_id: IdentityId,
        unlink: EmployeeId | None = None,
    ) -> None:
        """Undo a partially completed new-account acceptance.

        Raises:
            TransientError: If compensation itself fails; chains the original
                error so operators can repair the records
        """
        logfire.warn(
            "Compensating failed acceptance",
            identity_id=str(identity_id),
            unlink=str(unlink) if unlink else None,
            error=str(error),
        )
        try:
            await self._call(
                "identity.delete_identity",
                self.identity_provider.delete_identity(identity_id),
            )
            if unlink is not None:
                await self._call(
                    "employee.unlink_identity",
                    self.employee_repository.unlink_identity(unlink),
                )
        except DomainError as compensation_error:
            logfire.error(
                "Compensation failed",
                identity_id=str(identity_id),
                error=str(compensation_error),
                original_error=str(error),
            )
            raise TransientError(
                f"Acceptance failed and could not be rolled back: {error}", cause=error
            ) from compensation_error

    async def _upsert_membership(
        self, company_id: CompanyId, identity_id: IdentityId, role: MemberRole
    ) -> Membership:
        now = self.clock()
        return await self._call(
            "membership.upsert",
            self.membership_repository.upsert(
                Membership(
                    company_id=company_id,
                    identity_id=identity_id,
                    role=role,
                    status=MembershipStatus.ACTIVE,
                    created_at=now,
                    updated_at=now,
                )
            ),
        )

    async def _reconcile(
        self,
        invite: Invite,
        identity_id: IdentityId,
        notification_id: NotificationId | None,
    ) -> None:
        """Clean up notifications and sibling invites after acceptance."""
        now = self.clock()
        if notification_id is not None:
            await self._call(
                "notification.mark_read",
                self.notification_repository.mark_read(notification_id, identity_id, now),
            )
        deleted = await self._call(
            "notification.delete_all_for_invite",
            self.notification_repository.delete_all_for_invite(invite.id, identity_id),
        )
        revoked = await self._call(
            "invite.revoke_pending_for_employee",
            self.invite_repository.revoke_pending_for_employee(
                invite.employee_id, now, exclude_invite_id=invite.id
            ),
        )
        logfire.info(
            "Acceptance reconciled",
            invite_id=str(invite.id),
            notifications_deleted=deleted,
            sibling_invites_revoked=revoked,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _issue(
        self, employee: Employee, issuer_id: IdentityId, role: MemberRole
    ) -> tuple[Invite, str]:
        secret, token_hash = issue_secret()
        now = self.clock()
        invite = Invite(
            id=InviteId(uuid4()),
            company_id=employee.company_id,
            employee_id=employee.id,
            role=role,
            email=employee.email,
            token_hash=token_hash,
            status=InviteStatus.PENDING,
            created_by=issuer_id,
            created_at=now,
            expires_at=now + timedelta(days=self.settings.invitations.expiry_days),
        )
        saved = await self._call("invite.issue", self.invite_repository.issue(invite))
        await self._call(
            "employee.set_invitation_status",
            self.employee_repository.set_invitation_status(
                employee.id, InviteStatus.PENDING
            ),
        )
        await self._notify_existing_identity(saved)
        logfire.info(
            "Invite issued",
            invite_id=str(saved.id),
            employee_id=str(employee.id),
            role=role.value,
            hash_prefix=token_hash.prefix,
        )
        return saved, self.settings.invite_link(secret.root)

    async def _notify_existing_identity(self, invite: Invite) -> None:
        """Put the invite in the inbox of an identity that already owns its email."""
        if not invite.email:
            return
        try:
            email = Email(invite.email)
        except PydanticValidationError:
            return
        try:
            identity = await self._call(
                "identity.find_identity_by_email",
                self.identity_provider.find_identity_by_email(email),
            )
            if identity is None:
                return
            await self._call(
                "notification.save",
                self.notification_repository.save(
                    Notification(
                        id=NotificationId(uuid4()),
                        recipient_id=identity.id,
                        invite_id=invite.id,
                        company_id=invite.company_id,
                        created_at=self.clock(),
                    )
                ),
            )
            logfire.info(
                "Invite notification created",
                invite_id=str(invite.id),
                recipient_id=str(identity.id),
            )
        except TransientError as e:
            # The link still works without the inbox entry
            logfire.warn(
                "Invite notification skipped", invite_id=str(invite.id), error=str(e)
            )

    def _classify(self, invite: Invite, employee: Employee) -> None:
        """Raise the outcome of an invite that cannot be accepted.

        Precedence: accepted, then revoked, then expired.
        """
        if invite.status == InviteStatus.ACCEPTED:
            raise InviteAlreadyAcceptedError()
        if invite.status == InviteStatus.REVOKED:
            if employee.is_linked:
                raise InviteAlreadyAcceptedError()
            raise InviteRevokedError()
        if invite.is_expired(self.clock()):
            raise InviteExpiredError()

    def _canonical_email(
        self, invite: Invite, employee: Employee, caller: Identity
    ) -> Email:
        candidate = invite.email or employee.email or caller.email.root
        return self._parse_email(candidate)

    def _parse_secret(self, raw_secret: str | None) -> InviteSecret:
        value = (raw_secret or "").strip()
        if len(value) < self.settings.invitations.min_token_length:
            raise InvalidInviteTokenError()
        try:
            return InviteSecret(value)
        except PydanticValidationError as e:
            raise InvalidInviteTokenError() from e

    @staticmethod
    def _parse_email(value: str | None) -> Email:
        try:
            return Email((value or "").strip())
        except PydanticValidationError as e:
            raise InvalidEmailError() from e

    def _check_password(self, password: str | None) -> None:
        min_length = self.settings.invitations.min_password_length
        if password is None or len(password) < min_length:
            raise WeakCredentialError(min_length)

    async def _find_by_secret(self, secret: InviteSecret) -> Invite:
        invite = await self._call(
            "invite.find_by_token_hash",
            self.invite_repository.find_by_token_hash(hash_secret(secret)),
        )
        if invite is None:
            logfire.warn("Invite not found", hash_prefix=hash_secret(secret).prefix)
            raise InviteNotFoundError()
        return invite

    async def _find_employee(self, employee_id: EmployeeId) -> Employee:
        employee = await self._call(
            "employee.find_by_id", self.employee_repository.find_by_id(employee_id)
        )
        if employee is None:
            # Invite without its employee is unusable
            raise InviteNotFoundError()
        return employee

    async def _get_company_employee(
        self, company_id: CompanyId, employee_id: EmployeeId
    ) -> Employee:
        employee = await self._call(
            "employee.find_by_id", self.employee_repository.find_by_id(employee_id)
        )
        if employee is None or employee.company_id != company_id:
            raise NotFoundError("Employee", str(employee_id))
        return employee

    async def _raise_link_failure(self, employee_id: EmployeeId) -> None:
        """Explain why linking an employee updated nothing."""
        current = await self._call(
            "employee.find_by_id", self.employee_repository.find_by_id(employee_id)
        )
        if current is None:
            raise InviteNotFoundError()
        raise InviteAlreadyAcceptedError()

    async def _resolve_notification(
        self, notification_id: NotificationId, caller: Identity
    ) -> tuple[Notification, Invite]:
        notification = await self._call(
            "notification.find_for_recipient",
            self.notification_repository.find_for_recipient(notification_id, caller.id),
        )
        if notification is None:
            raise InviteNotFoundError()
        invite = await self._call(
            "invite.find_by_id", self.invite_repository.find_by_id(notification.invite_id)
        )
        if invite is None:
            raise InviteNotFoundError()
        return notification, invite


__all__ = [
    "AcceptResult",
    "InvitePreview",
    "InviteService",
]
