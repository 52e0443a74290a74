"""Tests for the Invite entity."""

from datetime import timedelta

from fieldops.domain.value import InviteStatus
from tests.conftest import make_company, make_employee, make_invite


class TestInviteExpiry:
    """Expiry is derived from expires_at at read time."""

    def test_not_expired_at_exact_expiry(self):
        invite, _ = make_invite(make_employee(make_company()))

        assert not invite.is_expired(invite.expires_at)
        assert invite.is_acceptable(invite.expires_at)

    def test_expired_just_after_expiry(self):
        invite, _ = make_invite(make_employee(make_company()))
        later = invite.expires_at + timedelta(microseconds=1)

        assert invite.is_expired(later)
        assert not invite.is_acceptable(later)

    def test_terminal_invites_never_expire(self):
        invite, _ = make_invite(make_employee(make_company()))
        revoked = invite.model_copy(update={"status": InviteStatus.REVOKED})
        later = invite.expires_at + timedelta(days=30)

        assert not revoked.is_expired(later)
        assert not revoked.is_acceptable(invite.created_at)
